"""Discovery manager for orchestrating the subdomain sources."""

import concurrent.futures
import logging
from typing import Dict, List, Optional, Sequence, Type

from subsift.core.interfaces import DiscoveryModule, Outcome, Result, SourceResult
from subsift.core.exceptions import ConfigurationError, DiscoveryError
from subsift.core.normalizer import merge
from subsift.discovery.certificate_transparency import CertificateTransparencyModule
from subsift.discovery.hackertarget_module import HackerTargetModule
from subsift.discovery.alienvault_module import AlienVaultModule
from subsift.utils.dns_utils import DNSUtils
from subsift.utils.http_utils import DEFAULT_TIMEOUT
from subsift.utils.progress import progress_bar


class DiscoveryManager:
    """Runs every selected source once and combines their answers.

    A failing source never aborts the run: its exception is recorded as that
    source's failure and the other sources are unaffected. Results are kept
    in declaration order whatever order the sources finish in.
    """

    # Declaration order; also the order of the summary.
    SOURCES: Dict[str, Type[DiscoveryModule]] = {
        'crt.sh': CertificateTransparencyModule,
        'hackertarget': HackerTargetModule,
        'alienvault': AlienVaultModule,
    }

    def __init__(self, domain: str, sources: Optional[Sequence[str]] = None,
                 concurrency: int = 1, timeout: float = DEFAULT_TIMEOUT,
                 resolve: bool = False, verbose: bool = False, **module_options):
        """Initialize the discovery manager.

        Args:
            domain: Target domain to discover subdomains for
            sources: Source names to use (None for all)
            concurrency: Number of sources queried in parallel, 1 for sequential
            timeout: Per-request timeout in seconds
            resolve: Resolve discovered subdomains to A records
            verbose: Show a progress bar
            **module_options: Extra options handed to every source module

        Raises:
            ConfigurationError: If a source name is unknown or a limit is not positive
        """
        if concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1")
        if timeout <= 0:
            raise ConfigurationError("Timeout must be positive")

        self.domain = domain
        self.sources = self._select_sources(sources)
        self.concurrency = concurrency
        self.timeout = timeout
        self.resolve = resolve
        self.verbose = verbose
        self.module_options = module_options
        self.modules: List[DiscoveryModule] = []
        self.logger = logging.getLogger('subsift.discovery_manager')

    def _select_sources(self, sources: Optional[Sequence[str]]) -> List[str]:
        if not sources:
            return list(self.SOURCES)

        unknown = [name for name in sources if name not in self.SOURCES]
        if unknown:
            raise ConfigurationError(
                f"Unknown discovery source(s): {', '.join(unknown)}. "
                f"Available: {', '.join(self.SOURCES)}")

        return [name for name in self.SOURCES if name in sources]

    def register_module(self, name: str, module_class: Type[DiscoveryModule], **kwargs) -> None:
        """Instantiate a source module and append it to the run."""
        module = module_class(self.domain, timeout=self.timeout, **kwargs)
        module.source_name = name
        self.modules.append(module)

    def load_modules(self) -> None:
        """Instantiate the selected source modules in declaration order."""
        self.modules = []
        for name in self.sources:
            self.register_module(name, self.SOURCES[name], **self.module_options)

    def discover(self) -> Result:
        """Query every source and build the combined result.

        Returns:
            Result with one SourceResult per source, the merged subdomains
            and the overall outcome
        """
        if not self.modules:
            self.load_modules()

        sources = self._execute(self.modules)

        subdomains = merge(*(source.subdomains for source in sources if source.success))
        result = Result(
            domain=self.domain,
            sources=sources,
            subdomains=subdomains,
            outcome=Outcome.FOUND if subdomains else Outcome.NOT_FOUND,
        )

        failed = [source.name for source in sources if not source.success]
        if failed:
            self.logger.warning(f"Some discovery sources failed: {', '.join(failed)}")
        self.logger.info(f"Discovered {len(subdomains)} unique subdomains for {self.domain}")

        if self.resolve and subdomains:
            self._resolve_results(result)

        return result

    def _execute(self, modules: List[DiscoveryModule]) -> List[SourceResult]:
        """Run the modules, sequentially or on a thread pool.

        Each result lands in the slot of its module's index.
        """
        results: List[Optional[SourceResult]] = [None] * len(modules)

        with progress_bar(total=len(modules), desc="Querying sources",
                          disable=not self.verbose, unit="source") as progress:
            if self.concurrency <= 1 or len(modules) <= 1:
                for index, module in enumerate(modules):
                    results[index] = self._execute_module(module)
                    progress.set_postfix(module.name)
                    progress.update(1)
            else:
                workers = min(self.concurrency, len(modules))
                with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
                    future_to_index = {
                        executor.submit(self._execute_module, module): index
                        for index, module in enumerate(modules)
                    }
                    for future in concurrent.futures.as_completed(future_to_index):
                        index = future_to_index[future]
                        results[index] = future.result()
                        progress.set_postfix(modules[index].name)
                        progress.update(1)

        return results

    def _execute_module(self, module: DiscoveryModule) -> SourceResult:
        """Run one module and capture its outcome.

        Never raises: any exception becomes a failed SourceResult.
        """
        try:
            subdomains = self._run_module(module)
        except DiscoveryError as e:
            self.logger.debug(f"{e.source} failure details", exc_info=e.__cause__)
            return SourceResult.failed(e.source, str(e))

        self.logger.info(f"Source {module.name} discovered {len(subdomains)} subdomains")
        return SourceResult.ok(module.name, subdomains)

    def _run_module(self, module: DiscoveryModule) -> List[str]:
        """Run a single source module.

        Raises:
            DiscoveryError: If the module raised anything, chained to the original
        """
        try:
            self.logger.info(f"Starting discovery with source: {module.name}")
            return module.discover()
        except Exception as e:
            self.logger.error(f"Discovery source {module.name} failed: {e}")
            raise DiscoveryError(module.name, str(e)) from e

    def _resolve_results(self, result: Result) -> None:
        self.logger.info("Resolving discovered subdomains")
        dns_utils = DNSUtils(max_workers=max(self.concurrency, 10))
        result.resolved = dns_utils.resolve_many(result.subdomains)


def run(domain: str, **kwargs) -> Result:
    """Discover subdomains of ``domain`` with a freshly configured manager.

    Keyword arguments are those of DiscoveryManager.
    """
    return DiscoveryManager(domain, **kwargs).discover()
