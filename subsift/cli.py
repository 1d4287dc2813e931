"""Command-line interface for SUBSIFT."""

import argparse
import sys
import logging
from typing import List, Optional

from subsift import __version__
from subsift.core.discovery_manager import DiscoveryManager
from subsift.core.exceptions import ConfigurationError, ValidationError
from subsift.core.interfaces import Result
from subsift.utils.dns_utils import DNSUtils
from subsift.utils.error_handler import ErrorHandler
from subsift.utils.formatters import write_output
from subsift.utils.http_utils import DEFAULT_TIMEOUT

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1


class CLI:
    """Command-line interface for SUBSIFT."""

    def __init__(self):
        self.parser = self._create_parser()
        self.logger = logging.getLogger('subsift.cli')

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser with all options.

        Returns:
            Configured argument parser
        """
        parser = argparse.ArgumentParser(
            prog='subsift',
            description='SUBSIFT - passive subdomain discovery from public intelligence sources',
            epilog='Example: subsift example.com --sources crt.sh,alienvault'
        )

        parser.add_argument(
            'domain',
            nargs='?',
            help='Target domain (prompted for when omitted)'
        )

        parser.add_argument(
            '--sources',
            help=f"Comma-separated list of sources to query "
                 f"({', '.join(DiscoveryManager.SOURCES)}; default: all)",
            default=None
        )

        parser.add_argument(
            '--timeout',
            type=float,
            default=DEFAULT_TIMEOUT,
            help=f'Per-request timeout in seconds (default: {DEFAULT_TIMEOUT})'
        )

        parser.add_argument(
            '--concurrency',
            type=int,
            default=len(DiscoveryManager.SOURCES),
            help='Number of sources queried in parallel, 1 for sequential '
                 f'(default: {len(DiscoveryManager.SOURCES)})'
        )

        parser.add_argument(
            '--output',
            choices=['text', 'json', 'list'],
            default='text',
            help='Output format (default: text)'
        )

        parser.add_argument(
            '--output-file',
            help='Write output to file instead of stdout'
        )

        parser.add_argument(
            '--resolve',
            action='store_true',
            help='Resolve discovered subdomains to IP addresses'
        )

        parser.add_argument(
            '-v', '--verbose',
            action='store_true',
            help='Enable verbose output'
        )

        parser.add_argument(
            '-q', '--quiet',
            action='store_true',
            help='Suppress the per-source summary and informational logging'
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'%(prog)s {__version__}'
        )

        return parser

    def parse_arguments(self, args: Optional[List[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments.

        Args:
            args: Command-line arguments (None for sys.argv)

        Returns:
            Parsed arguments namespace
        """
        parsed_args = self.parser.parse_args(args)

        if parsed_args.sources:
            parsed_args.sources = [s.strip() for s in parsed_args.sources.split(',') if s.strip()]

        if parsed_args.verbose and parsed_args.quiet:
            self.parser.error("Cannot specify both --verbose and --quiet")

        return parsed_args

    def read_domain(self, args: argparse.Namespace) -> str:
        """Return the domain from the arguments, prompting when absent.

        Raises:
            ValidationError: If no domain was entered
        """
        domain = args.domain
        if domain is None:
            try:
                domain = input("Enter domain: ")
            except EOFError:
                domain = ''
        return DNSUtils.clean_input(domain)

    def display_summary(self, result: Result) -> None:
        """Print the per-source summary to stderr."""
        print("", file=sys.stderr)
        for source in result.sources:
            tag = "[+]" if source.success else "[-]"
            print(f"{tag} {source.summary_line()}", file=sys.stderr)
        print(f"[*] Total unique subdomains: {len(result.subdomains)}", file=sys.stderr)


def main(args: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns:
        0 when subdomains were found, 1 when none were. Input errors, bad
        options and output failures exit through SystemExit with code 2.
    """
    cli = CLI()
    parsed = cli.parse_arguments(args)
    error_handler = ErrorHandler(verbose=parsed.verbose, quiet=parsed.quiet)

    try:
        domain = cli.read_domain(parsed)
        cli.logger.debug(f"Target domain: {domain}")
        manager = DiscoveryManager(
            domain,
            sources=parsed.sources,
            concurrency=parsed.concurrency,
            timeout=parsed.timeout,
            resolve=parsed.resolve,
            verbose=parsed.verbose,
        )
    except (ValidationError, ConfigurationError) as e:
        error_handler.handle_error('input', str(e))

    try:
        result = manager.discover()
    except Exception as e:
        error_handler.handle_error('unexpected', "An unexpected error occurred", e)

    if not parsed.quiet:
        cli.display_summary(result)

    try:
        write_output(result, parsed.output, parsed.output_file)
    except OSError as e:
        error_handler.handle_error('system', f"Cannot write output: {e}", e)

    if not result.found:
        print(f"No subdomains found for {domain}", file=sys.stderr)
        return EXIT_NOT_FOUND
    return EXIT_FOUND


if __name__ == '__main__':
    sys.exit(main())
