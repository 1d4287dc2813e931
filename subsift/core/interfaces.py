"""Base interfaces and data models for SUBSIFT components.

This module defines the contract every discovery source implements, the
per-source result record, the overall run result, and the output formatter
interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional


class Outcome(Enum):
    """Overall outcome of a discovery run."""

    FOUND = 'found'
    NOT_FOUND = 'not-found'


@dataclass
class SourceResult:
    """Outcome of querying a single discovery source.

    A source either succeeded with a (possibly empty) list of clean
    subdomains, or failed with an error message. Exactly one of these
    records exists per source per run.

    Attributes:
        name: Source name as declared by the discovery manager
        subdomains: Sorted, unique subdomains contributed by the source
        error: Failure message, None when the source succeeded
    """
    name: str
    subdomains: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def ok(cls, name: str, subdomains: List[str]) -> 'SourceResult':
        return cls(name=name, subdomains=list(subdomains))

    @classmethod
    def failed(cls, name: str, message: str) -> 'SourceResult':
        return cls(name=name, error=message or 'Unknown error')

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def count(self) -> int:
        return len(self.subdomains)

    def summary_line(self) -> str:
        """Render the one-line summary shown to the user."""
        if self.success:
            return f"{self.name}: {self.count}"
        return f"{self.name}: {self.error}"


@dataclass
class Result:
    """Data model representing the complete discovery results.

    Attributes:
        domain: The domain that was investigated
        sources: One SourceResult per source, in declaration order
        subdomains: Merged, deduplicated and sorted subdomains
        outcome: FOUND when at least one subdomain was discovered
        resolved: Subdomain to A record mapping, filled only on request
    """
    domain: str
    sources: List[SourceResult] = field(default_factory=list)
    subdomains: List[str] = field(default_factory=list)
    outcome: Outcome = Outcome.NOT_FOUND
    resolved: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def summary(self) -> List[str]:
        return [source.summary_line() for source in self.sources]

    @property
    def found(self) -> bool:
        return self.outcome is Outcome.FOUND


class DiscoveryModule(ABC):
    """Base interface for all subdomain discovery sources.

    Each module knows how to call one external service, decide whether the
    answer is usable, and turn it into clean subdomains. Modules signal
    failure by raising; they never return an error value.

    Attributes:
        domain: The target domain to discover subdomains for
        config: Dictionary of additional configuration options
    """

    source_name = ''

    def __init__(self, domain: str, **kwargs):
        """Initialize the discovery module.

        Args:
            domain: The target domain to discover subdomains for
            **kwargs: Additional configuration options specific to the source
        """
        self.domain = domain
        self.config = kwargs

    @abstractmethod
    def discover(self) -> List[str]:
        """Query the source and return its clean subdomains.

        Returns:
            Sorted list of unique subdomains containing the target domain

        Raises:
            APIError: If the source answered with an error or no data
            NetworkError: If the request itself failed
        """
        pass

    @property
    def name(self) -> str:
        """Return the name of this discovery source.

        Falls back to the class name without the ``Module`` suffix when the
        subclass does not declare ``source_name``.
        """
        return self.source_name or self.__class__.__name__.replace('Module', '')


class OutputFormatter(ABC):
    """Base interface for output formatters."""

    @abstractmethod
    def format(self, result: Result) -> str:
        """Format the result for output.

        Args:
            result: The discovery result to format

        Returns:
            Formatted string representation in the specific output format
        """
        pass
