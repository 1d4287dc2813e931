"""HackerTarget module for SUBSIFT.

HackerTarget's host search answers with plain text, one ``hostname,ip`` pair
per line. Problems such as an exhausted free quota are reported as ordinary
text with HTTP 200, so the body has to be inspected to tell them apart from
results. The sentinels are vendor-specific and may change; the check is a
replaceable predicate.
"""

import logging
from typing import Callable, Iterable, List

from subsift.core.interfaces import DiscoveryModule
from subsift.core.exceptions import APIError
from subsift.core.normalizer import normalize
from subsift.utils.http_utils import HTTPUtils, DEFAULT_TIMEOUT

DEFAULT_ERROR_MARKERS = ('error', 'API count')


def first_line(text: str) -> str:
    for line in text.splitlines():
        if line.strip():
            return line.strip()
    return ''


def marker_predicate(markers: Iterable[str]) -> Callable[[str], bool]:
    """Build a predicate that flags bodies whose first line holds a marker.

    Result lines are ``hostname,ip`` pairs, so a first line with a comma is
    data and never an error message, whatever hostnames it names. Matching
    is case-insensitive.
    """
    lowered = [marker.lower() for marker in markers]

    def is_error_body(text: str) -> bool:
        line = first_line(text)
        if not line or ',' in line:
            return False
        line = line.lower()
        return any(marker in line for marker in lowered)

    return is_error_body


class HackerTargetModule(DiscoveryModule):
    """Discover subdomains using the HackerTarget host search."""

    source_name = 'hackertarget'

    def __init__(self, domain: str, **kwargs):
        """Initialize HackerTarget module.

        Args:
            domain: Target domain to discover subdomains for
            **kwargs: Additional configuration options
                - timeout: HTTP request timeout in seconds (default: 25)
                - error_markers: Substrings that mark a soft error body
                - error_predicate: Callable replacing the marker check
        """
        super().__init__(domain, **kwargs)
        self.timeout = kwargs.get('timeout', DEFAULT_TIMEOUT)
        self.error_markers = tuple(kwargs.get('error_markers', DEFAULT_ERROR_MARKERS))
        self.is_error_body = kwargs.get('error_predicate') or marker_predicate(self.error_markers)
        self.http_utils = HTTPUtils(timeout=self.timeout)
        self.logger = logging.getLogger('subsift.discovery.hackertarget')

        self.api_url = "https://api.hackertarget.com/hostsearch/"

    def discover(self) -> List[str]:
        """Execute HackerTarget discovery.

        Returns:
            Sorted list of unique subdomains

        Raises:
            NetworkError: If the request fails or times out
            APIError: If the body carries an error message or no lines
        """
        self.logger.info(f"Starting HackerTarget discovery for {self.domain}")

        try:
            content = self._query_hackertarget()
        finally:
            self.http_utils.close()

        if self.is_error_body(content):
            message = first_line(content) or "Error response"
            self.logger.warning(f"HackerTarget API error: {message}")
            raise APIError(message)

        lines = [line.strip() for line in content.splitlines() if line.strip()]
        if not lines:
            raise APIError("Empty response")

        # hostname,ip
        hosts = [line.split(',')[0] for line in lines]
        result = normalize(hosts, self.domain)

        self.logger.info(f"HackerTarget discovered {len(result)} subdomains")
        return result

    def _query_hackertarget(self) -> str:
        response = self.http_utils.make_request(
            url=self.api_url,
            method='GET',
            params={'q': self.domain}
        )
        return response.text
