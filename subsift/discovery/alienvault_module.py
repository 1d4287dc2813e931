"""AlienVault OTX module for SUBSIFT.

Reads the passive DNS history OTX keeps for the target domain. The endpoint
is paginated without telling the client how many pages exist, so the module
keeps asking for the next page while the previous one came back full.
"""

import logging
from typing import List

from subsift.core.interfaces import DiscoveryModule
from subsift.core.exceptions import APIError
from subsift.core.normalizer import normalize
from subsift.utils.http_utils import HTTPUtils, DEFAULT_TIMEOUT

# Records OTX returns per passive_dns page. A page shorter than this is taken
# to be the last one; re-check against the live API if results look truncated.
PAGE_SIZE = 20

# Upper bound on pages fetched in one run.
MAX_PAGES = 50


class AlienVaultModule(DiscoveryModule):
    """Discover subdomains from AlienVault OTX passive DNS records.

    Attributes:
        domain: Target domain to discover subdomains for
        timeout: HTTP request timeout in seconds, applied to every page
        page_size: Record count that signals another page may follow
        max_pages: Hard limit on the number of pages requested
    """

    source_name = 'alienvault'

    def __init__(self, domain: str, **kwargs):
        """Initialize AlienVault module.

        Args:
            domain: Target domain to discover subdomains for
            **kwargs: Additional configuration options
                - timeout: HTTP request timeout in seconds (default: 25)
                - page_size: Full page size (default: PAGE_SIZE)
                - max_pages: Page ceiling (default: MAX_PAGES)
        """
        super().__init__(domain, **kwargs)
        self.timeout = kwargs.get('timeout', DEFAULT_TIMEOUT)
        self.page_size = kwargs.get('page_size', PAGE_SIZE)
        self.max_pages = kwargs.get('max_pages', MAX_PAGES)
        self.http_utils = HTTPUtils(timeout=self.timeout)
        self.logger = logging.getLogger('subsift.discovery.alienvault')

        self.api_url = f"https://otx.alienvault.com/api/v1/indicators/domain/{domain}/passive_dns"

    def discover(self) -> List[str]:
        """Execute AlienVault discovery.

        Returns:
            Sorted list of unique subdomains

        Raises:
            NetworkError: If any page request fails or times out
            APIError: If no page contained any record
        """
        self.logger.info(f"Starting AlienVault OTX discovery for {self.domain}")

        try:
            hostnames = self._collect_hostnames()
        finally:
            self.http_utils.close()

        if not hostnames:
            raise APIError("Empty response")

        result = normalize(hostnames, self.domain)
        self.logger.info(f"AlienVault OTX discovered {len(result)} subdomains")
        return result

    def _collect_hostnames(self) -> List[str]:
        """Walk the passive DNS pages and gather every record's hostname."""
        hostnames = []
        page = 1

        while page <= self.max_pages:
            records = self._fetch_page(page)
            if not records:
                break

            hostnames.extend(
                record.get('hostname')
                for record in records
                if isinstance(record, dict)
            )
            self.logger.debug(f"OTX page {page}: {len(records)} records")

            if len(records) < self.page_size:
                break
            page += 1
        else:
            self.logger.warning(f"Stopped after {self.max_pages} OTX pages")

        return hostnames

    def _fetch_page(self, page: int) -> list:
        response = self.http_utils.make_request(
            url=self.api_url,
            method='GET',
            params={'page': page}
        )

        try:
            data = response.json()
        except ValueError as e:
            raise APIError("Invalid response") from e

        if not isinstance(data, dict):
            return []
        return data.get('passive_dns') or []
