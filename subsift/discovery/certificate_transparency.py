"""Certificate Transparency module for SUBSIFT.

This module implements subdomain discovery using Certificate Transparency logs.
It queries the crt.sh service for certificates issued for any name under the
target domain and extracts the names from each certificate.

Certificate Transparency (CT) is a system for logging and monitoring the issuance of
SSL/TLS certificates. A single certificate may cover many names (SAN entries), which
crt.sh returns as one newline-separated ``name_value`` field per record.
"""

import logging
from typing import List

from subsift.core.interfaces import DiscoveryModule
from subsift.core.exceptions import APIError
from subsift.core.normalizer import normalize
from subsift.utils.http_utils import HTTPUtils, DEFAULT_TIMEOUT


class CertificateTransparencyModule(DiscoveryModule):
    """Discover subdomains using Certificate Transparency logs.

    Attributes:
        domain: Target domain to discover subdomains for
        timeout: HTTP request timeout in seconds
        http_utils: HTTP utility for making requests
        crt_sh_url: URL of the crt.sh service
    """

    source_name = 'crt.sh'

    def __init__(self, domain: str, **kwargs):
        """Initialize Certificate Transparency module.

        Args:
            domain: Target domain to discover subdomains for
            **kwargs: Additional configuration options
                - timeout: HTTP request timeout in seconds (default: 25)
        """
        super().__init__(domain, **kwargs)
        self.timeout = kwargs.get('timeout', DEFAULT_TIMEOUT)
        self.http_utils = HTTPUtils(timeout=self.timeout)
        self.logger = logging.getLogger('subsift.discovery.crtsh')

        self.crt_sh_url = "https://crt.sh/"

    def discover(self) -> List[str]:
        """Execute Certificate Transparency discovery.

        Returns:
            Sorted list of unique subdomains

        Raises:
            NetworkError: If the request fails or times out
            APIError: If crt.sh returns no records or an unreadable body
        """
        self.logger.info(f"Starting Certificate Transparency discovery for {self.domain}")

        try:
            certificates = self._query_crt_sh()
        finally:
            self.http_utils.close()

        if not certificates:
            self.logger.warning("crt.sh returned no certificates")
            raise APIError("Empty response")

        names = [
            cert.get('name_value')
            for cert in certificates
            if isinstance(cert, dict)
        ]
        result = normalize(names, self.domain)

        self.logger.info(f"Certificate Transparency discovered {len(result)} subdomains")
        return result

    def _query_crt_sh(self) -> list:
        """Fetch the certificate records for the target domain.

        Returns:
            List of certificate records as decoded from JSON

        Raises:
            APIError: If the body is not a JSON array
        """
        params = {
            'q': f'%.{self.domain}',
            'output': 'json'
        }

        response = self.http_utils.make_request(
            url=self.crt_sh_url,
            method='GET',
            params=params
        )

        try:
            certificates = response.json()
        except ValueError as e:
            self.logger.warning(f"Failed to parse crt.sh response: {e}")
            raise APIError("Invalid response") from e

        if certificates is None:
            return []
        if not isinstance(certificates, list):
            self.logger.warning("Unexpected response format from crt.sh")
            raise APIError("Invalid response")

        return certificates
