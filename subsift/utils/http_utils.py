"""HTTP utility functions for SUBSIFT."""

import requests
from typing import Dict, Optional
import logging
from requests.exceptions import RequestException, Timeout, ConnectionError, HTTPError

from subsift import __version__
from subsift.core.exceptions import NetworkError

DEFAULT_TIMEOUT = 25


class HTTPUtils:
    """Thin wrapper around a requests session with a fixed timeout."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, user_agent: Optional[str] = None):
        """Initialize HTTP utilities.

        Args:
            timeout: HTTP request timeout in seconds
            user_agent: Custom User-Agent string
        """
        self.timeout = timeout
        self.user_agent = user_agent or f"subsift/{__version__}"
        self.logger = logging.getLogger('subsift.http_utils')
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': self.user_agent
        })

    def make_request(self, url: str, method: str = 'GET',
                     params: Optional[Dict] = None,
                     headers: Optional[Dict] = None) -> requests.Response:
        """Make an HTTP request.

        Every failure at the transport or HTTP level, including a non-2xx
        status, is reported as NetworkError.

        Args:
            url: URL to request
            method: HTTP method
            params: URL parameters
            headers: Extra HTTP headers

        Returns:
            Response object

        Raises:
            NetworkError: If request fails
        """
        try:
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                headers=headers or {},
                timeout=self.timeout
            )

            response.raise_for_status()
            return response
        except Timeout:
            self.logger.debug(f"Timeout connecting to {url}")
            raise NetworkError(f"Timeout connecting to {url}")
        except ConnectionError:
            self.logger.debug(f"Connection error for {url}")
            raise NetworkError(f"Connection error for {url}")
        except HTTPError as e:
            status = e.response.status_code if e.response is not None else 'unknown'
            self.logger.debug(f"HTTP {status} from {url}")
            raise NetworkError(f"HTTP {status} from {url}") from e
        except RequestException as e:
            self.logger.debug(f"Request error for {url}: {e}")
            raise NetworkError(f"Request error for {url}") from e

    def close(self) -> None:
        self.session.close()
