"""DNS utility functions for SUBSIFT.

Checks the domain typed at the command line and, on request, resolves the
discovered subdomains to their A records.
"""

import concurrent.futures
import logging
from typing import Dict, Iterable, List

import dns.exception
from dns.resolver import Resolver, NXDOMAIN, NoAnswer, Timeout, NoNameservers

from subsift.core.exceptions import ValidationError, NetworkError


class DNSUtils:
    """DNS helpers for input checking and A record resolution.

    Attributes:
        timeout: DNS query timeout in seconds
        max_workers: Maximum number of concurrent resolution workers
        resolver: DNS resolver instance
    """

    def __init__(self, timeout: float = 3, max_workers: int = 20):
        self.timeout = timeout
        self.max_workers = max_workers
        self.logger = logging.getLogger('subsift.dns_utils')
        self.resolver = Resolver()
        self.resolver.timeout = timeout
        self.resolver.lifetime = timeout

    @staticmethod
    def clean_input(domain) -> str:
        """Return the entered domain without surrounding whitespace.

        The domain is not checked for DNS syntax; it is used as typed.

        Raises:
            ValidationError: If nothing but whitespace was entered
        """
        if not isinstance(domain, str) or not domain.strip():
            raise ValidationError("No domain entered")
        return domain.strip()

    def resolve_domain(self, domain: str) -> List[str]:
        """Resolve a domain name to its A records.

        Returns:
            List of IP addresses, empty if the name does not exist

        Raises:
            NetworkError: If resolution fails for network reasons
        """
        try:
            answers = self.resolver.resolve(domain, 'A')
            return [answer.to_text() for answer in answers]
        except NXDOMAIN:
            self.logger.debug(f"Domain {domain} does not exist")
            return []
        except NoAnswer:
            self.logger.debug(f"No A records for {domain}")
            return []
        except Timeout:
            raise NetworkError(f"Timeout resolving {domain}")
        except NoNameservers:
            raise NetworkError(f"No nameservers available for {domain}")
        except dns.exception.DNSException as e:
            raise NetworkError(f"Error resolving {domain}") from e

    def resolve_many(self, domains: Iterable[str]) -> Dict[str, List[str]]:
        """Resolve many names concurrently.

        Names that fail to resolve map to an empty list.
        """
        domains = list(domains)
        results = {domain: [] for domain in domains}
        if not domains:
            return results

        with concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_domain = {
                executor.submit(self.resolve_domain, domain): domain
                for domain in domains
            }
            for future in concurrent.futures.as_completed(future_to_domain):
                domain = future_to_domain[future]
                try:
                    results[domain] = future.result()
                except NetworkError as e:
                    self.logger.debug(f"Error resolving {domain}: {e}")

        return results
