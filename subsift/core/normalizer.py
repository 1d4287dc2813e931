"""Hostname normalization for SUBSIFT.

Sources hand back hostnames in different shapes: several names packed in one
newline-separated field, wildcard entries, stray whitespace and now and then
names that belong to some other domain. Everything a source returns goes
through ``normalize`` before it is counted or merged.
"""

from typing import Iterable, List, Optional

WILDCARD_PREFIX = '*.'


def clean_hostname(token: str) -> str:
    """Trim a single hostname and strip one leading wildcard label.

    Only one label is stripped. A name that still starts with a wildcard
    afterwards (``*.*.example.com``) is not a usable hostname and comes back
    empty.
    """
    token = token.strip()
    if token.startswith(WILDCARD_PREFIX):
        token = token[len(WILDCARD_PREFIX):].strip()
        if token.startswith(WILDCARD_PREFIX):
            return ''
    return token


def normalize(raw: Iterable[Optional[str]], domain: str) -> List[str]:
    """Turn raw hostname blobs into sorted, unique subdomains of ``domain``.

    Args:
        raw: Hostname strings, each possibly holding several names
            separated by newlines. None entries are skipped.
        domain: Domain every kept name must contain, matched literally

    Returns:
        Sorted list of unique, non-empty names containing ``domain``
    """
    subdomains = set()

    for blob in raw:
        if not blob:
            continue
        for token in blob.splitlines():
            name = clean_hostname(token)
            if name and domain in name:
                subdomains.add(name)

    return sorted(subdomains)


def merge(*groups: Iterable[str]) -> List[str]:
    """Union already normalized subdomain lists into one sorted list."""
    merged = set()
    for group in groups:
        merged.update(group)
    return sorted(merged)
