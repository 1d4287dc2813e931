"""
SUBSIFT - passive subdomain discovery from public intelligence sources

Queries certificate transparency logs, the HackerTarget host search and the
AlienVault OTX passive DNS feed, then merges the answers into one sorted,
deduplicated list with a per-source summary.
"""

__version__ = "1.0.0"
__author__ = "SUBSIFT Development Team"
