"""Custom exceptions for SUBSIFT.

This module defines the exception hierarchy used throughout SUBSIFT.
Every exception inherits from SubsiftError so callers can catch all
library errors in one place.
"""


class SubsiftError(Exception):
    """Base exception for all SUBSIFT errors."""
    pass


class ValidationError(SubsiftError):
    """Raised when user input fails validation.

    Only the command-line boundary raises this, for example when no domain
    was entered.
    """
    pass


class NetworkError(SubsiftError):
    """Raised when a network operation fails.

    Covers timeouts, refused connections and HTTP error statuses. A source
    that hits one of these is reported as failed; the run carries on.
    """
    pass


class APIError(SubsiftError):
    """Raised when a source answers but the answer is unusable.

    This is the case for empty result sets, malformed bodies and vendor error
    messages delivered with a 200 status.
    """
    pass


class ConfigurationError(SubsiftError):
    """Raised when the discovery configuration is invalid.

    Unknown source names and non-positive timeouts end up here.
    """
    pass


class DiscoveryError(SubsiftError):
    """Raised when a discovery source fails.

    Wraps the more specific APIError or NetworkError (available as
    ``__cause__``) and records which source failed.
    """

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source
