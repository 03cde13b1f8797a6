"""
Domain-specific exception hierarchy for zonekit.
"""


class ZoneKitError(Exception):
    """Base class for all library-level errors."""


class InvalidArgumentError(ZoneKitError, ValueError):
    """Raised for blank, malformed or out-of-range input."""


class ZoneNotFoundError(ZoneKitError, LookupError):
    """Raised when an identifier, city, country code or offset cannot be resolved."""

    def __init__(self, message: str, query: str | None = None):
        super().__init__(message)
        self.query = query


class ReferenceDataError(ZoneKitError):
    """Raised when the reference tables cannot be loaded."""
