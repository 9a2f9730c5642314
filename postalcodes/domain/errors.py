"""Exception types raised by postalcodes.

Expected absence (unknown region, unknown postal code) is never an
exception; these are reserved for misconfiguration and unreadable data.
"""

from typing import Optional


class PostalCodeError(Exception):
    """Base class for all postalcodes errors."""


class ConfigurationError(PostalCodeError, ValueError):
    """Raised when a service is constructed with invalid settings."""


class DataAccessError(PostalCodeError, IOError):
    """Raised when a data file exists but cannot be read or parsed."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path
