"""Exception types raised by the Allora plugin."""

from typing import Optional


class AlloraPluginError(Exception):
    """Base class for all plugin errors."""


class ConfigurationError(AlloraPluginError):
    """A required setting (usually an API key) is missing or invalid."""


class NetworkError(AlloraPluginError):
    """The HTTP request could not be completed."""


class ApiError(AlloraPluginError):
    """The API answered with a non-success status code."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ParseError(AlloraPluginError):
    """The API response did not have the expected shape."""
