"""
Base Exception Classes

Core exception hierarchy for the application.
"""

from typing import Optional, Dict, Any


class WoWGuildError(Exception):
    """Base exception for all application errors."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.details = details or {}
        self.original_exception = original_exception
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class APIError(WoWGuildError):
    """Upstream API returned an error status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        endpoint: Optional[str] = None,
        body: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.status_code = status_code
        self.endpoint = endpoint
        self.body = body

        # Add to details
        self.details["status_code"] = status_code
        self.details["endpoint"] = endpoint


class RegionNotSupportedError(WoWGuildError):
    """Region cannot be served by the upstream API."""

    def __init__(
        self,
        region: str,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(f"Region not supported: {region}", details)
        self.region = region

        self.details["region"] = region


class NormalizationError(WoWGuildError):
    """Upstream payload could not be turned into a guild record."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message, details, original_exception)
        self.field = field

        self.details["field"] = field


class ConfigurationError(WoWGuildError):
    """Configuration-related errors."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.config_key = config_key

        # Add to details
        self.details["config_key"] = config_key
