"""
Core Exceptions

Base exception classes for the application.
"""

from .base import (
    WoWGuildError,
    APIError,
    RegionNotSupportedError,
    NormalizationError,
    ConfigurationError,
)

__all__ = [
    "WoWGuildError",
    "APIError",
    "RegionNotSupportedError",
    "NormalizationError",
    "ConfigurationError",
]
