"""
Configuration Management

Centralized configuration for the application.
"""

from .settings import (
    Settings,
    APIConfig,
    DatabaseConfig,
    ServerConfig,
    get_settings,
)

__all__ = [
    "Settings",
    "APIConfig",
    "DatabaseConfig",
    "ServerConfig",
    "get_settings",
]
