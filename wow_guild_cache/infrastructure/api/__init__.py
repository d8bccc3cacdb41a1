"""
API Infrastructure

HTTP clients for external APIs.
"""

from .base_client import BaseAPIClient
from .blizzard import BlizzardAPIClient, BlizzardOAuthService

__all__ = [
    "BaseAPIClient",
    "BlizzardAPIClient",
    "BlizzardOAuthService",
]
