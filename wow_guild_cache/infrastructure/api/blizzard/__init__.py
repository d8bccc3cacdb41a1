"""
Blizzard API Infrastructure

Guild profile client and OAuth2 token provider.
"""

from .client import BlizzardAPIClient, slugify
from .oauth import BlizzardOAuthService

__all__ = [
    "BlizzardAPIClient",
    "BlizzardOAuthService",
    "slugify",
]
