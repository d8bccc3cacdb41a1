"""
Application Services

Use-case orchestration on top of the domain and infrastructure layers.
"""

from .guild_refresh import (
    GuildRefreshService,
    LookupOutcome,
    ResponseSink,
    UNSUPPORTED_REGION_MESSAGE,
    UPSTREAM_ERROR,
)

__all__ = [
    "GuildRefreshService",
    "LookupOutcome",
    "ResponseSink",
    "UNSUPPORTED_REGION_MESSAGE",
    "UPSTREAM_ERROR",
]
