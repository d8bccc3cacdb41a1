"""
Core Protocol Definitions

This module defines the interfaces that all implementations must follow.
"""

from .api_client_protocol import GuildAPIClientProtocol
from .guild_store_protocol import GuildStoreProtocol
from .reporter_protocol import ErrorReporterProtocol

__all__ = [
    "GuildAPIClientProtocol",
    "GuildStoreProtocol",
    "ErrorReporterProtocol",
]
