"""
API Client Protocol Definition

Defines the interface for the upstream guild API client.
"""

from typing import Protocol, Dict, Any, runtime_checkable


@runtime_checkable
class GuildAPIClientProtocol(Protocol):
    """Protocol for upstream guild API clients."""

    async def fetch_guild(
        self,
        region: str,
        realm: str,
        name: str
    ) -> Dict[str, Any]:
        """
        Fetch the raw guild profile.

        Args:
            region: Region code
            realm: Realm name or slug
            name: Guild name

        Returns:
            Raw upstream payload

        Raises:
            RegionNotSupportedError: region cannot be served upstream
            APIError: upstream answered with an error status
        """
        ...
