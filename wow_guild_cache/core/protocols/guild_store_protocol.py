"""
Guild Store Protocol Definition

Defines the interface for the guild cache store.
"""

from typing import Protocol, Optional, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from ...domain.guild.models import GuildRecord


@runtime_checkable
class GuildStoreProtocol(Protocol):
    """Protocol for guild cache store implementations."""

    async def lookup(
        self,
        region: str,
        realm: str,
        name: str
    ) -> Optional["GuildRecord"]:
        """
        Retrieve a cached guild by its composite key.

        Args:
            region: Region code
            realm: Realm as supplied by the caller
            name: Guild name as supplied by the caller

        Returns:
            Cached guild or None if absent or the key is incomplete
        """
        ...

    async def upsert(self, record: "GuildRecord") -> "GuildRecord":
        """
        Insert or overwrite a guild at its composite key.

        Args:
            record: Fully populated guild record

        Returns:
            The stored record, with the store-assigned update time
        """
        ...
