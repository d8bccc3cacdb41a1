"""
Guild Repository

Cache store for guild records keyed by (region, realm, name).
"""

import logging
from typing import Optional

from sqlalchemy import select, func
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from ...core.protocols import GuildStoreProtocol
from ...domain.guild.models import Guild, GuildRecord
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

KEY_COLUMNS = ("region", "realm", "name")

UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def server_now(dialect_name: str):
    """Current time as evaluated by the database, not by this process."""
    if dialect_name == "sqlite":
        # CURRENT_TIMESTAMP only has second resolution on SQLite
        return func.strftime("%Y-%m-%d %H:%M:%f", "now")
    return func.now()


class GuildRepository(GuildStoreProtocol):
    """SQLAlchemy-backed guild cache store."""

    def __init__(self, database: DatabaseConnection):
        """
        Initialize repository.

        Args:
            database: Initialized database connection
        """
        self.database = database

    async def lookup(
        self,
        region: str,
        realm: str,
        name: str
    ) -> Optional[GuildRecord]:
        """Point lookup by composite key."""
        if not (region and realm and name):
            return None

        async with self.database.get_session() as session:
            stmt = select(Guild).where(
                Guild.region == region.lower(),
                Guild.realm == realm,
                Guild.name == name
            )
            result = await session.execute(stmt)
            guild = result.scalar_one_or_none()

        if guild is None:
            logger.debug(f"Cache miss for {region}/{realm}/{name}")
            return None
        return guild.to_record()

    async def upsert(self, record: GuildRecord) -> GuildRecord:
        """Insert or overwrite the guild at its key, stamping updated_at."""
        dialect_name = self.database.dialect_name
        insert = UPSERT_INSERTS[dialect_name]

        now = server_now(dialect_name)
        values = {
            "region": record.region,
            "realm": record.realm,
            "name": record.name,
            "id": record.id,
            "faction": record.faction.value,
            "created": record.created,
            "achievement_points": record.achievement_points,
            "member_count": record.member_count,
            "crest": record.crest.model_dump(by_alias=True, mode="json"),
            "updated_at": now,
        }

        stmt = insert(Guild).values(**values)
        changes = {
            column: stmt.excluded[column]
            for column in values
            if column not in KEY_COLUMNS and column != "updated_at"
        }
        changes["updated_at"] = now
        stmt = stmt.on_conflict_do_update(
            index_elements=list(KEY_COLUMNS),
            set_=changes
        )

        async with self.database.get_session() as session:
            await session.execute(stmt)
            stored = await session.get(Guild, record.key)

        logger.info(
            f"Stored guild {record.region}/{record.realm}/{record.name} "
            f"(updated_at={stored.updated_at})"
        )
        return stored.to_record()
