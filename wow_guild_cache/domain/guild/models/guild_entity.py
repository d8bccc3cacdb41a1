"""
Guild Entity Model

Persistent row backing the guild cache.
"""

from sqlalchemy import Column, String, Integer, JSON

from ....core.models import TimestampedModel
from .guild_record import GuildRecord


class Guild(TimestampedModel):
    """Guild cache row keyed by (region, realm, name)."""

    __tablename__ = "guilds"

    # Composite key; realm and name keep the caller's casing
    region = Column(String(10), primary_key=True)
    realm = Column(String(100), primary_key=True)
    name = Column(String(100), primary_key=True)

    # Upstream identifier
    id = Column(Integer, nullable=False, index=True)

    faction = Column(String(20), nullable=False)  # alliance/horde
    created = Column(JSON)  # epoch millis or ISO string, untouched
    achievement_points = Column(Integer, default=0, nullable=False)
    member_count = Column(Integer, default=0, nullable=False)
    crest = Column(JSON, nullable=False)

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Guild(region={self.region}, realm={self.realm}, "
            f"name={self.name}, faction={self.faction})>"
        )

    def to_record(self) -> GuildRecord:
        """Convert the row back into a guild record."""
        return GuildRecord(
            id=self.id,
            region=self.region,
            realm=self.realm,
            name=self.name,
            faction=self.faction,
            created=self.created,
            achievement_points=self.achievement_points,
            member_count=self.member_count,
            crest=self.crest,
            updated_at=self.updated_at
        )
