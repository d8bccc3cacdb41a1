"""
Guild Record Schema

Canonical guild shape served to callers and written to the cache.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


Channel = Annotated[int, Field(ge=0, le=255)]
RGBA = Tuple[Channel, Channel, Channel, Channel]


class Faction(str, Enum):
    """Playable faction."""
    ALLIANCE = "alliance"
    HORDE = "horde"


class Crest(BaseModel):
    """Guild crest with colors flattened to RGBA tuples."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    emblem_id: int = Field(..., alias="emblemId")
    emblem_color: RGBA = Field(..., alias="emblemColor")
    border_id: int = Field(..., alias="borderId")
    border_color: RGBA = Field(..., alias="borderColor")
    background_color: RGBA = Field(..., alias="backgroundColor")


class GuildRecord(BaseModel):
    """Cached guild record."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: int
    region: str = Field(..., max_length=10)
    realm: str = Field(..., max_length=100)
    name: str = Field(..., max_length=100)
    faction: Faction
    created: Union[int, float, str]
    achievement_points: int = Field(..., ge=0, alias="achievementPoints")
    member_count: int = Field(..., ge=0, alias="memberCount")
    crest: Crest
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @property
    def key(self) -> Tuple[str, str, str]:
        """Composite cache key."""
        return (self.region, self.realm, self.name)

    def to_response(self) -> dict:
        """Serialize with the public camelCase field names."""
        return self.model_dump(by_alias=True, mode="json")
