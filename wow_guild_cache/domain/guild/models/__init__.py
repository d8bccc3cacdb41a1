"""
Guild Domain Models

Models related to guild data and caching.
"""

from .guild_record import Crest, Faction, GuildRecord
from .guild_entity import Guild

__all__ = [
    "Crest",
    "Faction",
    "GuildRecord",
    "Guild",
]
