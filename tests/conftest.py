"""
Shared fixtures for the guild cache tests.
"""

import copy

import pytest

from wow_guild_cache.infrastructure.database import DatabaseConnection, GuildRepository

GUILD_PAYLOAD = {
    "id": 70291548,
    "name": "Guild A",
    "realm": {"id": 1305, "slug": "realm1", "name": "Realm1"},
    "faction": {"type": "ALLIANCE", "name": "Alliance"},
    "created_timestamp": 1546300800000,
    "achievement_points": 2500,
    "member_count": 120,
    "crest": {
        "emblem": {"id": 126, "color": {"r": 10, "g": 20, "b": 30, "a": 40}},
        "border": {"id": 5, "color": {"r": 50, "g": 60, "b": 70, "a": 80}},
        "background": {"id": 2, "color": {"r": 90, "g": 100, "b": 110, "a": 120}},
    },
}


def make_payload(**overrides):
    """Blizzard guild profile with optional top-level overrides."""
    payload = copy.deepcopy(GUILD_PAYLOAD)
    payload.update(overrides)
    return payload


@pytest.fixture
def guild_payload():
    """Raw upstream guild payload."""
    return make_payload()


@pytest.fixture
async def database(tmp_path):
    """Initialized SQLite database in a temporary file."""
    db = DatabaseConnection(f"sqlite+aiosqlite:///{tmp_path / 'guilds.db'}")
    await db.initialize()
    await db.create_tables()
    yield db
    await db.shutdown()


@pytest.fixture
def repository(database):
    """Guild repository on the temporary database."""
    return GuildRepository(database)
