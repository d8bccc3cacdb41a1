"""
WoW Guild Cache

Serves World of Warcraft guild profiles from a local cache while
refreshing them from the Blizzard API in the background.
"""

__version__ = "1.0.0"

# Public API exports
from .core.config import Settings
from .core.exceptions import WoWGuildError

__all__ = [
    "Settings",
    "WoWGuildError",
]
