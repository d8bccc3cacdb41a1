"""
Faction mapping for upstream faction type codes.
"""

from typing import Union

from .models import Faction

# Legacy community API used 0/1, the profile API uses ALLIANCE/HORDE
FACTION_TYPES = {
    0: Faction.ALLIANCE,
    1: Faction.HORDE,
    "ALLIANCE": Faction.ALLIANCE,
    "HORDE": Faction.HORDE,
}


def get_faction_from_type(faction_type: Union[int, str]) -> Faction:
    """
    Map an upstream faction type to a Faction.

    Raises:
        ValueError: the code is not a known faction
    """
    key = faction_type
    if isinstance(faction_type, str):
        key = faction_type.strip().upper()
        if key.isdigit():
            key = int(key)
    elif isinstance(faction_type, bool):
        key = None

    try:
        return FACTION_TYPES[key]
    except (KeyError, TypeError):
        raise ValueError(f"Unknown faction type: {faction_type!r}")
