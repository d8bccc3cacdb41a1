"""
Guild Payload Normalizer

Turns a raw Blizzard guild profile into a GuildRecord.
"""

import json
from typing import Any, Dict, List, Mapping, Union

from pydantic import ValidationError

from ...core.exceptions import NormalizationError
from .faction import get_faction_from_type
from .models import GuildRecord

RGBA_CHANNELS = ("r", "g", "b", "a")


def _require(payload: Mapping[str, Any], path: str) -> Any:
    """Walk a dotted path, failing on any missing step."""
    value: Any = payload
    for part in path.split("."):
        if not isinstance(value, Mapping) or value.get(part) is None:
            raise NormalizationError(
                f"Guild payload is missing '{path}'",
                field=path
            )
        value = value[part]
    return value


def _flatten_color(payload: Mapping[str, Any], path: str) -> List[int]:
    """Flatten a named RGBA color object into [r, g, b, a]."""
    color = _require(payload, path)
    # Profile API nests the channels under "rgba"
    if isinstance(color, Mapping) and "rgba" in color:
        path = f"{path}.rgba"
        color = _require(payload, path)

    channels = []
    for channel in RGBA_CHANNELS:
        field = f"{path}.{channel}"
        value = _require(payload, field)
        if not _is_byte(value):
            raise NormalizationError(
                f"Color channel '{field}' must be a whole number in 0..255, got {value!r}",
                field=field
            )
        channels.append(value)
    return channels


def _is_byte(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return isinstance(value, (int, float)) and 0 <= value <= 255


def _decode(raw_payload: Union[str, bytes, Mapping[str, Any], None]) -> Mapping[str, Any]:
    if isinstance(raw_payload, (str, bytes)):
        try:
            raw_payload = json.loads(raw_payload)
        except ValueError as e:
            raise NormalizationError(
                "Invalid guild response received",
                original_exception=e
            )
    if not raw_payload:
        raise NormalizationError("Invalid guild response received")
    if not isinstance(raw_payload, Mapping):
        raise NormalizationError(
            f"Guild payload must be an object, got {type(raw_payload).__name__}"
        )
    return raw_payload


def normalize_guild(
    raw_payload: Union[str, bytes, Dict[str, Any], None],
    region: str,
    realm: str,
    name: str
) -> GuildRecord:
    """
    Build the canonical guild record from an upstream payload.

    Region is lower-cased; realm and name are kept exactly as the
    caller supplied them, not as the upstream spells them.

    Args:
        raw_payload: Decoded JSON object or JSON text
        region: Region code from the request
        realm: Realm from the request
        name: Guild name from the request

    Returns:
        Fully populated guild record (updated_at unset)

    Raises:
        NormalizationError: payload absent, incomplete or invalid
    """
    payload = _decode(raw_payload)

    faction_type = _require(payload, "faction.type")
    try:
        faction = get_faction_from_type(faction_type)
    except ValueError as e:
        raise NormalizationError(
            str(e),
            field="faction.type",
            original_exception=e
        )

    crest = {
        "emblemId": _require(payload, "crest.emblem.id"),
        "emblemColor": _flatten_color(payload, "crest.emblem.color"),
        "borderId": _require(payload, "crest.border.id"),
        "borderColor": _flatten_color(payload, "crest.border.color"),
        "backgroundColor": _flatten_color(payload, "crest.background.color"),
    }

    try:
        return GuildRecord(
            id=_require(payload, "id"),
            region=region.lower(),
            realm=realm,
            name=name,
            faction=faction,
            created=_require(payload, "created_timestamp"),
            achievement_points=_require(payload, "achievement_points"),
            member_count=_require(payload, "member_count"),
            crest=crest,
        )
    except ValidationError as e:
        raise NormalizationError(
            f"Guild payload failed validation: {e.error_count()} error(s)",
            details={"errors": e.errors(include_url=False)},
            original_exception=e
        )
