"""
JSON codec for the values kept in the key-value store.

The stored shape keeps the camelCase field names used by the web client
(ageGroup, teamId, isDefault, createdAt...). Anything that is not valid JSON
or does not match the expected shape raises DecodeError.
"""
from __future__ import annotations

import json
import math
from typing import Any

from roster.domain.models import Lineup, Team
from roster.domain.results import DecodeError


def _loads(raw: str | None) -> Any:
    if raw is None:
        raise DecodeError("No value stored")
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Invalid JSON: {exc}") from exc


def _reject_constant(name: str) -> Any:
    raise DecodeError(f"Non-finite number {name} in stored value")


def _dumps(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def _require(data: dict, field: str, kind: type | tuple[type, ...]) -> Any:
    value = data.get(field)
    # bool is an int subclass; timestamps must be real numbers
    if isinstance(value, bool) and bool not in (kind if isinstance(kind, tuple) else (kind,)):
        raise DecodeError(f"Field {field} has unexpected type bool")
    if not isinstance(value, kind):
        raise DecodeError(f"Field {field} missing or has unexpected type {type(value).__name__}")
    return value


def _timestamp(data: dict, field: str) -> int:
    value = _require(data, field, (int, float))
    # 1e400 parses to inf without going through parse_constant
    if isinstance(value, float) and not math.isfinite(value):
        raise DecodeError(f"Field {field} is not a finite number")
    return int(value)


def _optional_str(data: dict, field: str) -> str | None:
    value = data.get(field)
    if value is not None and not isinstance(value, str):
        raise DecodeError(f"Field {field} must be a string")
    return value


def _object(raw: str | None) -> dict:
    data = _loads(raw)
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object, got {type(data).__name__}")
    return data


def _sport(data: dict) -> str:
    sport = _optional_str(data, "sport")
    return "baseball" if sport is None else sport


# -------------------------- teams --------------------------
def encode_team(team: Team) -> str:
    data = {
        "id": team.id,
        "name": team.name,
        "ageGroup": team.age_group,
        "season": team.season,
        "sport": team.sport,
        "createdAt": team.created_at,
        "updatedAt": team.updated_at,
    }
    if team.description is not None:
        data["description"] = team.description
    if team.logo_url is not None:
        data["logoUrl"] = team.logo_url
    return _dumps(data)


def decode_team(raw: str | None) -> Team:
    data = _object(raw)
    return Team(
        id=_require(data, "id", str),
        name=_require(data, "name", str),
        age_group=_require(data, "ageGroup", str),
        season=_require(data, "season", str),
        sport=_sport(data),
        description=_optional_str(data, "description"),
        logo_url=_optional_str(data, "logoUrl"),
        created_at=_timestamp(data, "createdAt"),
        updated_at=_timestamp(data, "updatedAt"),
    )


# -------------------------- lineups --------------------------
def encode_lineup(lineup: Lineup) -> str:
    return _dumps(
        {
            "id": lineup.id,
            "teamId": lineup.team_id,
            "name": lineup.name,
            "type": lineup.lineup_type,
            "status": lineup.status,
            "isDefault": lineup.is_default,
            "positions": [{"position": slot, "playerId": player} for slot, player in lineup.positions.items()],
            "createdAt": lineup.created_at,
            "updatedAt": lineup.updated_at,
        }
    )


def _decode_positions(value: Any) -> dict[str, str]:
    if not isinstance(value, list):
        raise DecodeError("Field positions must be a list")
    positions: dict[str, str] = {}
    for item in value:
        if not isinstance(item, dict):
            raise DecodeError("Position entries must be objects")
        slot = _require(item, "position", str)
        if slot in positions:
            raise DecodeError(f"Duplicate position slot {slot}")
        positions[slot] = _require(item, "playerId", str)
    return positions


def decode_lineup(raw: str | None) -> Lineup:
    data = _object(raw)
    return Lineup(
        id=_require(data, "id", str),
        team_id=_require(data, "teamId", str),
        name=_require(data, "name", str),
        positions=_decode_positions(data.get("positions")),
        is_default=_require(data, "isDefault", bool),
        lineup_type=_optional_str(data, "type") or "standard",
        status=_optional_str(data, "status") or "draft",
        created_at=_timestamp(data, "createdAt"),
        updated_at=_timestamp(data, "updatedAt"),
    )


# -------------------------- indexes / pointer --------------------------
def encode_ids(ids: list[str]) -> str:
    return _dumps(list(ids))


def decode_ids(raw: str | None) -> list[str]:
    """Decode an index list; a missing key is an empty index."""
    if raw is None:
        return []
    data = _loads(raw)
    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise DecodeError("Index must be a list of strings")
    return data


def encode_pointer(team_id: str) -> str:
    return _dumps(team_id)


def decode_pointer(raw: str | None) -> str | None:
    if raw is None:
        return None
    data = _loads(raw)
    if data is None:
        return None
    if not isinstance(data, str):
        raise DecodeError("Current team pointer must be a string")
    return data or None
