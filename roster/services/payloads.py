"""
Conversions between JSON payloads (camelCase, as sent by the web client) and
domain records. Used by the routers and the CLI.
"""

from __future__ import annotations

from typing import Any, Optional

from roster.domain.models import Lineup, Team, new_id


class PayloadError(ValueError):
    """Raised when a request body cannot be turned into a record."""


def _text(payload: dict, field: str, default: str = "") -> str:
    value = payload.get(field, default)
    if value is None:
        return default
    if not isinstance(value, str):
        raise PayloadError(f"{field} must be a string")
    return value


def _timestamp(payload: dict, field: str) -> int:
    value = payload.get(field) or 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadError(f"{field} must be a number")
    return int(value)


def team_to_dict(team: Team) -> dict[str, Any]:
    return {
        "id": team.id,
        "name": team.name,
        "ageGroup": team.age_group,
        "season": team.season,
        "sport": team.sport,
        "description": team.description,
        "logoUrl": team.logo_url,
        "createdAt": team.created_at,
        "updatedAt": team.updated_at,
    }


def team_from_payload(payload: dict, team_id: Optional[str] = None) -> Team:
    return Team(
        id=team_id or _text(payload, "id") or new_id(),
        name=_text(payload, "name"),
        age_group=_text(payload, "ageGroup"),
        season=_text(payload, "season"),
        sport=_text(payload, "sport", "baseball") or "baseball",
        description=payload.get("description") if isinstance(payload.get("description"), str) else None,
        logo_url=payload.get("logoUrl") if isinstance(payload.get("logoUrl"), str) else None,
        created_at=_timestamp(payload, "createdAt"),
    )


def lineup_to_dict(lineup: Lineup) -> dict[str, Any]:
    return {
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


def _positions(value: Any) -> dict[str, str]:
    """Accept either [{"position", "playerId"}, ...] or a {slot: playerId} object."""
    if value is None:
        return {}
    if isinstance(value, dict):
        return {str(slot): player for slot, player in value.items()}
    if not isinstance(value, list):
        raise PayloadError("positions must be a list")
    positions: dict[str, str] = {}
    for item in value:
        if not isinstance(item, dict):
            raise PayloadError("positions entries must be objects")
        slot = item.get("position")
        if slot in positions:
            raise PayloadError(f"position {slot} assigned twice")
        positions[slot] = item.get("playerId")
    return positions


def lineup_from_payload(payload: dict, *, team_id: Optional[str] = None, lineup_id: Optional[str] = None) -> Lineup:
    is_default = payload.get("isDefault", False)
    if not isinstance(is_default, bool):
        raise PayloadError("isDefault must be a boolean")
    return Lineup(
        id=lineup_id or _text(payload, "id") or new_id(),
        team_id=team_id or _text(payload, "teamId"),
        name=_text(payload, "name"),
        positions=_positions(payload.get("positions")),
        is_default=is_default,
        lineup_type=_text(payload, "type", "standard") or "standard",
        status=_text(payload, "status", "draft") or "draft",
        created_at=_timestamp(payload, "createdAt"),
    )
