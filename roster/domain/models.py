"""Team and lineup records plus the validation rules applied before a write."""
from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Optional

# Field slots accepted in a lineup, in display order.
POSITIONS = ("P", "C", "1B", "2B", "3B", "SS", "LF", "CF", "RF", "DH", "BN")
LINEUP_TYPES = ("standard", "competitive", "developmental")
LINEUP_STATUSES = ("draft", "final")


def new_id() -> str:
    """Collision-resistant opaque identifier for new teams and lineups."""
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class Team:
    id: str
    name: str
    age_group: str = ""
    season: str = ""
    sport: str = "baseball"
    description: Optional[str] = None
    logo_url: Optional[str] = None
    created_at: int = 0
    updated_at: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.name} ({self.age_group}, {self.season})"


@dataclass
class Lineup:
    id: str
    team_id: str
    name: str
    positions: dict[str, str] = field(default_factory=dict)
    is_default: bool = False
    lineup_type: str = "standard"
    status: str = "draft"
    created_at: int = 0
    updated_at: int = 0

    def with_default(self, is_default: bool, updated_at: int) -> "Lineup":
        return replace(self, is_default=is_default, updated_at=updated_at, positions=dict(self.positions))


def stamp(created_at: int, previous_updated_at: int, now: int) -> tuple[int, int]:
    """Return (created_at, updated_at) so that updated_at never moves backwards."""
    created = created_at or now
    return created, max(now, previous_updated_at, created)


def validate_team(team: Team) -> str | None:
    """Return a human readable problem, or None when the team can be stored."""
    if not (team.id or "").strip():
        return "Team id is required"
    if not (team.name or "").strip():
        return "Team name is required"
    return None


def validate_lineup(lineup: Lineup) -> str | None:
    if not (lineup.id or "").strip():
        return "Lineup id is required"
    if not (lineup.team_id or "").strip():
        return "Lineup teamId is required"
    if not (lineup.name or "").strip():
        return "Lineup name is required"
    if lineup.lineup_type not in LINEUP_TYPES:
        return f"Unknown lineup type: {lineup.lineup_type}"
    if lineup.status not in LINEUP_STATUSES:
        return f"Unknown lineup status: {lineup.status}"
    for slot, player_id in lineup.positions.items():
        if slot not in POSITIONS:
            return f"Unknown position: {slot}"
        if not isinstance(player_id, str) or not player_id.strip():
            return f"Position {slot} has no player"
    return None
