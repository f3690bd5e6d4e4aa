"""Layout of the storage keys shared by the team and lineup repositories."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StorageKeys:
    prefix: str = ""

    @property
    def current_team(self) -> str:
        return f"{self.prefix}current_team"

    @property
    def team_index(self) -> str:
        return f"{self.prefix}teams"

    @property
    def team_prefix(self) -> str:
        return f"{self.prefix}team:"

    @property
    def lineup_prefix(self) -> str:
        return f"{self.prefix}lineup:"

    @property
    def lineup_index_prefix(self) -> str:
        return f"{self.prefix}lineups_team:"

    def team(self, team_id: str) -> str:
        return self.team_prefix + team_id

    def lineup(self, lineup_id: str) -> str:
        return self.lineup_prefix + lineup_id

    def lineup_index(self, team_id: str) -> str:
        return self.lineup_index_prefix + team_id

    def id_from(self, key: str, prefix: str) -> str:
        return key[len(prefix):]
