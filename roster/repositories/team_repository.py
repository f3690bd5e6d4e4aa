"""
Team records, the team index and the current-team pointer.

Layout: one key per team (``team:<id>``), an append-only index holding team
ids in insertion order, and a single pointer key for the selected team.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import TYPE_CHECKING, Callable, Optional

from roster.domain.models import Team, now_ms, stamp, validate_team
from roster.domain.results import DecodeError, ErrorKind, Result
from roster.repositories import codec
from roster.repositories.base import guarded, unique
from roster.repositories.keys import StorageKeys
from roster.repositories.kv_store import KeyValueStore

if TYPE_CHECKING:
    from roster.repositories.lineup_repository import LineupRepository

logger = logging.getLogger(__name__)


class TeamRepository:
    """CRUD helpers for teams on top of a KeyValueStore."""

    def __init__(
        self,
        store: KeyValueStore,
        keys: StorageKeys | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.keys = keys or StorageKeys()
        self.clock = clock
        self._lineups: Optional["LineupRepository"] = None

    def cascade_to(self, lineups: "LineupRepository") -> None:
        """Register the lineup repository that delete_team cascades into."""
        self._lineups = lineups

    # -------------------------- index --------------------------
    def _load_index(self) -> tuple[list[str], bool]:
        """Return (ids, dirty); dirty means the stored index must be rewritten."""
        key = self.keys.team_index
        try:
            ids = codec.decode_ids(self.store.get(key))
        except DecodeError as exc:
            logger.warning("Team index %s is corrupt (%s); rebuilding from stored keys", key, exc.message)
            prefix = self.keys.team_prefix
            return [self.keys.id_from(k, prefix) for k in self.store.list_keys(prefix)], True
        deduped = unique(ids)
        return deduped, len(deduped) != len(ids)

    def _write_index(self, ids: list[str]) -> None:
        self.store.set(self.keys.team_index, codec.encode_ids(ids))

    def get_all_team_ids(self) -> list[str]:
        ids, _ = self._load_index()
        return ids

    # -------------------------- teams --------------------------
    def get_team(self, team_id: str) -> Optional[Team]:
        if not team_id:
            return None
        key = self.keys.team(team_id)
        try:
            raw = self.store.get(key)
            if raw is None:
                return None
            team = codec.decode_team(raw)
        except DecodeError as exc:
            logger.warning("Skipping unreadable team record %s: %s", key, exc.message)
            return None
        if team.id != team_id:
            logger.warning("Team record %s holds mismatched id %s", key, team.id)
            return None
        return team

    def get_all_teams(self) -> list[Team]:
        teams = []
        for team_id in self.get_all_team_ids():
            team = self.get_team(team_id)
            if team is not None:
                teams.append(team)
        return teams

    @guarded("save team")
    def save_team(self, team: Team) -> Result:
        problem = validate_team(team)
        if problem:
            return Result.failure(ErrorKind.VALIDATION, problem)
        previous = self.get_team(team.id)
        created_at, updated_at = stamp(
            team.created_at or (previous.created_at if previous else 0),
            previous.updated_at if previous else 0,
            self.clock(),
        )
        stored = replace(team, name=team.name.strip(), created_at=created_at, updated_at=updated_at)
        self.store.set(self.keys.team(team.id), codec.encode_team(stored))

        ids, dirty = self._load_index()
        if team.id not in ids:
            ids.append(team.id)
            dirty = True
        if dirty:
            self._write_index(ids)
        logger.debug("Saved team %s", team.id)
        return Result.success(stored)

    @guarded("delete team")
    def delete_team(self, team_id: str) -> Result:
        self.store.remove(self.keys.team(team_id))

        ids, dirty = self._load_index()
        if team_id in ids or dirty:
            self._write_index([i for i in ids if i != team_id])

        if self._lineups is not None:
            cascade = self._lineups.delete_all_for_team(team_id)
            if not cascade:
                return cascade
        else:
            logger.warning("No lineup repository registered; lineups of %s were not removed", team_id)

        if self._read_pointer() == team_id:
            self.store.remove(self.keys.current_team)
        logger.info("Deleted team %s", team_id)
        return Result.success()

    # -------------------------- current team --------------------------
    def _read_pointer(self) -> Optional[str]:
        key = self.keys.current_team
        try:
            return codec.decode_pointer(self.store.get(key))
        except DecodeError as exc:
            logger.warning("Current team pointer %s is unreadable: %s", key, exc.message)
            return None

    def get_current_team_id(self) -> Optional[str]:
        team_id = self._read_pointer()
        if team_id and self.get_team(team_id) is None:
            # another process deleted the team after the pointer was written
            return None
        return team_id

    @guarded("set current team")
    def set_current_team_id(self, team_id: str) -> Result:
        if self.get_team(team_id) is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"Team {team_id} not found")
        self.store.set(self.keys.current_team, codec.encode_pointer(team_id))
        return Result.success(team_id)

    @guarded("clear current team")
    def clear_current_team(self) -> Result:
        self.store.remove(self.keys.current_team)
        return Result.success()
