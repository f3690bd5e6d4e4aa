"""
Lineup records scoped to a team.

Each lineup lives under ``lineup:<id>`` and every team keeps its own index of
lineup ids. The store has no multi-key transactions, so the default-lineup
switch is written as a sequence of single-key writes that is safe to repeat:
a retry after an interrupted call converges to one default per team.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional

from roster.domain.models import Lineup, now_ms, stamp, validate_lineup
from roster.domain.results import DecodeError, ErrorKind, Result
from roster.repositories import codec
from roster.repositories.base import guarded, unique
from roster.repositories.keys import StorageKeys
from roster.repositories.kv_store import KeyValueStore
from roster.repositories.team_repository import TeamRepository

logger = logging.getLogger(__name__)


class LineupRepository:
    def __init__(
        self,
        store: KeyValueStore,
        teams: TeamRepository,
        keys: StorageKeys | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.store = store
        self.teams = teams
        self.keys = keys or StorageKeys()
        self.clock = clock

    # -------------------------- index --------------------------
    def _scan_team_lineups(self, team_id: str) -> list[Lineup]:
        found = []
        for key in self.store.list_keys(self.keys.lineup_prefix):
            lineup = self._read(key)
            if lineup is not None and lineup.team_id == team_id:
                found.append(lineup)
        found.sort(key=lambda item: (item.created_at, item.id))
        return found

    def _load_index(self, team_id: str) -> tuple[list[str], bool]:
        key = self.keys.lineup_index(team_id)
        try:
            ids = codec.decode_ids(self.store.get(key))
        except DecodeError as exc:
            logger.warning("Lineup index %s is corrupt (%s); rebuilding from stored keys", key, exc.message)
            return [lineup.id for lineup in self._scan_team_lineups(team_id)], True
        deduped = unique(ids)
        return deduped, len(deduped) != len(ids)

    def _write_index(self, team_id: str, ids: list[str]) -> None:
        key = self.keys.lineup_index(team_id)
        if ids:
            self.store.set(key, codec.encode_ids(ids))
        else:
            self.store.remove(key)

    def _drop_from_index(self, team_id: str, lineup_id: str) -> None:
        ids, dirty = self._load_index(team_id)
        if lineup_id in ids or dirty:
            self._write_index(team_id, [i for i in ids if i != lineup_id])

    # -------------------------- reads --------------------------
    def _read(self, key: str) -> Optional[Lineup]:
        try:
            raw = self.store.get(key)
            if raw is None:
                return None
            return codec.decode_lineup(raw)
        except DecodeError as exc:
            logger.warning("Skipping unreadable lineup record %s: %s", key, exc.message)
            return None

    def get_lineup(self, lineup_id: str) -> Optional[Lineup]:
        if not lineup_id:
            return None
        lineup = self._read(self.keys.lineup(lineup_id))
        if lineup is not None and lineup.id != lineup_id:
            logger.warning("Lineup record %s holds mismatched id %s", lineup_id, lineup.id)
            return None
        return lineup

    def load_lineups(self, team_id: str) -> list[Lineup]:
        """Lineups of an existing team in insertion order; orphans are never returned."""
        if self.teams.get_team(team_id) is None:
            return []
        ids, _ = self._load_index(team_id)
        lineups = []
        for lineup_id in ids:
            lineup = self.get_lineup(lineup_id)
            if lineup is None:
                continue
            if lineup.team_id != team_id:
                logger.debug("Index of team %s lists lineup %s owned by %s", team_id, lineup_id, lineup.team_id)
                continue
            lineups.append(lineup)
        return lineups

    def get_default_lineup(self, team_id: str) -> Optional[Lineup]:
        for lineup in self.load_lineups(team_id):
            if lineup.is_default:
                return lineup
        return None

    # -------------------------- writes --------------------------
    def _write_flag(self, lineup: Lineup, is_default: bool, now: int) -> Lineup:
        _, updated_at = stamp(lineup.created_at, lineup.updated_at, now)
        changed = lineup.with_default(is_default, updated_at)
        self.store.set(self.keys.lineup(lineup.id), codec.encode_lineup(changed))
        return changed

    def _demote_defaults(self, lineups: list[Lineup], keep_id: str, now: int) -> int:
        demoted = 0
        for other in lineups:
            if other.id != keep_id and other.is_default:
                self._write_flag(other, False, now)
                demoted += 1
        return demoted

    @guarded("save lineup")
    def save_lineup(self, lineup: Lineup) -> Result:
        problem = validate_lineup(lineup)
        if problem:
            return Result.failure(ErrorKind.VALIDATION, problem)
        if self.teams.get_team(lineup.team_id) is None:
            return Result.failure(ErrorKind.INVALID_REFERENCE, f"Team {lineup.team_id} does not exist")

        previous = self.get_lineup(lineup.id)
        now = self.clock()
        created_at, updated_at = stamp(
            lineup.created_at or (previous.created_at if previous else 0),
            previous.updated_at if previous else 0,
            now,
        )
        stored = replace(
            lineup,
            name=lineup.name.strip(),
            positions=dict(lineup.positions),
            created_at=created_at,
            updated_at=updated_at,
        )

        if stored.is_default:
            # saving a default is a promotion: demote the others before the write lands
            self._demote_defaults(self.load_lineups(stored.team_id), stored.id, now)
        self.store.set(self.keys.lineup(stored.id), codec.encode_lineup(stored))

        ids, dirty = self._load_index(stored.team_id)
        if stored.id not in ids:
            ids.append(stored.id)
            dirty = True
        if dirty:
            self._write_index(stored.team_id, ids)
        if previous is not None and previous.team_id != stored.team_id:
            self._drop_from_index(previous.team_id, stored.id)
        logger.debug("Saved lineup %s for team %s", stored.id, stored.team_id)
        return Result.success(stored)

    @guarded("set default lineup")
    def set_default_lineup(self, team_id: str, lineup_id: str) -> Result:
        lineups = self.load_lineups(team_id)
        target = next((item for item in lineups if item.id == lineup_id), None)
        if target is None:
            return Result.failure(ErrorKind.NOT_FOUND, f"Lineup {lineup_id} not found for team {team_id}")

        now = self.clock()
        # clears every stray default, including ones left by an interrupted earlier call
        demoted = self._demote_defaults(lineups, lineup_id, now)
        if not target.is_default:
            target = self._write_flag(target, True, now)
        if demoted:
            logger.info("Default lineup of team %s is now %s (%d demoted)", team_id, lineup_id, demoted)
        return Result.success(target)

    @guarded("delete lineup")
    def delete_lineup(self, lineup_id: str) -> Result:
        previous = self.get_lineup(lineup_id)
        self.store.remove(self.keys.lineup(lineup_id))
        if previous is not None:
            self._drop_from_index(previous.team_id, lineup_id)
        else:
            # record missing or unreadable: look for the id in every team index
            prefix = self.keys.lineup_index_prefix
            for key in self.store.list_keys(prefix):
                self._drop_from_index(self.keys.id_from(key, prefix), lineup_id)
        return Result.success()

    @guarded("delete lineups for team")
    def delete_all_for_team(self, team_id: str) -> Result:
        """Cascade target of TeamRepository.delete_team."""
        indexed, _ = self._load_index(team_id)
        indexed_ids = set(indexed)
        prefix = self.keys.lineup_prefix
        removed = 0
        # sweep all records so lineups missing from the index are removed too
        for key in self.store.list_keys(prefix):
            lineup_id = self.keys.id_from(key, prefix)
            lineup = self._read(key)
            owned = lineup.team_id == team_id if lineup is not None else lineup_id in indexed_ids
            if owned:
                self.store.remove(key)
                removed += 1
        self.store.remove(self.keys.lineup_index(team_id))
        if removed:
            logger.info("Removed %d lineups of team %s", removed, team_id)
        return Result.success(removed)
