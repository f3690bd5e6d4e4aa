"""Façade composing the team and lineup repositories behind one entry point."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from roster.core.config import Settings, get_settings
from roster.domain.models import now_ms
from roster.domain.results import StoreUnavailableError
from roster.repositories.file_store import FileKeyValueStore
from roster.repositories.keys import StorageKeys
from roster.repositories.kv_store import KeyValueStore, MemoryKeyValueStore
from roster.repositories.lineup_repository import LineupRepository
from roster.repositories.team_repository import TeamRepository

logger = logging.getLogger(__name__)

PROBE_SUFFIX = "__probe__"


class StorageService:
    """
    One composed entry point for callers.

    ``team`` exposes the TeamRepository operations and ``lineup`` the
    LineupRepository ones. Deleting a team through ``team`` cascades into
    ``lineup``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        *,
        keys: StorageKeys | None = None,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._store = store
        self._keys = keys or StorageKeys()
        self.team = TeamRepository(store, self._keys, clock)
        self.lineup = LineupRepository(store, self.team, self._keys, clock)
        self.team.cascade_to(self.lineup)

    def is_available(self) -> bool:
        """Write, read back and remove a probe key."""
        probe = self._keys.prefix + PROBE_SUFFIX
        try:
            self._store.set(probe, "1")
            ok = self._store.get(probe) == "1"
            self._store.remove(probe)
            return ok
        except StoreUnavailableError as exc:
            logger.error("Storage health probe failed: %s", exc.message)
            return False


def build_store(settings: Settings) -> KeyValueStore:
    if settings.storage_backend == "memory":
        return MemoryKeyValueStore()
    if settings.storage_backend == "sql":
        from roster.repositories.sql_store import SQLKeyValueStore

        return SQLKeyValueStore(ensure_schema=True)
    return FileKeyValueStore(Path(settings.storage_dir))


def build_storage_service(settings: Settings | None = None) -> StorageService:
    settings = settings or get_settings()
    store = build_store(settings)
    logger.info("Storage backend: %s", settings.storage_backend)
    return StorageService(store, keys=StorageKeys(settings.storage_key_prefix))
