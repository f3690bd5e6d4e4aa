"""Key-value adapter backed by SQLAlchemy (one row per key)."""
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from roster.db.models import KVEntry, create_all
from roster.db.session import get_session
from roster.domain.results import StoreUnavailableError

logger = logging.getLogger(__name__)


class SQLKeyValueStore:
    """get/set/remove/list_keys over the kv_entries table."""

    def __init__(self, *, ensure_schema: bool = False) -> None:
        if ensure_schema:
            try:
                create_all()
            except SQLAlchemyError as exc:
                raise StoreUnavailableError(f"Failed to create kv_entries: {exc}") from exc

    def get(self, key: str) -> str | None:
        try:
            with get_session() as session:
                entry = session.get(KVEntry, key)
                return entry.value if entry else None
        except SQLAlchemyError as exc:
            logger.error("SQL read failed for %s: %s", key, exc)
            raise StoreUnavailableError(f"Failed to read {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        now = datetime.now(timezone.utc)
        stmt = update(KVEntry).where(KVEntry.key == key).values(value=value, updated_at=now)
        try:
            with get_session() as session:
                if session.execute(stmt).rowcount:
                    session.commit()
                    return
                try:
                    session.execute(insert(KVEntry).values(key=key, value=value, updated_at=now))
                    session.commit()
                except IntegrityError:
                    # Another writer inserted the row first; last write wins.
                    session.rollback()
                    session.execute(stmt)
                    session.commit()
        except SQLAlchemyError as exc:
            logger.error("SQL write failed for %s: %s", key, exc)
            raise StoreUnavailableError(f"Failed to write {key}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            with get_session() as session:
                session.execute(delete(KVEntry).where(KVEntry.key == key))
                session.commit()
        except SQLAlchemyError as exc:
            logger.error("SQL delete failed for %s: %s", key, exc)
            raise StoreUnavailableError(f"Failed to remove {key}: {exc}") from exc

    def list_keys(self, prefix: str = "") -> list[str]:
        stmt = select(KVEntry.key).order_by(KVEntry.key)
        if prefix:
            stmt = stmt.where(KVEntry.key.startswith(prefix, autoescape=True))
        try:
            with get_session() as session:
                keys = session.execute(stmt).scalars().all()
        except SQLAlchemyError as exc:
            logger.error("SQL key listing failed for prefix %s: %s", prefix, exc)
            raise StoreUnavailableError(f"Failed to list keys: {exc}") from exc
        # LIKE is case-insensitive on SQLite
        return [key for key in keys if key.startswith(prefix)]
