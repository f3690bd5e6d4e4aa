"""
Configuration helpers for the roster backend.

Settings are read once from environment variables so that repositories and
routers do not fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = ("memory", "file", "sql")


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    storage_backend: str
    storage_dir: str
    database_url: str
    storage_key_prefix: str
    log_level: str
    cors_origins: tuple[str, ...]
    sql_echo: bool


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _bool(value: str | None, default: bool = False) -> bool:
        if value is None:
            return default
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def _list(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip() for item in (value or "").split(",") if item.strip())

    backend = (os.getenv("STORAGE_BACKEND") or "file").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "file"

    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
        log_level = "INFO"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        storage_backend=backend,
        storage_dir=os.getenv("STORAGE_DIR", os.path.join("data", "kv")),
        database_url=os.getenv("DATABASE_URL", ""),
        storage_key_prefix=os.getenv("STORAGE_KEY_PREFIX", "competehq_"),
        log_level=log_level,
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
        sql_echo=_bool(os.getenv("SQL_ECHO"), False),
    )
