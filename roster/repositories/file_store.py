"""
File-backed key-value adapter.

Each key lives in its own UTF-8 file under a directory. Writes go through a
temp file and os.replace so a reader never observes a half-written value, and
several processes on the same machine can share the directory.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from urllib.parse import quote, unquote

from roster.domain.results import DecodeError, StoreUnavailableError

SUFFIX = ".json"


class FileKeyValueStore:
    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / (quote(key, safe="") + SUFFIX)

    def _ensure_root(self) -> None:
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StoreUnavailableError(f"Storage directory {self.root} is not usable: {exc}") from exc

    def get(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Value stored under {key} is not valid UTF-8: {exc.reason}") from exc
        except OSError as exc:
            raise StoreUnavailableError(f"Failed to read {key}: {exc}") from exc

    def set(self, key: str, value: str) -> None:
        self._ensure_root()
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(dir=self.root, prefix=".tmp-", suffix=SUFFIX)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, self._path(key))
        except OSError as exc:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
            raise StoreUnavailableError(f"Failed to write {key}: {exc}") from exc

    def remove(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            return
        except OSError as exc:
            raise StoreUnavailableError(f"Failed to remove {key}: {exc}") from exc

    def list_keys(self, prefix: str = "") -> list[str]:
        if not self.root.exists():
            return []
        try:
            names = sorted(os.listdir(self.root))
        except OSError as exc:
            raise StoreUnavailableError(f"Failed to list {self.root}: {exc}") from exc
        keys = []
        for name in names:
            if name.startswith(".tmp-") or not name.endswith(SUFFIX):
                continue
            key = unquote(name[: -len(SUFFIX)])
            if key.startswith(prefix):
                keys.append(key)
        return keys
