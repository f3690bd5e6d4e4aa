"""
Key-value storage contract used by the repositories.

Every adapter offers single-key get/set/remove plus prefix listing. Each call
is atomic on its own key; nothing spans keys. Adapters raise
StoreUnavailableError when the medium cannot be reached, and DecodeError from
get when the stored bytes cannot be read back as text.
"""
from __future__ import annotations

from typing import Protocol

from roster.domain.results import StoreUnavailableError


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None:
        """Return the stored value or None when the key is missing.

        Raises DecodeError when the stored bytes are not text.
        """

    def set(self, key: str, value: str) -> None:
        """Overwrite the value stored under key."""

    def remove(self, key: str) -> None:
        """Delete key; removing a missing key is not an error."""

    def list_keys(self, prefix: str = "") -> list[str]:
        """Return every stored key starting with prefix."""


class MemoryKeyValueStore:
    """Process-local store backed by a dict; used by tests and the memory backend."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self.available = True

    def _check(self) -> None:
        if not self.available:
            raise StoreUnavailableError("In-memory store marked unavailable")

    def get(self, key: str) -> str | None:
        self._check()
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._check()
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._check()
        self._data.pop(key, None)

    def list_keys(self, prefix: str = "") -> list[str]:
        self._check()
        return [key for key in self._data if key.startswith(prefix)]

    def snapshot(self) -> dict[str, str]:
        return dict(self._data)
