"""Tagged outcomes returned by every mutating storage operation."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    VALIDATION = "validation_error"
    INVALID_REFERENCE = "invalid_reference"
    NOT_FOUND = "not_found"
    DECODE = "decode_error"
    STORE_UNAVAILABLE = "store_unavailable"


class RosterStorageError(Exception):
    """Base class for persistence-layer exceptions."""

    kind: ErrorKind = ErrorKind.STORE_UNAVAILABLE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StoreUnavailableError(RosterStorageError):
    """Raised by key-value adapters when the underlying medium cannot be reached."""

    kind = ErrorKind.STORE_UNAVAILABLE


class DecodeError(RosterStorageError):
    """Raised when a stored value is corrupted or does not match the expected shape."""

    kind = ErrorKind.DECODE


@dataclass(frozen=True)
class Result:
    ok: bool
    error: ErrorKind | None = None
    message: str = ""
    value: Any = None

    def __bool__(self) -> bool:
        return self.ok

    @classmethod
    def success(cls, value: Any = None) -> "Result":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result":
        return cls(ok=False, error=kind, message=message)
