"""Helpers shared by the team and lineup repositories."""
from __future__ import annotations

import functools
import logging
from typing import Callable, Iterable

from roster.domain.results import ErrorKind, Result, StoreUnavailableError

logger = logging.getLogger(__name__)


def guarded(action: str) -> Callable:
    """Turn a StoreUnavailableError raised by a mutation into a failed Result."""

    def decorator(func: Callable[..., Result]) -> Callable[..., Result]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Result:
            try:
                return func(*args, **kwargs)
            except StoreUnavailableError as exc:
                logger.error("Store unavailable during %s: %s", action, exc.message)
                return Result.failure(ErrorKind.STORE_UNAVAILABLE, exc.message)

        return wrapper

    return decorator


def unique(ids: Iterable[str]) -> list[str]:
    """Drop repeated ids while keeping first-seen order."""
    seen: set[str] = set()
    out = []
    for item in ids:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out
