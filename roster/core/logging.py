"""Logging setup for the API process and the CLI scripts."""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach one stream handler to the ``roster`` logger tree."""
    root = logging.getLogger("roster")
    root.setLevel(level.upper())
    if any(getattr(h, "_roster_handler", False) for h in root.handlers):
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._roster_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.debug("Logging initialized with level: %s", level.upper())
