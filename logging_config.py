"""Central logging configuration driven by LOG_LEVEL and LOG_FILE."""

import logging
import os
from pathlib import Path
from typing import Optional

_CONFIGURED = False


def configure_logging() -> None:
    """
    Configure global logging once.

    LOG_LEVEL: 0 (default) silent, 1 INFO, 2+ DEBUG.
    LOG_FILE : destination file; without it output goes to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    level = _read_level(os.getenv("LOG_LEVEL", "0"))
    if level is None or level <= 0:
        _CONFIGURED = True
        return

    kwargs = {
        "level":  _map_level(level),
        "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    }
    log_path = os.getenv("LOG_FILE")
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        kwargs["filename"] = str(log_file)
        kwargs["filemode"] = "a"

    logging.basicConfig(**kwargs)
    _CONFIGURED = True


def _read_level(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


def _map_level(level: int) -> int:
    if level >= 2:
        return logging.DEBUG
    return logging.INFO
