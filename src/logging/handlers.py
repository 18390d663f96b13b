# src/logging/handlers.py — v1
"""Rotating file handler for the optional VERSUS_LOG_FILE."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_RE = re.compile(r"^(\d+)\s*(B|KB|MB|GB)?$", re.IGNORECASE)
_MULTIPLIERS = {"B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Parse a size like '512KB' or '10MB' into bytes (bare numbers are bytes)."""
    match = _SIZE_RE.match(size_str.strip())
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "B").upper()
    return int(match.group(1)) * _MULTIPLIERS[unit]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "5MB",
    backups: int = 3,
) -> RotatingFileHandler:
    """Create a size-rotated file handler, creating the parent directory.

    The file is opened lazily on the first record so that a CLI invocation
    that logs nothing leaves no empty file behind.
    """
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=backups,
        encoding="utf-8",
        delay=True,
    )
