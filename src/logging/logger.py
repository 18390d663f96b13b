# src/logging/logger.py — v1
"""Logger factory with JSON and text formatters.

Console output goes to stderr: stdout is reserved for comparison results,
prompts and JSON reports.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from versus.logging.context import get_context

ROOT_LOGGER = "versus"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, with the current target context."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context_dict = get_context().as_dict()
        if context_dict:
            log_entry["context"] = context_dict

        if hasattr(record, "data") and record.data:  # type: ignore[attr-defined]
            log_entry["data"] = record.data  # type: ignore[attr-defined]

        if record.exc_info and record.exc_info[1] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Compact human-readable formatter for terminal use."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        parts = [
            datetime.now().strftime("%H:%M:%S"),
            f"[{record.levelname:7s}]",
            record.name,
        ]
        if ctx.side:
            parts.append(f"<{ctx.side}>")
        if ctx.target:
            parts.append(f"({ctx.target})")
        parts.append(f"- {record.getMessage()}")
        line = " ".join(parts)
        if record.exc_info and record.exc_info[1] is not None:
            line += "\n" + self.formatException(record.exc_info)
        return line


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the versus namespace."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "WARNING",
    log_format: str = "text",
    log_file: str | Path | None = None,
    rotation: str = "5MB",
    backups: int = 3,
) -> None:
    """Configure the root versus logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_format: "json" or "text".
        log_file: Optional path of a rotated log file.
        rotation: Max file size before rotation (e.g. "5MB").
        backups: Number of rotated files to keep.
    """
    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root_logger.propagate = False

    # Re-init replaces handlers instead of stacking them.
    root_logger.handlers.clear()

    formatter: logging.Formatter
    if log_format == "json":
        formatter = JsonFormatter()
    else:
        formatter = TextFormatter()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        from versus.logging.handlers import create_rotating_handler

        file_handler = create_rotating_handler(log_file, rotation=rotation, backups=backups)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    for noisy in ("httpx", "httpcore", "openai"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
