# src/logging/context.py — v1
"""Contextual logging support: attach the current target and comparison side.

Context variables are copied into each asyncio task, so the two sides of a
comparison harvested concurrently keep separate values.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_target: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "target", default=None
)
_side: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "side", default=None
)
_command: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "command", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    target: str | None = None
    side: str | None = None
    command: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        target=_target.get(),
        side=_side.get(),
        command=_command.get(),
    )


def set_command_context(command: str) -> None:
    """Set the CLI command being executed (compare, prompt, cache, status)."""
    _command.set(command)


def set_target_context(target: str, side: str | None = None) -> None:
    """Set the target being harvested; side is "left" or "right" when known."""
    _target.set(target)
    if side is not None:
        _side.set(side)


def clear_context() -> None:
    """Reset all context variables."""
    _target.set(None)
    _side.set(None)
    _command.set(None)
