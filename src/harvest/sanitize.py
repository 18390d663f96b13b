# src/harvest/sanitize.py — v1
"""Target sanitizer: tokenize a raw target and gate it for process execution.

Tokens are passed straight into argument vectors (never through a shell), so
every token must match a restrictive grammar: an alphanumeric first
character followed by alphanumerics, ``.``, ``_``, ``+``, ``:`` or ``-``.
Slashes, quotes, whitespace and shell metacharacters are all rejected.
"""

from __future__ import annotations

import re

from versus.harvest.models import Target, TargetValidation

SAFE_TOKEN_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._+:-]*$")


class UnsafeTargetError(ValueError):
    """Raised when a target cannot be safely used as a process argument vector."""


class EmptyTargetError(UnsafeTargetError):
    """Raised when the target contains no tokens."""

    def __init__(self) -> None:
        super().__init__("Empty target")


class UnsafeTokenError(UnsafeTargetError):
    """Raised when a token fails the safe-token grammar."""

    def __init__(self, token: str, position: int = 0) -> None:
        self.token = token
        self.position = position
        label = "Unsafe command token" if position == 0 else "Unsafe token"
        super().__init__(f'{label}: "{token}"')


def tokenize_target(raw: str) -> list[str]:
    """Split on whitespace runs, dropping empty tokens."""
    return str(raw).split()


def is_safe_token(token: str) -> bool:
    return SAFE_TOKEN_RE.fullmatch(token) is not None


def parse_target(raw: str) -> Target:
    """Validate and tokenize a raw target.

    Raises:
        EmptyTargetError: If no tokens remain after splitting.
        UnsafeTokenError: For the first token failing the safe grammar.
    """
    tokens = tokenize_target(raw)
    if not tokens:
        raise EmptyTargetError()
    for position, token in enumerate(tokens):
        if not is_safe_token(token):
            raise UnsafeTokenError(token, position)
    return Target(raw=str(raw), tokens=tuple(tokens))


def validate_target(raw: str) -> TargetValidation:
    """Non-raising variant of parse_target used by the harvester."""
    try:
        target = parse_target(raw)
    except UnsafeTargetError as exc:
        return TargetValidation(ok=False, reason=str(exc))
    return TargetValidation(ok=True, tokens=target.tokens)
