# src/render/theme.py — v1
"""Terminal styling capability.

A Theme is resolved once per invocation from the color mode and handed to
every formatting call site (renderer, CLI headers, status report). It is
never reconfigured afterwards; a disabled theme returns text unchanged.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from rich.color import ColorSystem
from rich.style import Style

_ALWAYS = {"always", "on", "true", "1", "yes"}
_NEVER = {"never", "off", "false", "0", "no"}


def normalize_color_mode(mode: str | None) -> str:
    """Map user spellings onto "auto", "always" or "never"."""
    m = (mode or "auto").strip().lower()
    if m in _ALWAYS:
        return "always"
    if m in _NEVER:
        return "never"
    return "auto"


def resolve_color_mode(
    mode: str | None,
    stdout_is_tty: bool,
    env: Mapping[str, str] | None = None,
) -> bool:
    """Decide whether ANSI styling is enabled.

    ``auto`` enables styling on a TTY unless NO_COLOR is present (any value)
    or FORCE_COLOR is "0".
    """
    env = os.environ if env is None else env
    m = normalize_color_mode(mode)
    if m == "always":
        return True
    if m == "never":
        return False
    return stdout_is_tty and "NO_COLOR" not in env and env.get("FORCE_COLOR") != "0"


@dataclass(frozen=True)
class Theme:
    """Immutable set of text styles."""

    enabled: bool = True

    _BOLD = Style(bold=True)
    _DIM = Style(dim=True)
    _UNDERLINE = Style(underline=True)
    _HEADING = Style(bold=True, color="cyan")
    _CODE = Style(dim=True, underline=True)
    _SUCCESS = Style(color="green")
    _WARNING = Style(color="yellow")
    _ERROR = Style(color="red")

    @classmethod
    def create(
        cls,
        color_mode: str | None = "auto",
        stdout_is_tty: bool = False,
        env: Mapping[str, str] | None = None,
    ) -> Theme:
        return cls(enabled=resolve_color_mode(color_mode, stdout_is_tty, env))

    @classmethod
    def plain(cls) -> Theme:
        return cls(enabled=False)

    def _apply(self, style: Style, text: str) -> str:
        if not self.enabled or not text:
            return text
        return style.render(text, color_system=ColorSystem.STANDARD)

    def bold(self, text: str) -> str:
        return self._apply(self._BOLD, text)

    def dim(self, text: str) -> str:
        return self._apply(self._DIM, text)

    def underline(self, text: str) -> str:
        return self._apply(self._UNDERLINE, text)

    def heading(self, text: str) -> str:
        """Bold cyan; used for every heading level."""
        return self._apply(self._HEADING, text)

    def code(self, text: str) -> str:
        """Inline code: muted and underlined, no background block."""
        return self._apply(self._CODE, text)

    def success(self, text: str) -> str:
        return self._apply(self._SUCCESS, text)

    def warning(self, text: str) -> str:
        return self._apply(self._WARNING, text)

    def error(self, text: str) -> str:
        return self._apply(self._ERROR, text)
