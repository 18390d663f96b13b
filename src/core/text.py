# src/core/text.py — v1
"""Shared text utilities: hashing, ANSI/overstrike cleanup, truncation.

Used by the harvester (normalizing man/--help output), the cache key
derivation, and the terminal renderer (visible width of styled cells).
"""

from __future__ import annotations

import hashlib
import re

from rich.cells import cell_len

TRUNCATION_SUFFIX = "\n\n[...truncated...]\n"

# CSI sequences: ESC [ parameter bytes, intermediate bytes, final byte.
_ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
# man output emulates bold/underline as "X\bX" or "_\bX".
_OVERSTRIKE_RE = re.compile(r".\x08", re.DOTALL)
_BLANK_RUN_RE = re.compile(r"\n{3,}")
_HSPACE_RUN_RE = re.compile(r"[ \t]{2,}")


def sha256(text: str) -> str:
    """SHA-256 hex digest of the UTF-8 encoded text."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def strip_ansi(text: str) -> str:
    """Remove ANSI CSI escape sequences."""
    return _ANSI_RE.sub("", text)


def strip_overstrikes(text: str) -> str:
    """Remove every ``char + backspace`` pair left by paginated manuals."""
    return _OVERSTRIKE_RE.sub("", text)


def normalize_text(text: str | None) -> str:
    """Normalize raw command output into compact plain text.

    Unifies line endings, strips ANSI and overstrike formatting, collapses
    3+ consecutive newlines into a single blank line and runs of horizontal
    whitespace into one space, then trims.
    """
    t = text or ""
    t = t.replace("\r\n", "\n").replace("\r", "\n")
    t = strip_ansi(t)
    t = strip_overstrikes(t)
    t = _BLANK_RUN_RE.sub("\n\n", t)
    t = _HSPACE_RUN_RE.sub(" ", t)
    return t.strip()


def truncate(text: str | None, max_chars: int, suffix: str = TRUNCATION_SUFFIX) -> str:
    """Hard-cut text to max_chars and append suffix when it was longer."""
    t = text or ""
    if max_chars <= 0:
        return ""
    if len(t) <= max_chars:
        return t
    return t[:max_chars] + suffix


def truncate_at_word_boundary(
    text: str | None, max_chars: int, suffix: str = TRUNCATION_SUFFIX
) -> str:
    """Truncate without chopping a word in half when possible.

    Looks for the last whitespace in the first ``max_chars + 1`` characters
    and cuts there. Falls back to a hard cut for a single long token.

    Args:
        text: Input text.
        max_chars: Character budget (excluding suffix).
        suffix: Appended when the text was shortened.

    Returns:
        The (possibly) shortened text.
    """
    t = text or ""
    if max_chars <= 0:
        return ""
    if len(t) <= max_chars:
        return t

    window = t[: max_chars + 1]
    last_ws = max(window.rfind(" "), window.rfind("\n"), window.rfind("\t"))
    cut = last_ws if last_ws >= 0 else max_chars
    return t[:cut].rstrip() + suffix


def visible_width(text: str) -> int:
    """Terminal cell width of text once style codes are removed."""
    return cell_len(strip_ansi(text))
