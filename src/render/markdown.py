# src/render/markdown.py — v1
"""Markdown → ANSI terminal renderer.

Line-oriented: the only state carried across lines is whether a fenced code
block is open, plus table blocks which consume the lines they span.
Malformed input (unterminated fences, unbalanced markers) renders on a
best-effort basis instead of raising.
"""

from __future__ import annotations

import logging
import re

from versus.core.text import visible_width
from versus.render.theme import Theme

logger = logging.getLogger(__name__)

RULE_WIDTH = 40
BULLET = "•"

_FENCE = "```"
_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*)$")
_RULE_RE = re.compile(r"^([-*_])\1\1+$")
_QUOTE_RE = re.compile(r"^\s*>\s?(.*)$")
_UL_RE = re.compile(r"^(\s*)([-*+])\s+(.*)$")
_OL_RE = re.compile(r"^(\s*)(\d+)\.\s+(.*)$")
_TABLE_SEP_RE = re.compile(r"^[|:\-\s]+$")

_LINK_RE = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_BOLD_RE = re.compile(r"(\*\*|__)(.+?)\1")
# Single-marker emphasis, not inside words (snake_case stays intact).
_EMPHASIS_RE = re.compile(r"(?<!\w)([*_])([^*_]+?)\1(?!\w)")


def is_table_separator(line: str) -> bool:
    t = line.strip()
    return "|" in t and "-" in t and _TABLE_SEP_RE.match(t) is not None


def parse_table_row(line: str) -> list[str]:
    """Split a table row into trimmed cells, ignoring outer pipes."""
    t = line.strip()
    if t.startswith("|"):
        t = t[1:]
    if t.endswith("|"):
        t = t[:-1]
    return [cell.strip() for cell in t.split("|")]


def pad_visible(text: str, width: int) -> str:
    """Right-pad styled text to a visible width."""
    missing = width - visible_width(text)
    return text + " " * missing if missing > 0 else text


class MarkdownRenderer:
    """Renders Markdown for a terminal using a fixed Theme."""

    def __init__(self, theme: Theme | None = None) -> None:
        self._theme = theme or Theme()

    def render(self, markdown: str | None) -> str:
        md = (markdown or "").replace("\r\n", "\n").replace("\r", "\n")
        lines = md.split("\n")
        out: list[str] = []
        t = self._theme

        in_code = False
        idx = 0
        while idx < len(lines):
            line = lines[idx]
            trimmed = line.strip()

            if trimmed.startswith(_FENCE):
                in_code = not in_code
                out.append(t.dim(trimmed))
                idx += 1
                continue

            if in_code:
                out.append(t.dim(line))
                idx += 1
                continue

            if "|" in line and idx + 1 < len(lines) and is_table_separator(lines[idx + 1]):
                table_lines, idx = self._render_table(lines, idx)
                out.extend(table_lines)
                continue

            out.append(self._render_line(line, trimmed))
            idx += 1

        return "\n".join(out)

    def render_inline(self, text: str) -> str:
        """Apply inline styles; code spans are resolved first and left literal."""
        t = self._theme
        segments = text.split("`")
        rendered: list[str] = []
        for pos, segment in enumerate(segments):
            if pos % 2 == 1:
                rendered.append(t.code(segment))
                continue
            s = _LINK_RE.sub(
                lambda m: t.underline(m.group(1)) + t.dim(f" ({m.group(2)})"), segment
            )
            s = _BOLD_RE.sub(lambda m: t.bold(m.group(2)), s)
            # Underline instead of italics: terminals render italics inconsistently.
            s = _EMPHASIS_RE.sub(lambda m: t.underline(m.group(2)), s)
            rendered.append(s)
        return "".join(rendered)

    def _render_line(self, line: str, trimmed: str) -> str:
        t = self._theme

        heading = _HEADING_RE.match(line)
        if heading:
            return t.heading(heading.group(2).strip())

        if _RULE_RE.match(trimmed):
            return t.dim("─" * RULE_WIDTH)

        quote = _QUOTE_RE.match(line)
        if quote:
            return t.dim(f"│ {quote.group(1)}")

        bullet = _UL_RE.match(line)
        if bullet:
            return f"{bullet.group(1)}{BULLET} {self.render_inline(bullet.group(3))}"

        numbered = _OL_RE.match(line)
        if numbered:
            return f"{numbered.group(1)}{numbered.group(2)}. {self.render_inline(numbered.group(3))}"

        return self.render_inline(line)

    def _render_table(self, lines: list[str], start: int) -> tuple[list[str], int]:
        """Render the table starting at ``start``; returns lines and next index."""
        rows = [parse_table_row(lines[start])]
        idx = start + 2
        while idx < len(lines):
            line = lines[idx]
            if not line.strip() or "|" not in line:
                break
            rows.append(parse_table_row(line))
            idx += 1

        cols = max(len(r) for r in rows)
        for r in rows:
            r.extend([""] * (cols - len(r)))

        cells = [
            [
                self._theme.bold(self.render_inline(c)) if row_idx == 0 else self.render_inline(c)
                for c in row
            ]
            for row_idx, row in enumerate(rows)
        ]

        widths = [0] * cols
        for row in cells:
            for col, cell in enumerate(row):
                widths[col] = max(widths[col], visible_width(cell))

        border = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
        out = [border]
        for row_idx, row in enumerate(cells):
            out.append(
                "|" + "|".join(f" {pad_visible(cell, widths[col])} " for col, cell in enumerate(row)) + "|"
            )
            if row_idx == 0:
                out.append(border)
        out.append(border)
        return out, idx


def render_markdown(markdown: str | None, theme: Theme | None = None) -> str:
    """Render Markdown for the terminal (pure function)."""
    return MarkdownRenderer(theme).render(markdown)


def render_or_raw(markdown: str, theme: Theme | None = None) -> tuple[str, bool]:
    """Render, falling back to the raw source if rendering fails unexpectedly.

    Returns:
        (text, rendered) where rendered is False when the fallback was used.
    """
    try:
        return render_markdown(markdown, theme), True
    except Exception:
        logger.debug("Markdown rendering failed; showing raw text", exc_info=True)
        return markdown, False
