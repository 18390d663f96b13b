# src/prompt/builder.py — v1
"""Comparison prompt construction.

Any change to the wording or structure here changes generated responses:
bump ``versus.cache.fingerprint.CACHE_SCHEMA_VERSION`` along with it.
"""

from __future__ import annotations

NO_DOCS_PLACEHOLDER = "[no local docs found]"

_AUDIENCE = {
    "beginner": "Beginner (use simple language, minimal jargon, short explanations).",
    "advanced": (
        "Advanced (assume Linux comfort; include nuanced tradeoffs/perf details "
        "when relevant)."
    ),
}
_DEFAULT_AUDIENCE = "Intermediate (developer-friendly; explain jargon once)."

_MODE_GUIDE = {
    "cheatsheet": "Include practical flags and a few example commands. Keep it under ~450 words.",
    "table": "Prioritize a clear comparison table (4–8 rows) and keep other text short.",
}
_DEFAULT_MODE_GUIDE = "Keep it concise (under ~250 words)."

_DOCS_NOTE = (
    "Use the provided docs as the most reliable source. If the docs are missing "
    "or unclear, say so and then use general knowledge."
)
_NO_DOCS_NOTE = (
    "No docs were provided; use general knowledge, but be explicit that you are "
    "not grounded in local docs."
)


def build_prompt(
    left: str,
    right: str,
    left_docs: str = "",
    right_docs: str = "",
    level: str = "intermediate",
    mode: str = "summary",
) -> str:
    """Build the Markdown-answer prompt comparing two targets."""
    left_block = (left_docs or "").strip()
    right_block = (right_docs or "").strip()
    docs_note = _DOCS_NOTE if (left_block or right_block) else _NO_DOCS_NOTE

    return "\n".join(
        [
            "You are a Linux expert and a careful technical writer.",
            "",
            f'Task: Compare "{left}" and "{right}" for a developer.',
            f"Audience: {_AUDIENCE.get(level, _DEFAULT_AUDIENCE)}",
            f"Mode: {mode}. {_MODE_GUIDE.get(mode, _DEFAULT_MODE_GUIDE)}",
            "",
            "Output format: Markdown.",
            "Rules:",
            f"- {docs_note}",
            "- Do NOT invent flags that look plausible. If you are unsure, say you are unsure.",
            "- Avoid fluff. Be helpful and specific.",
            "",
            "Required structure:",
            "1) One-line verdict",
            "2) Short overview",
            f"3) When to use {left}",
            f"4) When to use {right}",
            "5) Key differences table",
            "6) Examples (2–3 per side) if you can do so safely",
            "7) Common mistakes / gotchas",
            "",
            f"--- DOCS: {left} ---",
            left_block or NO_DOCS_PLACEHOLDER,
            "",
            f"--- DOCS: {right} ---",
            right_block or NO_DOCS_PLACEHOLDER,
            "",
        ]
    )
