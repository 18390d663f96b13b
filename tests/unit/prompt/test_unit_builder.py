# tests/unit/prompt/test_unit_builder.py — v1
"""Tests for prompt/builder.py — comparison prompt construction."""

from __future__ import annotations

from versus.prompt.builder import NO_DOCS_PLACEHOLDER, build_prompt


class TestBuildPrompt:
    def test_names_both_targets(self):
        prompt = build_prompt("curl", "wget")
        assert 'Task: Compare "curl" and "wget" for a developer.' in prompt
        assert "3) When to use curl" in prompt
        assert "4) When to use wget" in prompt

    def test_docs_blocks_in_order(self):
        prompt = build_prompt("curl", "wget", left_docs="LEFT DOCS", right_docs="RIGHT DOCS")
        left_at = prompt.index("--- DOCS: curl ---\nLEFT DOCS")
        right_at = prompt.index("--- DOCS: wget ---\nRIGHT DOCS")
        assert left_at < right_at
        assert "Use the provided docs as the most reliable source." in prompt

    def test_missing_docs_placeholder(self):
        prompt = build_prompt("curl", "wget", left_docs="  ", right_docs="")
        assert prompt.count(NO_DOCS_PLACEHOLDER) == 2
        assert "No docs were provided" in prompt

    def test_one_side_docs_still_grounded(self):
        prompt = build_prompt("curl", "wget", left_docs="LEFT")
        assert "Use the provided docs" in prompt
        assert f"--- DOCS: wget ---\n{NO_DOCS_PLACEHOLDER}" in prompt

    def test_level(self):
        assert "Audience: Beginner" in build_prompt("a", "b", level="beginner")
        assert "Audience: Advanced" in build_prompt("a", "b", level="advanced")
        assert "Audience: Intermediate" in build_prompt("a", "b")

    def test_mode(self):
        assert "Mode: table. Prioritize a clear comparison table" in build_prompt("a", "b", mode="table")
        assert "Mode: cheatsheet. Include practical flags" in build_prompt("a", "b", mode="cheatsheet")
        assert "Mode: summary. Keep it concise" in build_prompt("a", "b")

    def test_deterministic(self):
        assert build_prompt("a", "b", "x", "y") == build_prompt("a", "b", "x", "y")
