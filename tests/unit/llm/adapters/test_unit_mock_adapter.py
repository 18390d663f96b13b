# tests/unit/llm/adapters/test_unit_mock_adapter.py — v1
"""Tests for llm/adapters/mock_adapter.py — offline deterministic backend."""

from __future__ import annotations

import pytest

from versus.llm.adapters.mock_adapter import MAX_PREVIEW_CHARS, MockAdapter


class TestMockAdapter:
    @pytest.mark.asyncio
    async def test_identity(self):
        result = await MockAdapter(model="ignored").generate("hello")
        assert result.backend_used == "mock"
        assert result.model_used == "mock"

    @pytest.mark.asyncio
    async def test_includes_short_prompt(self):
        result = await MockAdapter().generate("Compare nano and vim")
        assert result.text.startswith("Mock backend selected.")
        assert "Compare nano and vim" in result.text
        assert "(truncated)" not in result.text

    @pytest.mark.asyncio
    async def test_long_prompt_preview_truncated(self):
        prompt = "word " * 1000
        result = await MockAdapter().generate(prompt)
        assert "Prompt preview (truncated):" in result.text
        assert len(result.text) < len(prompt)

    @pytest.mark.asyncio
    async def test_deterministic(self):
        a = await MockAdapter().generate("x" * (MAX_PREVIEW_CHARS + 10))
        b = await MockAdapter().generate("x" * (MAX_PREVIEW_CHARS + 10))
        assert a.text == b.text
