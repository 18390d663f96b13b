# tests/unit/test_unit_status.py — v1
"""Tests for status.py — environment report."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from versus.render.theme import Theme
from versus.status import check_man, run_status

PROBE = "versus.llm.adapters.ollama_adapter.probe_ollama"


class TestCheckMan:
    @pytest.mark.asyncio
    async def test_output_present(self, executor):
        executor.add("man", "-P", "cat", "ls", stdout="LS(1) User Commands LS(1)", exit_code=1)
        assert await check_man(executor) is True

    @pytest.mark.asyncio
    async def test_no_output(self, executor):
        assert await check_man(executor) is False


class TestRunStatus:
    @pytest.mark.asyncio
    async def test_report(self, executor, settings, cache_store, sample_entry):
        executor.add("man", "-P", "cat", "ls", stdout="LS(1) User Commands LS(1)")
        await cache_store.set("k" * 64, sample_entry)
        settings = settings.model_copy(update={"gemini_api_key": "g"})

        with patch(PROBE, new=AsyncMock(return_value=(True, ["llama3.2:latest"]))):
            report = await run_status(settings, executor, cache_store)

        assert report.ok is True
        assert report.man_ok is True
        assert report.cache.entry_count == 1
        assert report.openai_key is False
        assert report.gemini_key is True
        assert report.ollama.models == ["llama3.2:latest"]

    @pytest.mark.asyncio
    async def test_human_lines_plain(self, executor, settings, cache_store):
        with patch(PROBE, new=AsyncMock(return_value=(False, []))):
            report = await run_status(settings, executor, cache_store)

        text = "\n".join(report.human_lines(Theme.plain()))
        assert report.ok is False
        assert "✖ man pages available" in text
        assert "OpenAI key not set (OPENAI_API_KEY)" in text
        assert "Ollama not reachable at http://localhost:11434" in text
        assert "\x1b[" not in text
