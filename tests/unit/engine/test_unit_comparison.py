# tests/unit/engine/test_unit_comparison.py — v1
"""Tests for engine/comparison.py — harvest, cache and generation wiring."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from versus.cache.models import CacheEntry
from versus.engine.comparison import (
    DOCS_DISABLED_REASON,
    ComparisonEngine,
    ComparisonOptions,
)
from versus.harvest.harvester import EvidenceHarvester
from versus.llm.base_client import BackendError


@pytest.fixture
def harvester(executor):
    executor.add("man", "-P", "cat", "nano", stdout="NANO(1) editor")
    executor.add("man", "-P", "cat", "vim", stdout="VIM(1) Vi IMproved")
    return EvidenceHarvester(executor)


@pytest.fixture
def resolver(mock_backend):
    return AsyncMock(return_value=mock_backend)


@pytest.fixture
def engine(harvester, cache_store, resolver, settings):
    return ComparisonEngine(harvester, cache_store, backend_resolver=resolver, settings=settings)


class TestComparisonOptions:
    def test_from_settings(self, settings):
        opts = ComparisonOptions.from_settings(settings)
        assert opts.backend == "auto"
        assert opts.ttl_hours == 720
        assert opts.max_doc_chars == 6000
        assert opts.cache is True

    def test_none_overrides_ignored(self, settings):
        opts = ComparisonOptions.from_settings(settings, level=None, mode="table", cache=False)
        assert opts.level == "intermediate"
        assert opts.mode == "table"
        assert opts.cache is False


class TestBuildPrompt:
    @pytest.mark.asyncio
    async def test_includes_both_sides(self, engine):
        bundle = await engine.build_prompt("nano", "vim", ComparisonOptions())
        assert "## man nano\nNANO(1) editor" in bundle.prompt
        assert "## man vim\nVIM(1) Vi IMproved" in bundle.prompt
        assert bundle.left.has_docs and bundle.right.has_docs

    @pytest.mark.asyncio
    async def test_docs_disabled_spawns_nothing(self, engine, executor):
        bundle = await engine.build_prompt("nano", "vim", ComparisonOptions(include_docs=False))
        assert executor.calls == []
        assert bundle.left.skipped == DOCS_DISABLED_REASON
        assert bundle.right.skipped == DOCS_DISABLED_REASON


class TestCompare:
    @pytest.mark.asyncio
    async def test_miss_generates_and_stores(self, engine, cache_store, mock_backend):
        result = await engine.compare("nano", "vim", ComparisonOptions())

        assert result.cached is False
        assert result.text == "## Verdict\nnano for quick edits."
        assert result.backend == "openai"
        assert result.meta.cache_hit is False
        mock_backend.generate.assert_awaited_once()
        stored = await cache_store.get(result.meta.cache_key)
        assert stored.text == result.text
        assert stored.expires_at is not None

    @pytest.mark.asyncio
    async def test_second_call_hits_cache(self, engine, resolver, mock_backend):
        first = await engine.compare("nano", "vim", ComparisonOptions())
        second = await engine.compare("nano", "vim", ComparisonOptions())

        assert second.cached is True
        assert second.text == first.text
        assert second.model == "gpt-5.2"
        assert second.meta.cache_key == first.meta.cache_key
        assert mock_backend.generate.await_count == 1
        assert resolver.await_count == 1

    @pytest.mark.asyncio
    async def test_no_cache_always_generates(self, engine, cache_store, mock_backend):
        opts = ComparisonOptions(cache=False)
        await engine.compare("nano", "vim", opts)
        result = await engine.compare("nano", "vim", opts)
        assert mock_backend.generate.await_count == 2
        assert (await cache_store.info()).entry_count == 0
        assert result.cached is False

    @pytest.mark.asyncio
    async def test_empty_cached_text_regenerates(self, engine, cache_store, mock_backend):
        first = await engine.compare("nano", "vim", ComparisonOptions())
        await cache_store.set(first.meta.cache_key, CacheEntry.create("", "openai", "gpt-5.2"))
        result = await engine.compare("nano", "vim", ComparisonOptions())
        assert result.cached is False
        assert mock_backend.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_ttl_zero_never_expires(self, engine, cache_store):
        result = await engine.compare("nano", "vim", ComparisonOptions(ttl_hours=0))
        assert (await cache_store.get(result.meta.cache_key)).expires_at is None

    @pytest.mark.asyncio
    async def test_different_level_misses(self, engine, mock_backend):
        await engine.compare("nano", "vim", ComparisonOptions())
        result = await engine.compare("nano", "vim", ComparisonOptions(level="beginner"))
        assert result.cached is False
        assert mock_backend.generate.await_count == 2

    @pytest.mark.asyncio
    async def test_backend_error_propagates_and_nothing_cached(
        self, engine, cache_store, mock_backend
    ):
        mock_backend.generate.side_effect = BackendError("down", hint="retry")
        with pytest.raises(BackendError):
            await engine.compare("nano", "vim", ComparisonOptions())
        assert (await cache_store.info()).entry_count == 0

    @pytest.mark.asyncio
    async def test_meta_sources_redacted(self, engine):
        result = await engine.compare("nano", "vim", ComparisonOptions())
        assert result.meta.sources == {"left": [{"kind": "man"}], "right": [{"kind": "man"}]}
        assert result.meta.skipped == {"left": None, "right": None}
