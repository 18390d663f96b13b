# tests/conftest.py — v1
"""Shared test fixtures for all unit and integration tests.

Provides a scripted process executor, mock generation backends, sample
evidence bundles and temp cache stores. No real subprocess or network
calls happen in unit tests.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from versus.cache.json_store import JsonCacheStore
from versus.cache.models import CacheEntry
from versus.config.settings import Settings
from versus.harvest.executor import BaseProcessExecutor, ProcessResult
from versus.harvest.models import DocBundle, EvidenceKind, EvidenceSource
from versus.llm.base_client import BaseTextBackend
from versus.llm.models import GenerationResult
from versus.logging.context import clear_context


class ScriptedExecutor(BaseProcessExecutor):
    """Executor returning canned results keyed by (cmd, *args).

    Unknown invocations behave like a missing binary. Every call is
    recorded in ``calls`` in order.
    """

    def __init__(self, responses: dict[tuple[str, ...], ProcessResult] | None = None):
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, ...]] = []

    def add(self, *argv: str, stdout: str = "", exit_code: int = 0) -> None:
        self.responses[tuple(argv)] = ProcessResult(stdout=stdout, exit_code=exit_code)

    async def run(self, cmd, args, timeout_ms=1200):
        key = (cmd, *args)
        self.calls.append(key)
        return self.responses.get(key, ProcessResult(error=True))


# === FIXTURES: Settings ===


@pytest.fixture
def settings(tmp_path: Path, monkeypatch) -> Settings:
    """Settings isolated from the developer's environment."""
    for name in (
        "OPENAI_API_KEY", "GEMINI_API_KEY", "OLLAMA_BASE_URL", "OPENAI_BASE_URL",
        "VERSUS_BACKEND", "VERSUS_MODEL", "VERSUS_CACHE_DIR", "NO_COLOR", "FORCE_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None, cache_dir=tmp_path / "cache")


# === FIXTURES: Harvesting ===


@pytest.fixture
def executor() -> ScriptedExecutor:
    return ScriptedExecutor()


@pytest.fixture
def sample_bundle() -> DocBundle:
    return DocBundle(
        docs="## man nano\nNANO(1) small and friendly editor",
        sources=[EvidenceSource(kind=EvidenceKind.MAN)],
    )


# === FIXTURES: Cache ===


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "versus" / "cache.json"


@pytest.fixture
def cache_store(cache_path: Path) -> JsonCacheStore:
    return JsonCacheStore(cache_path)


@pytest.fixture
def sample_entry() -> CacheEntry:
    return CacheEntry.create(
        text="# nano vs vim\nnano is simpler.",
        backend_used="openai",
        model_used="gpt-5.2",
        ttl_hours=720,
    )


# === FIXTURES: Backends ===


@pytest.fixture
def mock_backend() -> BaseTextBackend:
    """Backend whose generate() is an AsyncMock returning fixed text."""
    backend = AsyncMock(spec=BaseTextBackend)
    backend.name = "openai"
    backend.model = "gpt-5.2"
    backend.generate = AsyncMock(
        return_value=GenerationResult(
            text="## Verdict\nnano for quick edits.",
            backend_used="openai",
            model_used="gpt-5.2",
            latency_ms=42,
        )
    )
    return backend


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
