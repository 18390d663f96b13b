# tests/unit/config/test_unit_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from versus.config.settings import ConfigurationError, Settings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "OPENAI_API_KEY", "GEMINI_API_KEY", "OLLAMA_BASE_URL", "OPENAI_BASE_URL",
        "VERSUS_BACKEND", "VERSUS_MODEL", "VERSUS_CACHE_DIR", "VERSUS_TTL_HOURS",
    ):
        monkeypatch.delenv(name, raising=False)


class TestSettingsDefaults:
    def test_comparison_defaults(self):
        s = Settings(_env_file=None)
        assert s.backend == "auto"
        assert s.model is None
        assert s.level == "intermediate"
        assert s.mode == "summary"
        assert s.include_docs is True

    def test_harvest_defaults(self):
        s = Settings(_env_file=None)
        assert s.max_doc_chars == 6000
        assert s.harvest_timeout_ms == 1200

    def test_cache_defaults(self):
        s = Settings(_env_file=None)
        assert s.cache_enabled is True
        assert s.cache_dir is None
        assert s.ttl_hours == 720

    def test_provider_defaults(self):
        s = Settings(_env_file=None)
        assert s.openai_api_key == ""
        assert s.ollama_base_url == "http://localhost:11434"

    def test_logging_defaults(self):
        s = Settings(_env_file=None)
        assert s.log_level == "WARNING"
        assert s.log_format == "text"


class TestSettingsEnvironment:
    def test_prefixed_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("VERSUS_TTL_HOURS", "48")
        monkeypatch.setenv("VERSUS_CACHE_DIR", str(tmp_path))
        s = Settings(_env_file=None)
        assert s.ttl_hours == 48
        assert s.cache_dir == Path(tmp_path)

    def test_conventional_provider_names(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
        monkeypatch.setenv("OLLAMA_BASE_URL", "http://gpu:11434")
        s = Settings(_env_file=None)
        assert s.openai_api_key == "sk-env"
        assert s.ollama_base_url == "http://gpu:11434"

    def test_backend_normalized(self):
        assert Settings(_env_file=None, backend="  Mock ").backend == "mock"


class TestSettingsValidation:
    def test_negative_ttl(self):
        with pytest.raises(ConfigurationError, match="TTL_HOURS"):
            Settings(_env_file=None, ttl_hours=-1)

    def test_openai_without_key(self):
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            Settings(_env_file=None, backend="openai")

    def test_gemini_without_key(self):
        with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
            Settings(_env_file=None, backend="gemini")

    def test_errors_combined(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(_env_file=None, backend="openai", ttl_hours=-5)
        assert "; " in str(exc_info.value)

    def test_nonpositive_doc_chars(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, max_doc_chars=0)

    def test_bad_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, level="expert")


class TestLoadSettings:
    def test_overrides(self):
        s = load_settings(_env_file=None, backend="mock", mode="table")
        assert s.backend == "mock"
        assert s.mode == "table"
