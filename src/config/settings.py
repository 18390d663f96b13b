# src/config/settings.py — v1
"""Typed configuration loaded from the environment and .env via pydantic-settings.

Every setting can be supplied as ``VERSUS_<NAME>``; provider credentials
also accept their conventional names (OPENAI_API_KEY, GEMINI_API_KEY,
OLLAMA_BASE_URL). CLI flags override these values per invocation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Level = Literal["beginner", "intermediate", "advanced"]
Mode = Literal["summary", "cheatsheet", "table"]
ColorMode = Literal["auto", "always", "never"]


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="VERSUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === Comparison defaults ===
    backend: str = "auto"
    model: str | None = None
    level: Level = "intermediate"
    mode: Mode = "summary"
    include_docs: bool = True

    # === Evidence harvesting ===
    max_doc_chars: int = 6000
    harvest_timeout_ms: int = 1200

    # === Cache ===
    cache_enabled: bool = True
    cache_dir: Path | None = None
    ttl_hours: int = 720

    # === Output ===
    color: ColorMode = "auto"

    # === Providers ===
    openai_api_key: str = Field(
        default="", validation_alias=AliasChoices("OPENAI_API_KEY", "VERSUS_OPENAI_API_KEY")
    )
    openai_base_url: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENAI_BASE_URL", "VERSUS_OPENAI_BASE_URL"),
    )
    gemini_api_key: str = Field(
        default="", validation_alias=AliasChoices("GEMINI_API_KEY", "VERSUS_GEMINI_API_KEY")
    )
    ollama_base_url: str = Field(
        default="http://localhost:11434",
        validation_alias=AliasChoices("OLLAMA_BASE_URL", "VERSUS_OLLAMA_BASE_URL"),
    )

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    log_format: Literal["json", "text"] = "text"
    log_file: Path | None = None

    # --- Validators ---

    @field_validator("backend")
    @classmethod
    def normalize_backend(cls, v: str) -> str:
        return v.strip().lower() or "auto"

    @field_validator("max_doc_chars", "harvest_timeout_ms")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Cross-field consistency rules."""
        errors: list[str] = []

        if self.ttl_hours < 0:
            errors.append("TTL_HOURS must be >= 0 (0 disables expiry)")

        if self.backend == "openai" and not self.openai_api_key:
            errors.append("BACKEND=openai requires OPENAI_API_KEY")

        if self.backend == "gemini" and not self.gemini_api_key:
            errors.append("BACKEND=gemini requires GEMINI_API_KEY")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from environment/.env with optional overrides.

    Args:
        **overrides: Field-level overrides (CLI flags, tests).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
