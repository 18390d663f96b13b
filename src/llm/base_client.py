# src/llm/base_client.py — v1
"""Abstract text-generation backend interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from versus.llm.models import GenerationResult


class BackendError(RuntimeError):
    """Raised when a backend cannot produce a response.

    ``hint`` carries a short, user-facing remediation when one is known.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class BaseTextBackend(ABC):
    """Given a prompt, produce response text plus backend/model identifiers."""

    @abstractmethod
    async def generate(self, prompt: str) -> GenerationResult:
        """Generate a response for prompt."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend identifier (openai, gemini, ollama, mock)."""

    @property
    @abstractmethod
    def model(self) -> str:
        """Model that will be used."""
