# src/llm/adapters/mock_adapter.py — v1
"""Offline backend: echoes a preview of the prompt with setup instructions."""

from __future__ import annotations

from typing import Any

from versus.core.text import truncate_at_word_boundary
from versus.llm.base_client import BaseTextBackend
from versus.llm.models import GenerationResult

MAX_PREVIEW_CHARS = 900


class MockAdapter(BaseTextBackend):
    """Deterministic backend used when no real provider is configured."""

    def __init__(self, model: str | None = None, **kwargs: Any):
        self._model = "mock"

    async def generate(self, prompt: str) -> GenerationResult:
        preview = truncate_at_word_boundary(prompt, MAX_PREVIEW_CHARS)
        truncated = len(prompt) > MAX_PREVIEW_CHARS
        text = "\n".join(
            [
                "Mock backend selected.",
                "",
                "Set one of:",
                "- OPENAI_API_KEY (and use --backend=openai)",
                "- GEMINI_API_KEY (and use --backend=gemini)",
                "- Install Ollama (and use --backend=ollama)",
                "",
                f"Prompt preview{' (truncated)' if truncated else ''}:",
                preview,
                "",
                "Tip: view the full prompt with:",
                "  versus prompt <left> <right>",
            ]
        )
        return GenerationResult(text=text, backend_used=self.name, model_used=self._model)

    @property
    def name(self) -> str:
        return "mock"

    @property
    def model(self) -> str:
        return self._model
