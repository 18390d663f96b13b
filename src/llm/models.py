# src/llm/models.py — v1
"""Generation types shared by all backends."""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_MODELS: dict[str, str] = {
    "openai": "gpt-5.2",
    "gemini": "gemini-2.5-flash",
    "ollama": "llama3.2",
    "mock": "mock",
}


class GenerationResult(BaseModel):
    """Normalized response from any backend."""

    text: str
    backend_used: str
    model_used: str
    latency_ms: int = 0
