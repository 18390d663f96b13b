# src/llm/adapters/openai_adapter.py — v1
"""OpenAI adapter implementing BaseTextBackend.

Uses the official openai SDK (Responses API).
"""

from __future__ import annotations

import time
from typing import Any

from versus.llm.base_client import BackendError, BaseTextBackend
from versus.llm.models import DEFAULT_MODELS, GenerationResult

_NETWORK_HINT = "Check your internet connection and DNS."


class OpenAIAdapter(BaseTextBackend):
    """OpenAI Responses API adapter."""

    def __init__(
        self,
        model: str | None = None,
        api_key: str = "",
        base_url: str | None = None,
        **kwargs: Any,
    ):
        self._model = model or DEFAULT_MODELS["openai"]
        self._api_key = api_key
        self._base_url = base_url

    async def generate(self, prompt: str) -> GenerationResult:
        import openai

        if not self._api_key:
            raise BackendError(
                "OPENAI_API_KEY is not set.",
                hint='Export your API key: export OPENAI_API_KEY="..."',
            )

        client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)

        t0 = time.monotonic()
        try:
            resp = await client.responses.create(model=self._model, input=prompt)
        except openai.AuthenticationError as exc:
            raise BackendError(
                f"OpenAI request failed: {exc}", hint="Check that OPENAI_API_KEY is valid."
            ) from exc
        except openai.APIConnectionError as exc:
            raise BackendError(f"OpenAI request failed: {exc}", hint=_NETWORK_HINT) from exc
        except openai.OpenAIError as exc:
            raise BackendError(f"OpenAI request failed: {exc}") from exc
        latency = int((time.monotonic() - t0) * 1000)

        return GenerationResult(
            text=(resp.output_text or "").strip(),
            backend_used=self.name,
            model_used=self._model,
            latency_ms=latency,
        )

    @property
    def name(self) -> str:
        return "openai"

    @property
    def model(self) -> str:
        return self._model
