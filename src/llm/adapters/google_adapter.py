# src/llm/adapters/google_adapter.py — v1
"""Google Gemini adapter implementing BaseTextBackend.

Uses the google-generativeai SDK.
"""

from __future__ import annotations

import time
from typing import Any

from versus.llm.base_client import BackendError, BaseTextBackend
from versus.llm.models import DEFAULT_MODELS, GenerationResult


class GoogleAdapter(BaseTextBackend):
    """Google Gemini adapter."""

    def __init__(self, model: str | None = None, api_key: str = "", **kwargs: Any):
        self._model = model or DEFAULT_MODELS["gemini"]
        self._api_key = api_key

    async def generate(self, prompt: str) -> GenerationResult:
        import google.generativeai as genai
        from google.api_core import exceptions as google_exceptions

        if not self._api_key:
            raise BackendError(
                "GEMINI_API_KEY is not set.",
                hint='Export your API key: export GEMINI_API_KEY="..."',
            )

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        contents = [{"role": "user", "parts": [{"text": prompt}]}]

        t0 = time.monotonic()
        try:
            resp = await model.generate_content_async(contents)
        except google_exceptions.GoogleAPIError as exc:
            raise BackendError(
                f"Gemini error: {exc}",
                hint=(
                    f"Check that your model name is valid (e.g. {self._model}) "
                    "and that GEMINI_API_KEY is correct."
                ),
            ) from exc
        latency = int((time.monotonic() - t0) * 1000)

        text = "".join(
            part.text
            for candidate in resp.candidates[:1]
            for part in candidate.content.parts
            if getattr(part, "text", None)
        )
        return GenerationResult(
            text=text.strip(),
            backend_used=self.name,
            model_used=self._model,
            latency_ms=latency,
        )

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model
