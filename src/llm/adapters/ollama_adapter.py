# src/llm/adapters/ollama_adapter.py — v1
"""Ollama local model adapter implementing BaseTextBackend.

Uses the ollama Python SDK.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from versus.llm.base_client import BackendError, BaseTextBackend
from versus.llm.models import DEFAULT_MODELS, GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_HOST = "http://localhost:11434"
PROBE_TIMEOUT_S = 1.5


class OllamaAdapter(BaseTextBackend):
    """Ollama local inference adapter."""

    def __init__(self, model: str | None = None, host: str = DEFAULT_HOST, **kwargs: Any):
        self._model = model or DEFAULT_MODELS["ollama"]
        self._host = host.rstrip("/")

    async def generate(self, prompt: str) -> GenerationResult:
        import ollama

        client = ollama.AsyncClient(host=self._host)

        t0 = time.monotonic()
        try:
            resp = await client.generate(model=self._model, prompt=prompt, stream=False)
        except ConnectionError as exc:
            raise BackendError(
                f"Failed to reach Ollama at {self._host}",
                hint=f"Start Ollama and make sure the API is reachable on {self._host}",
            ) from exc
        except ollama.ResponseError as exc:
            raise BackendError(
                f"Ollama error ({exc.status_code}): {str(exc.error)[:200]}",
                hint=f"Check that the model is installed: ollama pull {self._model}",
            ) from exc
        latency = int((time.monotonic() - t0) * 1000)

        return GenerationResult(
            text=str(resp["response"] or "").strip(),
            backend_used=self.name,
            model_used=self._model,
            latency_ms=latency,
        )

    @property
    def name(self) -> str:
        return "ollama"

    @property
    def model(self) -> str:
        return self._model


async def probe_ollama(host: str = DEFAULT_HOST) -> tuple[bool, list[str]]:
    """Check whether an Ollama server answers.

    Returns:
        (reachable, up to 10 installed model names).
    """
    import httpx
    import ollama

    client = ollama.AsyncClient(host=host.rstrip("/"), timeout=PROBE_TIMEOUT_S)
    try:
        listing = await client.list()
    except (ConnectionError, httpx.HTTPError, ollama.ResponseError) as exc:
        logger.debug("Ollama not reachable at %s: %s", host, exc)
        return False, []

    models = [m["model"] for m in listing["models"]][:10]
    return True, models
