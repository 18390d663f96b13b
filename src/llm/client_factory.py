# src/llm/client_factory.py — v1
"""Factory: instantiate a text backend from its name.

``auto`` picks the first usable provider: OpenAI when OPENAI_API_KEY is set,
then Gemini when GEMINI_API_KEY is set, then a reachable local Ollama, and
finally the offline mock backend.
"""

from __future__ import annotations

import importlib
import logging

from versus.config.settings import Settings
from versus.llm.base_client import BackendError, BaseTextBackend

logger = logging.getLogger(__name__)

# Registry of backend name → adapter class path (lazy import).
_BACKEND_REGISTRY: dict[str, str] = {
    "openai": "versus.llm.adapters.openai_adapter.OpenAIAdapter",
    "gemini": "versus.llm.adapters.google_adapter.GoogleAdapter",
    "ollama": "versus.llm.adapters.ollama_adapter.OllamaAdapter",
    "mock": "versus.llm.adapters.mock_adapter.MockAdapter",
}


class UnsupportedBackendError(BackendError):
    """Raised when a backend is not registered."""

    def __init__(self, name: str) -> None:
        choices = "|".join(["auto", *sorted(_BACKEND_REGISTRY)])
        super().__init__(f"Unknown backend: {name}", hint=f"Use --backend {choices}")


def available_backends() -> list[str]:
    return sorted(_BACKEND_REGISTRY)


def create_backend(
    name: str,
    model: str | None = None,
    settings: Settings | None = None,
) -> BaseTextBackend:
    """Instantiate a specific (non-auto) backend.

    Args:
        name: Backend identifier (openai, gemini, ollama, mock).
        model: Model override; None selects the backend default.
        settings: Application settings (for API keys and hosts).

    Raises:
        UnsupportedBackendError: If name is not registered.
    """
    if name not in _BACKEND_REGISTRY:
        raise UnsupportedBackendError(name)

    adapter_cls = _import_class(_BACKEND_REGISTRY[name])

    init_kwargs: dict[str, object] = {"model": model}
    if settings is not None:
        if name == "openai":
            init_kwargs["api_key"] = settings.openai_api_key
            init_kwargs["base_url"] = settings.openai_base_url
        elif name == "gemini":
            init_kwargs["api_key"] = settings.gemini_api_key
        elif name == "ollama":
            init_kwargs["host"] = settings.ollama_base_url

    logger.debug("Creating backend: name=%s, model=%s", name, model)
    return adapter_cls(**init_kwargs)


async def resolve_backend(
    name: str | None,
    model: str | None = None,
    settings: Settings | None = None,
) -> BaseTextBackend:
    """Resolve ``auto`` (or None) to a concrete backend, else create name directly."""
    want = (name or "auto").strip().lower()
    if want != "auto":
        return create_backend(want, model, settings)

    settings = settings or Settings()
    if settings.openai_api_key:
        return create_backend("openai", model, settings)
    if settings.gemini_api_key:
        return create_backend("gemini", model, settings)

    from versus.llm.adapters.ollama_adapter import probe_ollama

    reachable, _ = await probe_ollama(settings.ollama_base_url)
    if reachable:
        return create_backend("ollama", model, settings)

    logger.info("No backend configured; using mock")
    return create_backend("mock", model, settings)


def register_backend(name: str, class_path: str) -> None:
    """Register a custom backend adapter.

    Args:
        name: Backend identifier.
        class_path: Fully qualified class path implementing BaseTextBackend.
    """
    _BACKEND_REGISTRY[name] = class_path
    logger.info("Registered backend: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
