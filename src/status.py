# src/status.py — v1
"""Environment checks: Python, man pages, cache, and generation backends."""

from __future__ import annotations

import platform
import sys

from pydantic import BaseModel

from versus.cache.base_cache_store import BaseCacheStore
from versus.cache.models import CacheInfo
from versus.config.settings import Settings
from versus.harvest.executor import BaseProcessExecutor
from versus.render.theme import Theme

MIN_PYTHON = (3, 10)
MAN_CHECK_TIMEOUT_MS = 1500


class OllamaStatus(BaseModel):
    ok: bool
    base_url: str
    models: list[str] = []


class StatusReport(BaseModel):
    ok: bool
    python_version: str
    python_ok: bool
    man_ok: bool
    cache: CacheInfo
    openai_key: bool
    gemini_key: bool
    ollama: OllamaStatus

    def human_lines(self, theme: Theme) -> list[str]:
        """Terminal-friendly report."""
        ok_mark, bad_mark = theme.success("✔"), theme.error("✖")
        info_mark, soft_mark = theme.success("ℹ"), theme.warning("•")
        required = ".".join(str(p) for p in MIN_PYTHON)

        lines = [theme.bold("versus status"), ""]
        lines.append(
            f"{ok_mark if self.python_ok else bad_mark} Python {self.python_version} (need {required}+)"
        )
        lines.append(f"{ok_mark if self.man_ok else bad_mark} man pages available")
        lines.append(f"{info_mark} Cache file: {self.cache.location}")
        lines.append(f"{info_mark} Cache entries: {self.cache.entry_count}")
        lines.append("")

        lines.append(theme.bold("Backends"))
        for label, env_name, present in (
            ("OpenAI", "OPENAI_API_KEY", self.openai_key),
            ("Gemini", "GEMINI_API_KEY", self.gemini_key),
        ):
            mark = ok_mark if present else soft_mark
            lines.append(f"{mark} {label} key {'set' if present else 'not set'} ({env_name})")

        if self.ollama.ok:
            models = (
                f"models: {', '.join(self.ollama.models)}"
                if self.ollama.models
                else "no models found (try: ollama pull llama3.2)"
            )
            lines.append(f"{ok_mark} Ollama reachable at {self.ollama.base_url} ({models})")
        else:
            lines.append(f"{soft_mark} Ollama not reachable at {self.ollama.base_url}")

        lines.append("")
        lines.append(
            theme.dim(
                "Tip: set OPENAI_API_KEY or GEMINI_API_KEY, or run Ollama locally to get real answers."
            )
        )
        return lines


async def check_man(executor: BaseProcessExecutor) -> bool:
    """man may exit non-zero depending on the pager; only require some output."""
    result = await executor.run("man", ["-P", "cat", "ls"], MAN_CHECK_TIMEOUT_MS)
    return len(result.stdout) > 20


async def run_status(
    settings: Settings,
    executor: BaseProcessExecutor,
    cache_store: BaseCacheStore,
) -> StatusReport:
    """Collect the environment report."""
    from versus.llm.adapters.ollama_adapter import probe_ollama

    python_ok = sys.version_info[:2] >= MIN_PYTHON
    man_ok = await check_man(executor)
    cache_info = await cache_store.info()
    reachable, models = await probe_ollama(settings.ollama_base_url)

    return StatusReport(
        ok=python_ok and man_ok,
        python_version=platform.python_version(),
        python_ok=python_ok,
        man_ok=man_ok,
        cache=cache_info,
        openai_key=bool(settings.openai_api_key),
        gemini_key=bool(settings.gemini_api_key),
        ollama=OllamaStatus(ok=reachable, base_url=settings.ollama_base_url, models=models),
    )
