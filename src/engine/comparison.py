# src/engine/comparison.py — v1
"""Comparison orchestration: harvest → prompt → cache lookup → generate → cache write."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from datetime import datetime

from pydantic import BaseModel, Field

from versus.cache.base_cache_store import BaseCacheStore
from versus.cache.fingerprint import compute_cache_key
from versus.cache.models import CacheEntry
from versus.config.settings import Level, Mode, Settings
from versus.harvest.harvester import DEFAULT_MAX_CHARS, EvidenceHarvester
from versus.harvest.models import DocBundle
from versus.llm.base_client import BaseTextBackend
from versus.llm.client_factory import resolve_backend
from versus.logging.context import set_target_context
from versus.prompt.builder import build_prompt

logger = logging.getLogger(__name__)

DOCS_DISABLED_REASON = "docs disabled"

BackendResolver = Callable[[str | None, str | None], Awaitable[BaseTextBackend]]


class ComparisonOptions(BaseModel):
    """Per-request knobs; defaults mirror Settings."""

    backend: str = "auto"
    model: str | None = None
    level: Level = "intermediate"
    mode: Mode = "summary"
    cache: bool = True
    ttl_hours: int = Field(default=720, ge=0)
    max_doc_chars: int = Field(default=DEFAULT_MAX_CHARS, gt=0)
    include_docs: bool = True
    debug: bool = False

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> ComparisonOptions:
        values: dict[str, object] = {
            "backend": settings.backend,
            "model": settings.model,
            "level": settings.level,
            "mode": settings.mode,
            "cache": settings.cache_enabled,
            "ttl_hours": settings.ttl_hours,
            "max_doc_chars": settings.max_doc_chars,
            "include_docs": settings.include_docs,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class PromptBundle(BaseModel):
    """Prompt text plus the evidence it was built from."""

    prompt: str
    left: DocBundle
    right: DocBundle


class ComparisonMeta(BaseModel):
    cache_key: str
    cache_hit: bool
    ms_total: int
    ms_llm: int | None = None
    sources: dict[str, list[dict[str, object]]]
    skipped: dict[str, str | None]


class ComparisonResult(BaseModel):
    left: str
    right: str
    backend: str
    model: str | None
    cached: bool
    created_at: datetime
    text: str
    meta: ComparisonMeta


class ComparisonEngine:
    """Wires the harvester, cache store and generation backend together."""

    def __init__(
        self,
        harvester: EvidenceHarvester,
        cache_store: BaseCacheStore,
        backend_resolver: BackendResolver | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._harvester = harvester
        self._cache = cache_store
        self._settings = settings
        self._resolve_backend = backend_resolver or self._default_resolver

    async def _default_resolver(self, name: str | None, model: str | None) -> BaseTextBackend:
        return await resolve_backend(name, model, self._settings)

    async def build_prompt(
        self, left: str, right: str, options: ComparisonOptions
    ) -> PromptBundle:
        """Harvest both sides concurrently (unless disabled) and build the prompt."""
        if options.include_docs:
            left_bundle, right_bundle = await asyncio.gather(
                self._collect_side("left", left, options),
                self._collect_side("right", right, options),
            )
        else:
            left_bundle = right_bundle = DocBundle.skip(DOCS_DISABLED_REASON)

        prompt = build_prompt(
            left,
            right,
            left_docs=left_bundle.docs,
            right_docs=right_bundle.docs,
            level=options.level,
            mode=options.mode,
        )
        return PromptBundle(prompt=prompt, left=left_bundle, right=right_bundle)

    async def compare(
        self, left: str, right: str, options: ComparisonOptions
    ) -> ComparisonResult:
        """Run one comparison, serving from cache when a live entry exists.

        Raises:
            BackendError: If generation fails.
            CacheIOError: If the cache cannot be read or written.
        """
        t0 = time.monotonic()
        bundle = await self.build_prompt(left, right, options)

        key = compute_cache_key(
            left,
            right,
            backend=options.backend,
            model=options.model,
            level=options.level,
            mode=options.mode,
            include_docs=options.include_docs,
            left_docs=bundle.left.docs,
            right_docs=bundle.right.docs,
        )

        if options.cache:
            cached = await self._cache.get(key)
            if cached is not None and cached.text:
                logger.info("Cache hit %s", key[:12])
                return ComparisonResult(
                    left=left,
                    right=right,
                    backend=cached.backend_used or options.backend,
                    model=cached.model_used or options.model,
                    cached=True,
                    created_at=cached.created_at,
                    text=cached.text,
                    meta=self._meta(key, True, t0, None, bundle),
                )

        backend = await self._resolve_backend(options.backend, options.model)
        logger.info("Generating with %s (%s)", backend.name, backend.model)
        t_llm = time.monotonic()
        generated = await backend.generate(bundle.prompt)
        ms_llm = int((time.monotonic() - t_llm) * 1000)

        entry = CacheEntry.create(
            text=generated.text,
            backend_used=generated.backend_used,
            model_used=generated.model_used,
            ttl_hours=options.ttl_hours,
        )
        if options.cache:
            await self._cache.set(key, entry)

        return ComparisonResult(
            left=left,
            right=right,
            backend=generated.backend_used,
            model=generated.model_used,
            cached=False,
            created_at=entry.created_at,
            text=generated.text,
            meta=self._meta(key, False, t0, ms_llm, bundle),
        )

    async def _collect_side(
        self, side: str, target: str, options: ComparisonOptions
    ) -> DocBundle:
        set_target_context(target, side)
        return await self._harvester.collect(
            target, max_chars=options.max_doc_chars, debug=options.debug
        )

    @staticmethod
    def _meta(
        key: str, hit: bool, t0: float, ms_llm: int | None, bundle: PromptBundle
    ) -> ComparisonMeta:
        return ComparisonMeta(
            cache_key=key,
            cache_hit=hit,
            ms_total=int((time.monotonic() - t0) * 1000),
            ms_llm=ms_llm,
            sources={
                "left": [s.to_dict() for s in bundle.left.sources],
                "right": [s.to_dict() for s in bundle.right.sources],
            },
            skipped={"left": bundle.left.skipped, "right": bundle.right.skipped},
        )
