# src/cache/fingerprint.py — v1
"""Cache key derivation.

A key is the SHA-256 of a versioned JSON payload describing everything that
influences the generated response: both targets, backend and model, level,
mode, whether docs were included, and a digest of the harvested docs.
Bump CACHE_SCHEMA_VERSION whenever prompt construction changes behavior so
stale entries stop matching.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field

from versus.core.text import sha256

CACHE_SCHEMA_VERSION = 1
DOCS_SEPARATOR = "\n---\n"


class CacheKeyPayload(BaseModel):
    """Semantic inputs of a comparison request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    v: int = CACHE_SCHEMA_VERSION
    left: str
    right: str
    backend: str = "auto"
    model: str | None = None
    level: str = "intermediate"
    mode: str = "summary"
    include_docs: bool = Field(default=True, alias="includeDocs")
    docs_hash: str = Field(alias="docsHash")

    def canonical_json(self) -> str:
        """Compact JSON in declaration order."""
        return json.dumps(
            self.model_dump(by_alias=True), separators=(",", ":"), ensure_ascii=False
        )


def docs_hash(left_docs: str, right_docs: str) -> str:
    """Digest of both doc bundles' evidence text."""
    return sha256(f"{left_docs}{DOCS_SEPARATOR}{right_docs}")


def compute_cache_key(
    left: str,
    right: str,
    *,
    backend: str | None = None,
    model: str | None = None,
    level: str | None = None,
    mode: str | None = None,
    include_docs: bool = True,
    left_docs: str = "",
    right_docs: str = "",
) -> str:
    """Derive the fixed-width hex cache key for a comparison request.

    Args:
        left: Left target as typed by the user.
        right: Right target as typed by the user.
        backend: Requested backend ("auto" when unset).
        model: Requested model, None for the backend default.
        level: Audience level ("intermediate" when unset).
        mode: Output mode ("summary" when unset).
        include_docs: Whether local docs were requested.
        left_docs: Evidence text harvested for the left target.
        right_docs: Evidence text harvested for the right target.

    Returns:
        64-character lowercase hex digest.
    """
    payload = CacheKeyPayload(
        left=left,
        right=right,
        backend=backend or "auto",
        model=model or None,
        level=level or "intermediate",
        mode=mode or "summary",
        include_docs=bool(include_docs),
        docs_hash=docs_hash(left_docs, right_docs),
    )
    return sha256(payload.canonical_json())
