# src/cache/models.py — v1
"""Cache domain models: CacheEntry, CacheDocument, CacheInfo.

Serialized field names are camelCase so that existing cache documents
(``createdAt``, ``expiresAt``, ``backendUsed``, ``modelUsed``) load unchanged.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

CACHE_DOCUMENT_VERSION = 1


class CacheEntry(BaseModel):
    """One cached response. Replaced wholesale on recomputation."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        protected_namespaces=(),
    )

    created_at: datetime
    expires_at: datetime | None = None
    text: str
    backend_used: str
    model_used: str | None = None

    @classmethod
    def create(
        cls,
        text: str,
        backend_used: str,
        model_used: str | None,
        ttl_hours: float = 0,
        now: datetime | None = None,
    ) -> CacheEntry:
        """Build an entry stamped at ``now``; ttl_hours <= 0 means no expiry."""
        now = now or datetime.now(timezone.utc)
        expires_at = now + timedelta(hours=ttl_hours) if ttl_hours > 0 else None
        return cls(
            created_at=now,
            expires_at=expires_at,
            text=text,
            backend_used=backend_used,
            model_used=model_used,
        )

    @field_validator("created_at", "expires_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Timestamps without an offset are read as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < (now or datetime.now(timezone.utc))


class CacheDocument(BaseModel):
    """The persisted document: schema version plus key → entry mapping."""

    version: int = CACHE_DOCUMENT_VERSION
    entries: dict[str, CacheEntry] = Field(default_factory=dict)


class CacheInfo(BaseModel):
    """Location and size of a cache store."""

    location: Path
    entry_count: int
