# src/cache/base_cache_store.py — v1
"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from versus.cache.models import CacheEntry, CacheInfo


class CacheIOError(OSError):
    """Raised when the cache cannot be read or written (permissions, disk full).

    Corrupted content is not an I/O failure: stores recover from it locally.
    """


class BaseCacheStore(ABC):
    """Keyed store of generated responses with lazy TTL expiry."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for key; expired entries are removed and None returned."""

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store entry under key, replacing any previous entry."""

    @abstractmethod
    async def clear(self) -> int:
        """Remove every entry and return how many there were."""

    @abstractmethod
    async def info(self) -> CacheInfo:
        """Location and current entry count."""
