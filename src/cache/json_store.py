# src/cache/json_store.py — v1
"""JSON document cache store (the default backend).

All entries live in one versioned document::

    {"version": 1, "entries": {"<key>": {"createdAt": ..., "expiresAt": ...,
                                         "text": ..., "backendUsed": ...,
                                         "modelUsed": ...}}}

Every operation reads the whole document and every mutation rewrites it
(write to a temp file in the same directory, then ``os.replace``), so a
reader never sees a half-written file. Concurrent writers from separate
processes are last-write-wins on the whole document.

A missing file is an empty store. A file that cannot be parsed is moved
aside to ``<name>.corrupt`` and replaced by an empty store. A document with
unreadable entries is copied there first, then rewritten with the valid
entries only. An existing backup is never overwritten: later ones get a
timestamp suffix. Any other file-system failure raises CacheIOError.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from versus.cache.base_cache_store import BaseCacheStore, CacheIOError
from versus.cache.models import CacheDocument, CacheEntry, CacheInfo

logger = logging.getLogger(__name__)

CORRUPT_SUFFIX = ".corrupt"


class JsonCacheStore(BaseCacheStore):
    """File-backed cache store holding a single JSON document."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    async def get(self, key: str) -> CacheEntry | None:
        return await asyncio.to_thread(self._get_sync, key)

    async def set(self, key: str, entry: CacheEntry) -> None:
        await asyncio.to_thread(self._set_sync, key, entry)

    async def clear(self) -> int:
        return await asyncio.to_thread(self._clear_sync)

    async def info(self) -> CacheInfo:
        doc = await asyncio.to_thread(self._read)
        return CacheInfo(location=self._path, entry_count=len(doc.entries))

    # --- synchronous core (runs in a worker thread) ---

    def _get_sync(self, key: str) -> CacheEntry | None:
        doc = self._read()
        entry = doc.entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(datetime.now(timezone.utc)):
            logger.debug("Cache entry %s expired at %s", key[:12], entry.expires_at)
            del doc.entries[key]
            self._write(doc)
            return None

        return entry

    def _set_sync(self, key: str, entry: CacheEntry) -> None:
        doc = self._read()
        doc.entries[key] = entry
        self._write(doc)
        logger.debug("Cached %s (%d entries)", key[:12], len(doc.entries))

    def _clear_sync(self) -> int:
        doc = self._read()
        count = len(doc.entries)
        doc.entries = {}
        self._write(doc)
        logger.info("Cleared %d cache entries", count)
        return count

    def _read(self) -> CacheDocument:
        try:
            raw = self._path.read_bytes()
        except FileNotFoundError:
            return CacheDocument()
        except OSError as exc:
            raise CacheIOError(f"Cannot read cache file {self._path}: {exc}") from exc

        # json.loads raises plain ValueError for oversized integer literals
        # and RecursionError for very deep nesting.
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError, RecursionError) as exc:
            self._quarantine(f"{type(exc).__name__}: {str(exc)[:200]}")
            return CacheDocument()

        if not isinstance(data, dict):
            self._quarantine(f"top-level value is {type(data).__name__}, not an object")
            return CacheDocument()

        doc, lossy = self._parse_document(data)
        if lossy:
            self._backup_copy(raw)
            self._write(doc)
        return doc

    def _parse_document(self, data: dict) -> tuple[CacheDocument, bool]:
        """Validate entries one by one.

        Returns:
            (document of valid entries, whether any stored data was dropped).
        """
        version = data.get("version")
        raw_entries = data.get("entries")
        lossy = False
        if not isinstance(raw_entries, dict):
            lossy = raw_entries is not None
            raw_entries = {}

        entries: dict[str, CacheEntry] = {}
        for key, value in raw_entries.items():
            try:
                entries[key] = CacheEntry.model_validate(value)
            except ValidationError as exc:
                lossy = True
                logger.warning(
                    "Dropping unreadable cache entry %s: %d error(s)", key[:12], exc.error_count()
                )

        doc = CacheDocument(
            version=version if isinstance(version, int) else 1,
            entries=entries,
        )
        return doc, lossy

    def _backup_path(self) -> Path:
        """``<name>.corrupt``, or a timestamped sibling when that one is taken."""
        backup = self._path.with_name(self._path.name + CORRUPT_SUFFIX)
        if not backup.exists():
            return backup
        stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        backup = self._path.with_name(f"{self._path.name}{CORRUPT_SUFFIX}.{stamp}")
        counter = 1
        while backup.exists():
            backup = self._path.with_name(f"{self._path.name}{CORRUPT_SUFFIX}.{stamp}.{counter}")
            counter += 1
        return backup

    def _quarantine(self, reason: str) -> None:
        """Move a corrupted document aside so its bytes survive the reset."""
        backup = self._backup_path()
        try:
            os.replace(self._path, backup)
        except OSError as exc:
            raise CacheIOError(
                f"Cache file {self._path} is corrupted and could not be moved aside: {exc}"
            ) from exc
        logger.warning("Corrupted cache file (%s); moved to %s", reason, backup)

    def _backup_copy(self, raw: bytes) -> None:
        """Keep the original bytes before a repaired document replaces them."""
        backup = self._backup_path()
        try:
            backup.write_bytes(raw)
        except OSError as exc:
            raise CacheIOError(f"Cannot back up cache file to {backup}: {exc}") from exc
        logger.warning("Cache file had unreadable entries; original kept at %s", backup)

    def _write(self, doc: CacheDocument) -> None:
        payload = json.dumps(
            doc.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
        )
        directory = self._path.parent
        tmp_name: str | None = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                tmp_name = fh.name
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            raise CacheIOError(f"Cannot write cache file {self._path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
