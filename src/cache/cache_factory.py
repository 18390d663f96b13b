# src/cache/cache_factory.py — v1
"""Cache location resolution and store instantiation."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

from versus.cache.base_cache_store import BaseCacheStore
from versus.config.settings import Settings

CACHE_SUBDIR = "versus"
CACHE_FILENAME = "cache.json"


def default_cache_dir(env: Mapping[str, str] | None = None) -> Path:
    """Per-user cache directory for versus.

    Resolution order: VERSUS_CACHE_DIR, XDG_CACHE_HOME/versus, then the
    platform default (LOCALAPPDATA on Windows, ~/Library/Caches on macOS,
    ~/.cache elsewhere).
    """
    env = os.environ if env is None else env

    override = env.get("VERSUS_CACHE_DIR")
    if override:
        return Path(override).expanduser()

    xdg = env.get("XDG_CACHE_HOME")
    if xdg:
        return Path(xdg).expanduser() / CACHE_SUBDIR

    if sys.platform == "win32" and env.get("LOCALAPPDATA"):
        return Path(env["LOCALAPPDATA"]) / CACHE_SUBDIR
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Caches" / CACHE_SUBDIR
    return Path.home() / ".cache" / CACHE_SUBDIR


def default_cache_path(env: Mapping[str, str] | None = None) -> Path:
    """Full path of the cache document."""
    return default_cache_dir(env) / CACHE_FILENAME


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the cache store at the configured location.

    Args:
        settings: Application settings; ``cache_dir`` overrides the default.

    Returns:
        Configured BaseCacheStore implementation.
    """
    from versus.cache.json_store import JsonCacheStore

    if settings is not None and settings.cache_dir is not None:
        return JsonCacheStore(Path(settings.cache_dir).expanduser() / CACHE_FILENAME)
    return JsonCacheStore(default_cache_path())
