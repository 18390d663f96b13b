# src/__init__.py — v1
"""versus: compare two commands or concepts, grounded in local documentation."""

from versus.version import __version__

__all__ = ["__version__"]
