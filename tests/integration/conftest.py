# tests/integration/conftest.py — v1
"""Shared fixtures for integration tests.

Integration tests spawn real subprocesses (the running interpreter or
binaries that are guaranteed not to exist) and use real files under
tmp_path. They never reach a network backend: generation goes through the
mock adapter.
"""

from __future__ import annotations

import pytest

from versus.harvest.executor import AsyncProcessExecutor


@pytest.fixture
def real_executor() -> AsyncProcessExecutor:
    return AsyncProcessExecutor()
