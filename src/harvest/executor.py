# src/harvest/executor.py — v1
"""Process execution capability used by the harvester and status checks.

Commands are spawned directly from an argument vector (no shell). Each
invocation is bounded by a timeout; on expiry the whole process group is
killed and the invocation reports ``timed_out`` with no output. Spawn
failures (missing binary, permissions) are reported as ``error``. Neither
case raises.
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from abc import ABC, abstractmethod

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 1200

# Keep man/info output unpaged and free of pager escapes.
_PAGER_ENV = {"MANPAGER": "cat", "PAGER": "cat", "LESS": "FRX"}


class ProcessResult(BaseModel):
    """Captured outcome of one process invocation."""

    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    timed_out: bool = False
    error: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out and not self.error


class BaseProcessExecutor(ABC):
    """Spawn a command with arguments and capture its output."""

    @abstractmethod
    async def run(
        self, cmd: str, args: list[str], timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> ProcessResult:
        """Run cmd with args; never raises for spawn failures or timeouts."""


class AsyncProcessExecutor(BaseProcessExecutor):
    """asyncio-based executor with process-group kill on timeout."""

    def __init__(self, extra_env: dict[str, str] | None = None) -> None:
        self._env = {**os.environ, **_PAGER_ENV, **(extra_env or {})}

    async def run(
        self, cmd: str, args: list[str], timeout_ms: int = DEFAULT_TIMEOUT_MS
    ) -> ProcessResult:
        try:
            proc = await asyncio.create_subprocess_exec(
                cmd,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=self._env,
                start_new_session=(os.name == "posix"),
            )
        except OSError as exc:
            logger.debug("Cannot spawn %s: %s", cmd, exc)
            return ProcessResult(error=True)

        timeout = timeout_ms / 1000 if timeout_ms and timeout_ms > 0 else None
        try:
            stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.debug("Timed out after %dms: %s %s", timeout_ms, cmd, " ".join(args))
            _kill_process_group(proc)
            await proc.wait()
            return ProcessResult(timed_out=True)

        return ProcessResult(
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            exit_code=proc.returncode,
        )


def _kill_process_group(proc: asyncio.subprocess.Process) -> None:
    """SIGKILL the process group (or just the process off POSIX)."""
    try:
        if os.name == "posix":
            os.killpg(proc.pid, signal.SIGKILL)
        else:
            proc.kill()
    except ProcessLookupError:
        pass
