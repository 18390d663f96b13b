# src/harvest/harvester.py — v1
"""Evidence harvester: gather bounded local documentation for a target.

Lookups run one at a time in a fixed priority order:

    1. man <cmd>
    2. man <cmd>-<sub>           (when a subcommand is given)
    3. <cmd> [<rest>...] --help
    4. info <cmd>
    5. bash -lc "help <cmd>"     (single-token targets only)
    6. git help <sub>            (git with a subcommand)

A lookup that fails, times out or prints nothing is skipped silently;
partial bundles are the normal outcome.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from versus.core.text import normalize_text, truncate
from versus.harvest.executor import (
    DEFAULT_TIMEOUT_MS,
    AsyncProcessExecutor,
    BaseProcessExecutor,
)
from versus.harvest.models import (
    SNIPPET_MAX_CHARS,
    DocBundle,
    EvidenceKind,
    EvidenceSource,
    Target,
)
from versus.harvest.sanitize import validate_target
from versus.logging.context import set_target_context

logger = logging.getLogger(__name__)

PRIVILEGED_COMMANDS = frozenset({"sudo", "su", "doas"})
DEFAULT_MAX_CHARS = 6000
MIN_CHARS_PER_SOURCE = 800
MAX_SOURCES = 3
NO_DOCS_REASON = "No local docs found via man/--help/info/bash help."


@dataclass(frozen=True)
class Lookup:
    """One planned documentation lookup."""

    kind: EvidenceKind
    cmd: str
    args: list[str]
    heading: str


@dataclass(frozen=True)
class _Hit:
    source: EvidenceSource
    section: str


def per_source_budget(max_chars: int) -> int:
    """Split the total character budget across up to MAX_SOURCES sources."""
    return max(MIN_CHARS_PER_SOURCE, max_chars // MAX_SOURCES)


def plan_lookups(target: Target) -> list[Lookup]:
    """Ordered lookups for a validated target."""
    cmd, rest = target.command, list(target.rest)
    plan = [Lookup(EvidenceKind.MAN, "man", ["-P", "cat", cmd], f"## man {cmd}")]

    if rest:
        composite = f"{cmd}-{rest[0]}"
        plan.append(
            Lookup(
                EvidenceKind.MAN_SUBCOMMAND,
                "man",
                ["-P", "cat", composite],
                f"## man {composite}",
            )
        )

    help_args = [*rest, "--help"]
    plan.append(
        Lookup(EvidenceKind.HELP, cmd, help_args, f"## {cmd} {' '.join(help_args)}")
    )
    plan.append(Lookup(EvidenceKind.INFO, "info", [cmd], f"## info {cmd}"))

    if not rest:
        plan.append(
            Lookup(EvidenceKind.BASH_HELP, "bash", ["-lc", f"help {cmd}"], f"## bash help {cmd}")
        )

    if cmd == "git" and rest:
        plan.append(
            Lookup(EvidenceKind.GIT_HELP, "git", ["help", rest[0]], f"## git help {rest[0]}")
        )

    return plan


class EvidenceHarvester:
    """Collects normalized, budgeted documentation bundles for targets."""

    def __init__(
        self,
        executor: BaseProcessExecutor | None = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
    ) -> None:
        self._executor = executor or AsyncProcessExecutor()
        self._timeout_ms = timeout_ms

    async def collect(
        self,
        target: str,
        max_chars: int = DEFAULT_MAX_CHARS,
        debug: bool = False,
    ) -> DocBundle:
        """Harvest documentation for one target.

        Args:
            target: Raw target string, e.g. "git pull".
            max_chars: Total character budget for the bundle.
            debug: Keep full source records (command, args, snippet).

        Returns:
            DocBundle with labeled evidence text, or empty with ``skipped`` set.
        """
        set_target_context(target)
        validation = validate_target(target)
        if not validation.ok:
            logger.info("Target rejected: %s", validation.reason)
            return DocBundle.skip(validation.reason or "Invalid target")

        parsed = Target(raw=target, tokens=validation.tokens)
        if parsed.command in PRIVILEGED_COMMANDS:
            logger.info("Skipping privileged command %r", parsed.command)
            return DocBundle.skip(
                f"Skipping local docs for safety (starts with '{parsed.command}')."
            )

        budget = per_source_budget(max_chars)
        sources: list[EvidenceSource] = []
        sections: list[str] = []

        for lookup in plan_lookups(parsed):
            hit = await self._attempt(lookup, budget)
            if hit is None:
                continue
            sources.append(hit.source)
            sections.append(hit.section)

        docs = "\n\n".join(sections).strip()
        if not docs:
            logger.debug("No evidence for %r", target)
            return DocBundle.skip(NO_DOCS_REASON)

        if not debug:
            sources = [s.redacted() for s in sources]
        logger.debug("Collected %d source(s), %d chars", len(sources), len(docs))
        return DocBundle(docs=docs, sources=sources)

    async def collect_pair(
        self,
        left: str,
        right: str,
        max_chars: int = DEFAULT_MAX_CHARS,
        debug: bool = False,
    ) -> tuple[DocBundle, DocBundle]:
        """Harvest both sides of a comparison concurrently."""
        left_bundle, right_bundle = await asyncio.gather(
            self.collect(left, max_chars=max_chars, debug=debug),
            self.collect(right, max_chars=max_chars, debug=debug),
        )
        return left_bundle, right_bundle

    async def _attempt(self, lookup: Lookup, budget: int) -> _Hit | None:
        result = await self._executor.run(lookup.cmd, lookup.args, self._timeout_ms)
        cleaned = normalize_text(result.stdout)
        if not cleaned:
            logger.debug(
                "No output from %s %s (exit=%s, timed_out=%s)",
                lookup.cmd, " ".join(lookup.args), result.exit_code, result.timed_out,
            )
            return None

        source = EvidenceSource(
            kind=lookup.kind,
            cmd=lookup.cmd,
            args=list(lookup.args),
            chars=len(cleaned),
            snippet=cleaned[:SNIPPET_MAX_CHARS],
        )
        return _Hit(source=source, section=f"{lookup.heading}\n{truncate(cleaned, budget)}")
