# src/main.py — v1
"""CLI entry point: compare, prompt, cache, status commands.

Usage:
    versus <left> <right> [options]          (shorthand for "compare")
    versus compare <left> <right> [options]
    versus prompt <left> <right> [options]
    versus cache [--clear] [--json]
    versus status [--json]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import TYPE_CHECKING

from versus.version import __version__

if TYPE_CHECKING:
    from versus.config.settings import Settings
    from versus.engine.comparison import ComparisonEngine, ComparisonOptions
    from versus.render.theme import Theme

logger = logging.getLogger(__name__)

COMMANDS = ("compare", "prompt", "cache", "status", "doctor")
# Options that consume the following token as their value.
VALUE_OPTIONS = frozenset({
    "--color", "-b", "--backend", "-m", "--model", "--level", "--mode", "--format",
    "--ttl-hours", "--max-doc-chars", "-o", "--output",
})
FORMATS = {
    "rendered": "rendered", "pretty": "rendered", "plain": "rendered",
    "markdown": "markdown", "md": "markdown", "raw": "markdown",
    "json": "json",
}


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_args(_with_default_command(argv))

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from versus.config.settings import ConfigurationError, load_settings
    from versus.logging.context import set_command_context
    from versus.render.theme import Theme

    theme = Theme.create(args.color, stdout_is_tty=sys.stdout.isatty())

    try:
        overrides = {"backend": args.backend} if getattr(args, "backend", None) else {}
        settings = load_settings(**overrides)
    except ConfigurationError as exc:
        _print_error(theme, exc)
        return 1

    _setup_logging(args.verbose, settings)
    set_command_context(args.command)

    from versus.cache.base_cache_store import CacheIOError
    from versus.llm.base_client import BackendError

    try:
        return asyncio.run(args.func(args, settings, theme))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except (BackendError, CacheIOError) as exc:
        _print_error(theme, exc)
        return 1
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        _print_error(theme, exc)
        return 1


def _with_default_command(argv: list[str]) -> list[str]:
    """Treat ``versus nano vim`` as ``versus compare nano vim``.

    Options given before the command (``versus -v status``) are moved after
    it, since they belong to the subcommand parsers.
    """
    idx = 0
    while idx < len(argv) and argv[idx].startswith("-"):
        if argv[idx] in ("-h", "--help", "--version"):
            return argv
        idx += 2 if argv[idx] in VALUE_OPTIONS else 1

    if idx < len(argv) and argv[idx] in COMMANDS:
        return [argv[idx], *argv[:idx], *argv[idx + 1 :]]
    if not argv:
        return argv
    return ["compare", *argv]


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--color", default="auto", metavar="MODE",
        help="ANSI styling: auto|always|never (default: auto; honors NO_COLOR)",
    )
    common.add_argument(
        "--no-color", dest="color", action="store_const", const="never",
        help="Same as --color=never",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(
        prog="versus",
        description=(
            f"versus v{__version__}: compare two commands or concepts using an LLM, "
            "grounded in local docs."
        ),
        epilog=(
            "Examples:\n"
            "  versus nano vim\n"
            "  versus curl wget --backend gemini\n"
            '  versus "git pull" "git fetch" --level beginner'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- compare ---
    p_compare = subparsers.add_parser(
        "compare", parents=[common], help="Compare two commands or concepts",
    )
    _add_request_arguments(p_compare)
    p_compare.add_argument(
        "-b", "--backend", default=None,
        help="auto|openai|gemini|ollama|mock (default: auto)",
    )
    p_compare.add_argument("-m", "--model", default=None, help="Model name (provider-specific)")
    p_compare.add_argument(
        "--format", default="rendered",
        help="rendered|markdown|json (default: rendered)",
    )
    p_compare.add_argument(
        "--raw", action="store_true", help="Output raw Markdown (no terminal rendering)",
    )
    p_compare.add_argument("--no-cache", action="store_true", help="Disable the response cache")
    p_compare.add_argument(
        "--ttl-hours", type=int, default=None,
        help="Cache TTL in hours (default: 720 = 30 days; 0 = never expire)",
    )
    p_compare.set_defaults(func=_cmd_compare)

    # --- prompt ---
    p_prompt = subparsers.add_parser(
        "prompt", parents=[common], help="Print the generated prompt (no backend call)",
    )
    _add_request_arguments(p_prompt)
    p_prompt.add_argument(
        "-o", "--output", type=Path, default=None, help="Also write the prompt to a file",
    )
    p_prompt.set_defaults(func=_cmd_prompt)

    # --- cache ---
    p_cache = subparsers.add_parser(
        "cache", parents=[common], help="Inspect or clear the local cache",
    )
    p_cache.add_argument("--clear", action="store_true", help="Delete all cache entries")
    p_cache.add_argument("--json", action="store_true", help="Machine-readable output")
    p_cache.set_defaults(func=_cmd_cache)

    # --- status ---
    for name in ("status", "doctor"):
        p_status = subparsers.add_parser(
            name, parents=[common], help="Check environment and backends",
        )
        p_status.add_argument("--json", action="store_true", help="Machine-readable output")
        p_status.set_defaults(func=_cmd_status)

    return parser


def _add_request_arguments(p: argparse.ArgumentParser) -> None:
    p.add_argument("left", help="First command or concept")
    p.add_argument("right", help="Second command or concept")
    p.add_argument(
        "--level", choices=["beginner", "intermediate", "advanced"], default=None,
    )
    p.add_argument("--mode", choices=["summary", "cheatsheet", "table"], default=None)
    p.add_argument(
        "--max-doc-chars", type=int, default=None,
        help="Max characters of local docs per side (default: 6000)",
    )
    p.add_argument("--no-docs", action="store_true", help="Do not read local docs")
    p.add_argument(
        "-d", "--debug", action="store_true",
        help="Print debug metadata (timings, doc sources, cache)",
    )


def _build_engine(settings: Settings) -> ComparisonEngine:
    from versus.cache.cache_factory import create_cache_store
    from versus.engine.comparison import ComparisonEngine
    from versus.harvest.harvester import EvidenceHarvester

    harvester = EvidenceHarvester(timeout_ms=settings.harvest_timeout_ms)
    return ComparisonEngine(harvester, create_cache_store(settings), settings=settings)


def _options_from_args(args: argparse.Namespace, settings: Settings) -> ComparisonOptions:
    from versus.engine.comparison import ComparisonOptions

    return ComparisonOptions.from_settings(
        settings,
        model=getattr(args, "model", None),
        level=args.level,
        mode=args.mode,
        ttl_hours=getattr(args, "ttl_hours", None),
        max_doc_chars=args.max_doc_chars,
        cache=False if getattr(args, "no_cache", False) else None,
        include_docs=False if args.no_docs else None,
        debug=args.debug or None,
    )


async def _cmd_compare(args: argparse.Namespace, settings: Settings, theme: Theme) -> int:
    """Run a comparison and print it."""
    from versus.core.timefmt import format_local_short, format_relative_time
    from versus.render.markdown import render_or_raw

    fmt = "markdown" if args.raw else FORMATS.get(args.format.strip().lower(), args.format)
    if fmt not in ("rendered", "markdown", "json"):
        raise ValueError(f"Unknown format: {args.format} (use rendered|markdown|json)")

    options = _options_from_args(args, settings)
    result = await _build_engine(settings).compare(args.left, args.right, options)

    if fmt == "json":
        print(result.model_dump_json(indent=2))
        return 0

    title = f"{args.left} vs {args.right}"
    print(theme.heading(title))
    print(theme.dim("─" * min(60, max(10, len(title)))))
    model_note = f" (model: {result.model})" if result.model else ""
    print(theme.dim(f"Backend: {result.backend}{model_note}"))

    if result.cached:
        now = datetime.now(timezone.utc)
        rel = format_relative_time(result.created_at, now)
        if now - result.created_at < timedelta(hours=1):
            print(theme.dim(f"ℹ Cached ({rel}). Use --no-cache to refresh."))
        else:
            local = format_local_short(result.created_at, now)
            print(theme.dim(f"ℹ Cached from {local}. Use --no-cache to refresh."))
    print()

    text = result.text.strip()
    if fmt == "rendered" and sys.stdout.isatty():
        text, rendered = render_or_raw(text, theme)
        if not rendered and options.debug:
            print(theme.dim("(markdown render failed; falling back to raw)"), file=sys.stderr)
    print(text)
    print()

    if options.debug:
        print(theme.dim("Debug"))
        print(theme.dim(result.meta.model_dump_json(indent=2)))
    return 0


async def _cmd_prompt(args: argparse.Namespace, settings: Settings, theme: Theme) -> int:
    """Print the full prompt for a comparison."""
    options = _options_from_args(args, settings)
    bundle = await _build_engine(settings).build_prompt(args.left, args.right, options)

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(bundle.prompt, encoding="utf-8")
        logger.info("Prompt written to %s", args.output)

    sys.stdout.write(bundle.prompt if bundle.prompt.endswith("\n") else bundle.prompt + "\n")

    if options.debug:
        meta = {
            "sources": {
                "left": [s.to_dict() for s in bundle.left.sources],
                "right": [s.to_dict() for s in bundle.right.sources],
            },
            "skipped": {"left": bundle.left.skipped, "right": bundle.right.skipped},
        }
        print(theme.dim("\nDebug"), file=sys.stderr)
        print(theme.dim(json.dumps(meta, indent=2)), file=sys.stderr)
    return 0


async def _cmd_cache(args: argparse.Namespace, settings: Settings, theme: Theme) -> int:
    """Show cache location/size or clear it."""
    from versus.cache.cache_factory import create_cache_store

    store = create_cache_store(settings)

    if args.clear:
        cleared = await store.clear()
        if args.json:
            print(json.dumps({"cleared": cleared}, indent=2))
        else:
            noun = "entry" if cleared == 1 else "entries"
            print(theme.success(f"Cleared {cleared} cache {noun}."))
        return 0

    info = await store.info()
    if args.json:
        print(json.dumps({"file": str(info.location), "entries": info.entry_count}, indent=2))
    else:
        print(theme.bold("Cache"))
        print(f"File: {info.location}")
        print(f"Entries: {info.entry_count}")
        print(theme.dim("Tip: run `versus cache --clear` to delete all entries."))
    return 0


async def _cmd_status(args: argparse.Namespace, settings: Settings, theme: Theme) -> int:
    """Environment and backend checks."""
    from versus.cache.cache_factory import create_cache_store
    from versus.harvest.executor import AsyncProcessExecutor
    from versus.status import run_status

    report = await run_status(settings, AsyncProcessExecutor(), create_cache_store(settings))
    if args.json:
        print(report.model_dump_json(indent=2))
    else:
        for line in report.human_lines(theme):
            print(line)
    return 0 if report.ok else 1


def _print_error(theme: Theme, exc: BaseException) -> None:
    print(f"{theme.error('Error:')} {exc}", file=sys.stderr)
    hint = getattr(exc, "hint", None)
    if hint:
        print(theme.dim(hint), file=sys.stderr)


def _setup_logging(verbose: bool, settings: Settings) -> None:
    """Configure logging for CLI usage."""
    from versus.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
    )


if __name__ == "__main__":
    sys.exit(main())
