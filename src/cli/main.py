"""Docs-cache CLI entry points.
This module exposes the build lifecycle events and cache inspection.
It maps argparse commands onto controller calls.
"""

from __future__ import annotations

import argparse
import asyncio
from dataclasses import replace
from pathlib import Path
import sys
from typing import Sequence

from cache.cache_store import read_cached_platforms
from cache.lifecycle import IndexCacheController
from core.config import DocsCacheConfig, parse_index_url
from core.errors import DocsCacheError
from core.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog="docs-cache",
        description="Build-time platform documentation index cache",
    )
    parser.add_argument("--base-path", help="Override DOCS_CACHE_BASE_PATH for this command")
    parser.add_argument("--url", help="Override DOCS_CACHE_INDEX_URL for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("full-run", help="Fetch the index and rewrite the cache")
    subparsers.add_parser(
        "incremental-run",
        help="Fetch the index only when no cache exists yet",
    )
    subparsers.add_parser("show", help="Summarize the cached platform document")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the docs-cache CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = _build_config(args.base_path, args.url)
        configure_logging(config.log_level)
        if args.command in ("full-run", "incremental-run"):
            return _run_lifecycle_command(config, args.command)
        if args.command == "show":
            return _run_show_command(config)
    except DocsCacheError as error:
        print(f"docs-cache: {error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_config(base_path: str | None, url: str | None) -> DocsCacheConfig:
    """Build config with optional CLI overrides.

    Args:
        base_path: Optional base path override.
        url: Optional index URL override.

    Returns:
        Runtime configuration.
    """
    config = DocsCacheConfig.from_env()
    if base_path:
        config = replace(config, base_path=Path(base_path).expanduser().resolve())
    if url:
        config = replace(config, index_url=parse_index_url(url))
    return config


def _run_lifecycle_command(config: DocsCacheConfig, event: str) -> int:
    controller = IndexCacheController(config)
    result = asyncio.run(controller.handle_event(event))  # type: ignore[arg-type]
    if event == "full-run":
        print(result.cache_path)
    else:
        print(f"{result.status}\t{result.cache_path}")
    return 0


def _run_show_command(config: DocsCacheConfig) -> int:
    """Handle show command.

    Args:
        config: Runtime configuration.

    Returns:
        Exit code, 1 when no cache has been written.
    """
    platforms = read_cached_platforms(config.cache_path)
    if platforms is None:
        print(
            f"docs-cache: no platform cache at {config.cache_path}. Run 'docs-cache full-run'.",
            file=sys.stderr,
        )
        return 1
    for platform in platforms:
        print(f"{platform.id}\t{platform.name}\t{len(platform.integrations)}")
    return 0
