"""Integration test for a watch session driven through build hooks."""

from __future__ import annotations

from dataclasses import replace
import json
from pathlib import Path

import httpx
import pytest

from cache.build_hooks import BuildHookRegistry, run_with_callback
from cache.cache_store import read_cached_platforms
from cache.lifecycle import IndexCacheController
from core.config import DocsCacheConfig
from core.errors import DocsCacheNetworkError
from fetch.index_fetcher import IndexFetcher
from tests.fixture_paths import fixture_bytes, fixture_json


@pytest.mark.asyncio
async def test_watch_session_fetches_once_and_survives_restart(tmp_path: Path) -> None:
    """A new process should reuse the cache written by a previous one."""
    request_count = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal request_count
        request_count += 1
        return httpx.Response(200, content=fixture_bytes("raw/platforms_index.json"))

    config = replace(DocsCacheConfig.from_env(), base_path=tmp_path)
    completions: list[BaseException | None] = []

    first_registry = BuildHookRegistry()
    IndexCacheController(config, IndexFetcher(transport=httpx.MockTransport(handler))).apply(
        first_registry
    )
    for _ in range(3):
        await run_with_callback(first_registry.call("watch_run"), completions.append)

    restarted_registry = BuildHookRegistry()
    IndexCacheController(config, IndexFetcher(transport=httpx.MockTransport(handler))).apply(
        restarted_registry
    )
    await run_with_callback(restarted_registry.call("watch_run"), completions.append)

    platforms = read_cached_platforms(config.cache_path)
    assert completions == [None, None, None, None] and request_count == 1
    assert platforms is not None
    assert {platform.id for platform in platforms} == set(
        fixture_json("raw/platforms_index.json")["platforms"]
    )


@pytest.mark.asyncio
async def test_failed_full_run_keeps_previous_cache(tmp_path: Path) -> None:
    """A failed refresh should surface its error and leave the old cache intact."""
    config = replace(DocsCacheConfig.from_env(), base_path=tmp_path)
    healthy = IndexCacheController(
        config,
        IndexFetcher(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(
                    200, content=fixture_bytes("raw/platforms_index.json")
                )
            )
        ),
    )
    await healthy.on_full_run()
    previous_document = config.cache_path.read_text(encoding="utf-8")

    def broken_handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("name resolution failed", request=request)

    broken_registry = BuildHookRegistry()
    IndexCacheController(
        config, IndexFetcher(transport=httpx.MockTransport(broken_handler))
    ).apply(broken_registry)
    completions: list[BaseException | None] = []
    await run_with_callback(broken_registry.call("before_run"), completions.append)

    assert len(completions) == 1 and isinstance(completions[0], DocsCacheNetworkError)
    assert config.cache_path.read_text(encoding="utf-8") == previous_document
    assert json.loads(previous_document)["platforms"][2]["name"] == "Python"
