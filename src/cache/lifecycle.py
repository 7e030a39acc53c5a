"""Build lifecycle controller for the platform docs cache.

This module decides whether a build event refreshes the cache and runs
the fetch, normalize, and write cycle when it does. Full runs always
refresh; incremental runs only fetch when neither this controller nor
a previous process has populated the cache.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from cache.build_hooks import BuildHookRegistry
from cache.cache_store import CacheStore
from core.config import DocsCacheConfig
from core.constants import HOOK_BEFORE_RUN, HOOK_WATCH_RUN, PLUGIN_NAME
from core.errors import DocsCacheConfigError
from core.logging_config import get_logger
from core.types import CacheCycleResult, LifecycleEvent
from fetch.index_fetcher import IndexFetcher
from transforms.platform_index import normalize_platforms, serialize_cache_document

_LOGGER = get_logger(__name__)


class IndexCacheController:
    """Stateful controller for build-time index cache refreshes."""

    def __init__(self, config: DocsCacheConfig, fetcher: IndexFetcher | None = None) -> None:
        """Create a controller and ensure the cache directory exists.

        Args:
            config: Runtime configuration with base path and index URL.
            fetcher: Optional fetcher override, mainly for tests.

        Raises:
            DocsCacheFilesystemError: If the cache directory cannot be created.
        """
        self._index_url = config.index_url
        self._store = CacheStore(config.base_path, config.index_relative_path)
        self._fetcher = fetcher or IndexFetcher(timeout_seconds=config.timeout_seconds)
        self._cycle_lock = asyncio.Lock()
        self.has_fetched = False

    @property
    def cache_path(self) -> Path:
        return self._store.cache_path

    async def handle_event(self, event: LifecycleEvent) -> CacheCycleResult:
        """Dispatch one build lifecycle event.

        Raises:
            DocsCacheConfigError: If ``event`` is not a known lifecycle event.
        """
        if event == "full-run":
            return await self.on_full_run()
        if event == "incremental-run":
            return await self.on_incremental_run()
        raise DocsCacheConfigError(
            f"Unsupported lifecycle event '{event}'. Use 'full-run' or 'incremental-run'."
        )

    async def on_full_run(self) -> CacheCycleResult:
        """Refresh the cache unconditionally.

        Returns:
            Fetched cycle result.

        Raises:
            DocsCacheNetworkError: If the index cannot be retrieved or decoded.
            DocsCacheFilesystemError: If the cache cannot be written.
        """
        async with self._cycle_lock:
            return await self._run_cycle("full-run")

    async def on_incremental_run(self) -> CacheCycleResult:
        """Refresh the cache only if it has never been populated.

        Returns:
            Skipped result when already fetched or cached, else fetched result.
        """
        if await self._should_skip_incremental():
            return self._skipped_result()
        async with self._cycle_lock:
            # Another cycle may have completed while waiting.
            if await self._should_skip_incremental():
                return self._skipped_result()
            return await self._run_cycle("incremental-run")

    def apply(self, registry: BuildHookRegistry) -> None:
        """Tap full and incremental runs onto build hooks."""
        registry.tap(HOOK_BEFORE_RUN, PLUGIN_NAME, self.on_full_run)
        registry.tap(HOOK_WATCH_RUN, PLUGIN_NAME, self.on_incremental_run)

    async def _should_skip_incremental(self) -> bool:
        return self.has_fetched or await self._store.exists_async()

    def _skipped_result(self) -> CacheCycleResult:
        _LOGGER.info("index_cache_skipped", cache_path=str(self.cache_path))
        return CacheCycleResult(
            event="incremental-run",
            status="skipped",
            cache_path=self.cache_path,
        )

    async def _run_cycle(self, event: LifecycleEvent) -> CacheCycleResult:
        try:
            raw_index = await self._fetcher.fetch_raw_index(self._index_url)
            platforms = normalize_platforms(raw_index)
            await self._store.write_document(serialize_cache_document(platforms))
        except Exception as error:
            _LOGGER.error(
                "index_cache_cycle_failed",
                lifecycle_event=event,
                url=self._index_url,
                error=str(error),
            )
            raise
        self.has_fetched = True
        integration_count = sum(len(platform.integrations) for platform in platforms)
        _LOGGER.info(
            "index_cache_written",
            lifecycle_event=event,
            cache_path=str(self.cache_path),
            platform_count=len(platforms),
            integration_count=integration_count,
        )
        return CacheCycleResult(
            event=event,
            status="fetched",
            cache_path=self.cache_path,
            platform_count=len(platforms),
            integration_count=integration_count,
        )
