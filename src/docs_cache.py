"""Public SDK surface for the platform docs cache.

This module provides a stable import path for build integrations.
It re-exports the controller, hook registry, and typed models.
"""

from __future__ import annotations

from cache.build_hooks import BuildHookRegistry, run_with_callback
from cache.cache_store import read_cached_platforms
from cache.lifecycle import IndexCacheController
from core.config import DocsCacheConfig
from core.types import CacheCycleResult, IntegrationEntry, PlatformEntry
from fetch.index_fetcher import IndexFetcher
from transforms.platform_index import normalize_platforms, serialize_cache_document

__all__ = [
    "BuildHookRegistry",
    "CacheCycleResult",
    "DocsCacheConfig",
    "IndexCacheController",
    "IndexFetcher",
    "IntegrationEntry",
    "PlatformEntry",
    "normalize_platforms",
    "read_cached_platforms",
    "run_with_callback",
    "serialize_cache_document",
]
