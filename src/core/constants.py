"""Core constants used across docs-cache modules.

This module centralizes wire keys, default locations, and env names.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_INDEX_URL = "https://docs.sentry.io/_platforms/_index.json"
DEFAULT_INDEX_RELATIVE_PATH = Path("src/sentry/integration-docs/_platforms.json")
ENVELOPE_KEY = "platforms"
SELF_KEY = "_self"
INTEGRATION_ID_SEPARATOR = "-"
CACHE_FILE_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "INFO"
HOOK_BEFORE_RUN = "before_run"
HOOK_WATCH_RUN = "watch_run"
SUPPORTED_HOOK_NAMES = (HOOK_BEFORE_RUN, HOOK_WATCH_RUN)
PLUGIN_NAME = "IntegrationDocsFetchPlugin"
ENV_BASE_PATH = "DOCS_CACHE_BASE_PATH"
ENV_INDEX_URL = "DOCS_CACHE_INDEX_URL"
ENV_INDEX_PATH = "DOCS_CACHE_INDEX_PATH"
ENV_TIMEOUT_SECONDS = "DOCS_CACHE_TIMEOUT_SECONDS"
ENV_LOG_LEVEL = "DOCS_CACHE_LOG_LEVEL"
