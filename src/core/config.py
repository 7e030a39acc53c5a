"""Runtime configuration model for the docs cache.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

from core.constants import (
    DEFAULT_INDEX_RELATIVE_PATH,
    DEFAULT_INDEX_URL,
    DEFAULT_LOG_LEVEL,
    ENV_BASE_PATH,
    ENV_INDEX_PATH,
    ENV_INDEX_URL,
    ENV_LOG_LEVEL,
    ENV_TIMEOUT_SECONDS,
)
from core.errors import DocsCacheConfigError


@dataclass(frozen=True)
class DocsCacheConfig:
    """Validated runtime configuration.

    Attributes:
        base_path: Build-configuration root the cache path is relative to.
        index_url: Remote platform index URL.
        index_relative_path: Cache file location under ``base_path``.
        timeout_seconds: Optional request timeout; ``None`` keeps httpx defaults.
        log_level: Minimum structured log level name.
    """

    base_path: Path
    index_url: str
    index_relative_path: Path
    timeout_seconds: float | None
    log_level: str

    @property
    def cache_path(self) -> Path:
        """Absolute cache file path."""
        return self.base_path / self.index_relative_path

    @classmethod
    def from_env(cls) -> "DocsCacheConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            DocsCacheConfigError: If environment values are invalid.
        """
        base_path_value = os.getenv(ENV_BASE_PATH, ".")
        index_url = parse_index_url(os.getenv(ENV_INDEX_URL, DEFAULT_INDEX_URL))
        index_path = _parse_index_path(os.getenv(ENV_INDEX_PATH, str(DEFAULT_INDEX_RELATIVE_PATH)))
        timeout_seconds = _parse_timeout(os.getenv(ENV_TIMEOUT_SECONDS))
        log_level = _parse_log_level(os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL))
        return cls(
            base_path=Path(base_path_value).expanduser().resolve(),
            index_url=index_url,
            index_relative_path=index_path,
            timeout_seconds=timeout_seconds,
            log_level=log_level,
        )


def parse_index_url(raw_value: str) -> str:
    """Validate an index URL from the environment or the command line."""
    value = raw_value.strip()
    if not value.startswith(("http://", "https://")):
        raise DocsCacheConfigError(
            f"Invalid index URL: expected http(s) URL, got '{raw_value}'. "
            f"Set {ENV_INDEX_URL} or --url to the platform index endpoint."
        )
    return value


def _parse_index_path(raw_value: str) -> Path:
    path = Path(raw_value.strip())
    if not raw_value.strip() or path.is_absolute():
        raise DocsCacheConfigError(
            f"Invalid {ENV_INDEX_PATH} value: expected relative file path, got '{raw_value}'. "
            f"Set {ENV_INDEX_PATH} relative to {ENV_BASE_PATH}."
        )
    return path


def _parse_timeout(raw_value: str | None) -> float | None:
    """Parse the optional request timeout environment value.

    Args:
        raw_value: Raw string from environment, or ``None`` when unset.

    Returns:
        Parsed positive timeout in seconds, or ``None``.

    Raises:
        DocsCacheConfigError: If value is not a positive number.
    """
    if raw_value is None or not raw_value.strip():
        return None
    try:
        timeout = float(raw_value)
    except ValueError as error:
        raise DocsCacheConfigError(
            f"Invalid {ENV_TIMEOUT_SECONDS} value: expected number, got '{raw_value}'. "
            f"Set {ENV_TIMEOUT_SECONDS} to a positive number of seconds or unset it."
        ) from error
    if timeout <= 0:
        raise DocsCacheConfigError(
            f"Invalid {ENV_TIMEOUT_SECONDS} value: expected positive number, got '{raw_value}'."
        )
    return timeout


def _parse_log_level(raw_value: str) -> str:
    level_name = raw_value.strip().upper()
    if not isinstance(logging.getLevelName(level_name), int):
        raise DocsCacheConfigError(
            f"Invalid {ENV_LOG_LEVEL} value: '{raw_value}'. "
            "Use one of DEBUG, INFO, WARNING, ERROR."
        )
    return level_name
