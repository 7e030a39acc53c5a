"""Filesystem persistence for the normalized platform document.

This module owns the cache path: eager directory creation, existence
checks, whole-file overwrites, and the reader used by consumers.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
import tempfile
from typing import Any, Mapping

from core.constants import CACHE_FILE_ENCODING, ENVELOPE_KEY
from core.errors import DocsCacheFilesystemError
from core.types import IntegrationEntry, PlatformEntry


class CacheStore:
    """Filesystem-backed store for the cache document."""

    def __init__(self, base_path: Path, relative_path: Path) -> None:
        self._cache_path = base_path / relative_path
        try:
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise DocsCacheFilesystemError(
                f"Failed to create cache directory {self._cache_path.parent}: {error}. "
                "Check permissions on the build base path."
            ) from error

    @property
    def cache_path(self) -> Path:
        return self._cache_path

    def exists(self) -> bool:
        """Return whether a cache file is present on disk."""
        return self._cache_path.is_file()

    async def exists_async(self) -> bool:
        return await asyncio.to_thread(self.exists)

    async def write_document(self, document_text: str) -> None:
        """Replace the cache file with ``document_text``.

        Args:
            document_text: Serialized cache document.

        Raises:
            DocsCacheFilesystemError: If the file cannot be written.
        """
        await asyncio.to_thread(_replace_file, self._cache_path, document_text)


def read_cached_platforms(cache_path: Path) -> tuple[PlatformEntry, ...] | None:
    """Load normalized platforms from an existing cache file.

    Args:
        cache_path: Cache file location.

    Returns:
        Platform entries in document order, or ``None`` when no cache
        has been written yet.

    Raises:
        DocsCacheFilesystemError: If the file is unreadable or corrupt.
    """
    if not cache_path.exists():
        return None
    try:
        payload = json.loads(cache_path.read_text(encoding=CACHE_FILE_ENCODING))
        return tuple(_parse_platform(item) for item in payload[ENVELOPE_KEY])
    except OSError as error:
        raise DocsCacheFilesystemError(
            f"Failed to read platform cache at {cache_path}: {error}. "
            "Check file permissions and retry."
        ) from error
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError) as error:
        raise DocsCacheFilesystemError(
            f"Failed to parse platform cache at {cache_path}: {error}. "
            "Run a full build to regenerate the cache."
        ) from error


def _replace_file(target_path: Path, document_text: str) -> None:
    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            encoding=CACHE_FILE_ENCODING,
            dir=target_path.parent,
            prefix=f".{target_path.name}.",
            delete=False,
        ) as temp_file:
            temp_path = Path(temp_file.name)
            temp_file.write(document_text)
        os.replace(temp_path, target_path)
    except OSError as error:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise DocsCacheFilesystemError(
            f"Failed to write platform cache at {target_path}: {error}. "
            "Check permissions on the cache directory."
        ) from error


def _parse_platform(payload: Mapping[str, Any]) -> PlatformEntry:
    return PlatformEntry(
        id=str(payload["id"]),
        name=str(payload["name"]),
        integrations=tuple(
            IntegrationEntry(
                id=str(item["id"]),
                name=str(item["name"]),
                type=str(item["type"]),
                link=str(item["link"]),
            )
            for item in payload["integrations"]
        ),
    )
