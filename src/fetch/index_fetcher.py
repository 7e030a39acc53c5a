"""Async HTTP retrieval of the remote platform index.

This module streams the index response into a single buffer and
decodes the ``{platforms: ...}`` envelope. Transport failures are
translated once into docs-cache network errors.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

import httpx

from core.constants import ENVELOPE_KEY
from core.errors import DocsCacheIndexError, DocsCacheNetworkError
from core.logging_config import get_logger
from core.types import RawIndex

_LOGGER = get_logger(__name__)


class IndexFetcher:
    """Single-request fetcher for the remote platform index."""

    def __init__(
        self,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        """Create a fetcher.

        Args:
            transport: Optional transport override, e.g. ``httpx.MockTransport``.
            timeout_seconds: Optional timeout; ``None`` keeps httpx defaults.
        """
        self._transport = transport
        self._timeout_seconds = timeout_seconds

    async def fetch(self, url: str) -> bytes:
        """Download the full response body for ``url``.

        Args:
            url: Remote index URL.

        Returns:
            Concatenated response body bytes.

        Raises:
            DocsCacheNetworkError: On connection failure, transport error,
                or a non-2xx response.
        """
        _LOGGER.info("index_fetch_started", url=url)
        chunks: list[bytes] = []
        try:
            async with httpx.AsyncClient(**self._client_options()) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    async for chunk in response.aiter_bytes():
                        chunks.append(chunk)
        except httpx.HTTPStatusError as error:
            raise DocsCacheNetworkError(
                f"Platform index request to {url} failed with HTTP "
                f"{error.response.status_code}. Check the index URL and retry the build."
            ) from error
        except httpx.HTTPError as error:
            raise DocsCacheNetworkError(
                f"Platform index request to {url} failed: {error!r}. "
                "Check network access to the index endpoint and retry the build."
            ) from error
        body = b"".join(chunks)
        _LOGGER.info("index_fetch_completed", url=url, byte_count=len(body))
        return body

    async def fetch_raw_index(self, url: str) -> RawIndex:
        """Download and decode the remote index envelope."""
        return decode_index_payload(await self.fetch(url), url)

    def _client_options(self) -> dict[str, Any]:
        options: dict[str, Any] = {}
        if self._transport is not None:
            options["transport"] = self._transport
        if self._timeout_seconds is not None:
            options["timeout"] = self._timeout_seconds
        return options


def decode_index_payload(body: bytes, url: str = "remote index") -> RawIndex:
    """Decode a response body into the raw platform index.

    Args:
        body: Complete response body.
        url: Source URL used in error messages.

    Returns:
        Mapping of platform id to integration group.

    Raises:
        DocsCacheIndexError: If the body is not UTF-8 JSON with a
            ``platforms`` object.
    """
    try:
        payload = json.loads(body.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as error:
        raise DocsCacheIndexError(
            f"Failed to parse platform index from {url}: {error}. "
            "The endpoint must return a UTF-8 JSON document."
        ) from error
    if not isinstance(payload, Mapping) or not isinstance(payload.get(ENVELOPE_KEY), Mapping):
        raise DocsCacheIndexError(
            f"Invalid platform index from {url}: expected an object with a "
            f"'{ENVELOPE_KEY}' mapping."
        )
    return payload[ENVELOPE_KEY]
