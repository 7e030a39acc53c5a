"""Unit tests for the async platform index fetcher."""

from __future__ import annotations

import httpx
import pytest

from core.errors import DocsCacheIndexError, DocsCacheNetworkError
from fetch.index_fetcher import IndexFetcher, decode_index_payload
from tests.fixture_paths import fixture_bytes

_INDEX_URL = "https://docs.example.com/_platforms/_index.json"


@pytest.mark.asyncio
async def test_fetch_returns_full_response_body() -> None:
    """Fetcher should return the complete body from one GET request."""
    payload = fixture_bytes("raw/platforms_index.json")
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, content=payload)

    fetcher = IndexFetcher(transport=httpx.MockTransport(handler))

    body = await fetcher.fetch(_INDEX_URL)

    assert body == payload
    assert [(request.method, str(request.url)) for request in requests] == [("GET", _INDEX_URL)]


@pytest.mark.asyncio
async def test_fetch_raises_network_error_for_http_status() -> None:
    """Non-2xx responses should surface as network errors."""
    fetcher = IndexFetcher(transport=httpx.MockTransport(lambda request: httpx.Response(503)))

    with pytest.raises(DocsCacheNetworkError, match="HTTP 503"):
        await fetcher.fetch(_INDEX_URL)


@pytest.mark.asyncio
async def test_fetch_raises_network_error_for_connection_failure() -> None:
    """Transport failures should be translated and chained."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    fetcher = IndexFetcher(transport=httpx.MockTransport(handler))

    with pytest.raises(DocsCacheNetworkError) as error_info:
        await fetcher.fetch(_INDEX_URL)

    assert isinstance(error_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_fetch_raw_index_decodes_envelope() -> None:
    """Fetcher should unwrap the platforms envelope."""
    payload = fixture_bytes("raw/platforms_index.json")
    fetcher = IndexFetcher(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, content=payload))
    )

    raw_index = await fetcher.fetch_raw_index(_INDEX_URL)

    assert sorted(raw_index) == ["elixir", "javascript", "python"]


class _ChunkedBody(httpx.AsyncByteStream):
    """Response body delivered in several network chunks."""

    def __init__(self, chunks: list[bytes]) -> None:
        self._chunks = chunks
        self.served_count = 0

    async def __aiter__(self):
        for chunk in self._chunks:
            self.served_count += 1
            yield chunk


@pytest.mark.asyncio
async def test_fetch_joins_multi_chunk_body() -> None:
    """Streamed chunks should be concatenated into one buffer in order."""
    payload = fixture_bytes("raw/platforms_index.json")
    body_stream = _ChunkedBody([payload[:7], payload[7:100], payload[100:]])
    fetcher = IndexFetcher(
        transport=httpx.MockTransport(lambda request: httpx.Response(200, stream=body_stream))
    )

    body = await fetcher.fetch(_INDEX_URL)

    assert body == payload and body_stream.served_count == 3


def test_decode_index_payload_rejects_invalid_json() -> None:
    """Malformed bodies should raise an index error, which is a network error."""
    with pytest.raises(DocsCacheNetworkError):
        decode_index_payload(b"<html>maintenance</html>", _INDEX_URL)


@pytest.mark.parametrize("body", [b"[]", b'{"items": {}}', b'{"platforms": []}'])
def test_decode_index_payload_rejects_missing_envelope(body: bytes) -> None:
    """Bodies without a platforms mapping should be rejected."""
    with pytest.raises(DocsCacheIndexError, match="'platforms'"):
        decode_index_payload(body, _INDEX_URL)
