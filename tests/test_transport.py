"""Unit tests for the transport module."""
import json

import httpx
import pytest

from editstream.transport import (
    HttpStreamTransport,
    ReplayTransport,
    StreamTransport,
    TransportConnectionError,
    TransportError,
    TransportStatusError,
    create_transport,
)


async def _collect(transport: StreamTransport, prompt: str = "hi") -> bytes:
    return b"".join([chunk async for chunk in transport.stream(prompt)])


class TestStreamTransportInterface:
    """Tests for the abstract StreamTransport interface."""

    def test_transport_is_abstract(self):
        """Test that StreamTransport cannot be instantiated directly."""
        with pytest.raises(TypeError):
            StreamTransport()  # type: ignore


class TestHttpStreamTransport:
    """Tests for HttpStreamTransport using httpx.MockTransport."""

    async def test_posts_prompt_and_streams_body(self, recorded_stream):
        """Test the request shape and that the body is passed through."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                headers={"Content-Type": "text/event-stream"},
                content=recorded_stream,
            )

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HttpStreamTransport("http://test/api/improve", client=client)

        body = await _collect(transport, "Improve my outline")

        assert body == recorded_stream
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == "http://test/api/improve"
        assert json.loads(request.content) == {"message": "Improve my outline"}
        assert request.headers["accept"] == "text/event-stream"
        assert request.headers["content-type"] == "application/json"

        await transport.close()
        assert not client.is_closed
        await client.aclose()

    async def test_non_success_status(self):
        """Test that a non-2xx status raises TransportStatusError."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(503)))
        transport = HttpStreamTransport("http://test/api/improve", client=client)

        with pytest.raises(TransportStatusError) as exc_info:
            await _collect(transport)

        assert exc_info.value.status_code == 503
        assert exc_info.value.is_retryable()
        await client.aclose()

    async def test_client_error_status_not_retryable(self):
        """Test that 4xx statuses other than 429 are not retryable."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(404)))
        transport = HttpStreamTransport("http://test/api/improve", client=client)

        with pytest.raises(TransportStatusError) as exc_info:
            await _collect(transport)

        assert not exc_info.value.is_retryable()
        await client.aclose()

    async def test_connection_error_is_wrapped(self):
        """Test that httpx network errors become TransportConnectionError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        transport = HttpStreamTransport("http://test/api/improve", client=client)

        with pytest.raises(TransportConnectionError, match="ConnectError"):
            await _collect(transport)
        await client.aclose()

    async def test_owned_client_is_closed(self):
        """Test that a transport closes the client it created."""
        transport = HttpStreamTransport("http://test/api/improve")
        await transport.close()
        assert transport._client.is_closed

    def test_transport_type(self):
        """Test the type identifier."""
        assert HttpStreamTransport("http://test").transport_type == "http"


class TestReplayTransport:
    """Tests for ReplayTransport."""

    async def test_chunks(self):
        """Test fixed-size chunking."""
        transport = ReplayTransport(data=b"abcdefg", chunk_size=3)

        chunks = [c async for c in transport.stream("p")]

        assert chunks == [b"abc", b"def", b"g"]
        assert transport.prompts == ["p"]

    async def test_from_file(self, tmp_path, recorded_stream):
        """Test replaying a recorded file."""
        path = tmp_path / "stream.sse"
        path.write_bytes(recorded_stream)

        async with ReplayTransport(path=path, chunk_size=7) as transport:
            assert await _collect(transport) == recorded_stream

    async def test_missing_file(self, tmp_path):
        """Test that an unreadable file is a transport fault."""
        transport = ReplayTransport(path=tmp_path / "missing.sse")

        with pytest.raises(TransportConnectionError):
            await _collect(transport)

    def test_requires_source(self):
        """Test that data or path is required."""
        with pytest.raises(ValueError):
            ReplayTransport()

    def test_rejects_bad_chunk_size(self):
        """Test chunk size validation."""
        with pytest.raises(ValueError, match="chunk_size"):
            ReplayTransport(data=b"x", chunk_size=0)


class TestTransportFactory:
    """Tests for create_transport."""

    def test_create_http(self):
        """Test creating an HTTP transport."""
        transport = create_transport("http", url="http://test/api")
        assert isinstance(transport, HttpStreamTransport)
        assert transport.url == "http://test/api"

    def test_create_replay(self):
        """Test creating a replay transport (case insensitive)."""
        assert isinstance(create_transport("Replay", data=b""), ReplayTransport)

    def test_http_requires_url(self):
        """Test missing url."""
        with pytest.raises(TypeError, match="url"):
            create_transport("http")

    def test_unknown_transport(self):
        """Test unsupported transport types."""
        with pytest.raises(ValueError, match="Unsupported transport"):
            create_transport("websocket")


class TestTransportErrors:
    """Tests for the transport error hierarchy."""

    def test_hierarchy(self):
        """Test that all faults share the TransportError base."""
        assert issubclass(TransportConnectionError, TransportError)
        assert issubclass(TransportStatusError, TransportError)
        assert not TransportError("x").is_retryable()
        assert TransportConnectionError("x").is_retryable()
        assert TransportStatusError(429).is_retryable()
