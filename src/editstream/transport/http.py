"""HTTP transport for the assistant event stream.

POSTs the prompt as JSON and hands back the chunked response body as it
arrives. Non-success statuses and httpx failures surface as TransportError
so callers never see library-specific exceptions.
"""

from collections.abc import AsyncIterator
from typing import Any

import httpx

from ..config import DEFAULT_REQUEST_TIMEOUT_S
from .base import StreamTransport, TransportConnectionError, TransportStatusError

EVENT_STREAM_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "text/event-stream",
}


class HttpStreamTransport(StreamTransport):
    """Chunked HTTP transport for the event stream.

    Hidden design decisions:
    - HTTP client initialization and ownership
    - Request body format ({"message": prompt})
    - Mapping httpx failures onto TransportError
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_S,
        headers: dict[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
        **client_kwargs: Any
    ):
        """Initialize HTTP transport.

        Args:
            url: Event stream endpoint
            timeout: Connect/read timeout in seconds
            headers: Extra request headers
            client: Optional pre-built client (not closed by this transport)
            **client_kwargs: Additional kwargs for httpx.AsyncClient
        """
        self._url = url
        self._headers = {**EVENT_STREAM_HEADERS, **(headers or {})}
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, **client_kwargs)

    @property
    def url(self) -> str:
        """Get the endpoint URL."""
        return self._url

    async def stream(self, prompt: str) -> AsyncIterator[bytes]:
        """POST the prompt and yield raw response chunks as they arrive."""
        try:
            async with self._client.stream(
                "POST",
                self._url,
                json={"message": prompt},
                headers=self._headers,
            ) as response:
                if not response.is_success:
                    raise TransportStatusError(response.status_code, response.reason_phrase)
                async for chunk in response.aiter_bytes():
                    yield chunk
        except httpx.HTTPError as e:
            raise TransportConnectionError(f"{type(e).__name__}: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    @property
    def transport_type(self) -> str:
        return "http"
