"""Abstract transport for the assistant event stream.

This module hides the design decision of how raw stream bytes are obtained.
Implementations must handle:
- Request construction (prompt body, headers)
- Connection setup and teardown
- Mapping library-specific failures onto TransportError

Supports async context manager protocol for proper resource cleanup:
    async with transport:
        async for chunk in transport.stream(prompt):
            ...
"""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from typing import Any


class TransportError(Exception):
    """Base class for transport-level faults."""

    def is_retryable(self) -> bool:
        """Override in subclasses to control retry behavior."""
        return False


class TransportConnectionError(TransportError):
    """Network or connection error (retryable)."""

    def __init__(self, message: str):
        super().__init__(f"Connection error: {message}")

    def is_retryable(self) -> bool:
        return True


class TransportStatusError(TransportError):
    """Server answered with a non-success status."""

    def __init__(self, status_code: int, message: str = ""):
        msg = f"Unexpected status {status_code}"
        if message:
            msg += f": {message}"
        super().__init__(msg)
        self.status_code = status_code

    def is_retryable(self) -> bool:
        return self.status_code == 429 or self.status_code >= 500


class StreamTransport(ABC):
    """Abstract source of raw event stream chunks."""

    @abstractmethod
    def stream(self, prompt: str) -> AsyncIterator[bytes]:
        """Send the prompt and iterate over the raw response chunks.

        Args:
            prompt: Free-text prompt for the assistant

        Returns:
            Async iterator of raw byte chunks, ending when the server
            closes the stream

        Raises:
            TransportError: On connection failure or non-success status
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections or resources."""
        pass

    @property
    @abstractmethod
    def transport_type(self) -> str:
        """Get the transport type identifier."""

    async def __aenter__(self) -> "StreamTransport":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit with automatic cleanup."""
        await self.close()
