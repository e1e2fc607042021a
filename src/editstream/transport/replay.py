"""Replay transport for recorded event streams.

Feeds a captured stream back in fixed-size chunks, optionally spaced out in
time, so sessions can run offline and frame boundaries can be exercised
without a server.
"""

import asyncio
from collections.abc import AsyncIterator
from pathlib import Path

from ..config import REPLAY_CHUNK_SIZE
from .base import StreamTransport, TransportConnectionError


class ReplayTransport(StreamTransport):
    """Transport that replays recorded bytes instead of calling a server."""

    def __init__(
        self,
        data: bytes | str | None = None,
        path: Path | str | None = None,
        chunk_size: int = REPLAY_CHUNK_SIZE,
        delay: float = 0.0
    ):
        """Initialize replay transport.

        Args:
            data: Recorded stream content
            path: File holding a recorded stream (used when data is None)
            chunk_size: Bytes per simulated read
            delay: Seconds to sleep before each read

        Raises:
            ValueError: If neither data nor path is given, or chunk_size < 1
        """
        if data is None and path is None:
            raise ValueError("ReplayTransport requires 'data' or 'path'")
        if chunk_size < 1:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._data = data.encode("utf-8") if isinstance(data, str) else data
        self._path = Path(path) if path is not None else None
        self._chunk_size = chunk_size
        self._delay = delay
        self.prompts: list[str] = []

    def _load(self) -> bytes:
        if self._data is not None:
            return self._data
        try:
            return self._path.read_bytes()
        except OSError as e:
            raise TransportConnectionError(f"cannot read {self._path}: {e}") from e

    async def stream(self, prompt: str) -> AsyncIterator[bytes]:
        """Yield the recorded stream chunk by chunk."""
        self.prompts.append(prompt)
        content = self._load()
        for start in range(0, len(content), self._chunk_size):
            if self._delay:
                await asyncio.sleep(self._delay)
            yield content[start:start + self._chunk_size]

    async def close(self) -> None:
        """Close replay (no-op)."""
        pass

    @property
    def transport_type(self) -> str:
        return "replay"
