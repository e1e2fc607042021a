"""Splitting a chunked event stream into `data:` frames.

Network reads do not line up with frame boundaries: a frame, or even the
blank-line delimiter itself, can arrive split across reads. FrameSplitter
buffers whatever is incomplete until a later read finishes it.
"""

import codecs
import re
from collections.abc import AsyncIterable, AsyncIterator

FRAME_DELIMITER = "\n\n"
DATA_FIELD = "data:"

_DATA_PREFIX = re.compile(r"^data:\s*")


class FrameSplitter:
    """Incremental splitter for server-sent event frames.

    Hidden design decisions:
    - Buffer growth (unbounded, a single frame may be arbitrarily large)
    - UTF-8 reassembly of multi-byte characters split across reads
    - Which frames count as protocol comments/keep-alives
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def pending(self) -> str:
        """Buffered text not yet terminated by a delimiter."""
        return self._buffer

    def feed(self, data: bytes | str) -> list[str]:
        """Append one read and return every frame payload it completes.

        Args:
            data: Raw bytes or already-decoded text from the transport

        Returns:
            Frame payloads with the `data:` marker stripped, in arrival order
        """
        if isinstance(data, bytes):
            data = self._decoder.decode(data)
        self._buffer += data

        payloads = []
        while True:
            idx = self._buffer.find(FRAME_DELIMITER)
            if idx == -1:
                return payloads
            raw = self._buffer[:idx].strip()
            self._buffer = self._buffer[idx + len(FRAME_DELIMITER):]
            if not raw.startswith(DATA_FIELD):
                continue
            payloads.append(_DATA_PREFIX.sub("", raw, count=1))


async def iter_frames(chunks: AsyncIterable[bytes | str]) -> AsyncIterator[str]:
    """Yield frame payloads from an async stream of transport reads.

    Finite: ends when the chunk stream ends. A trailing frame without a
    delimiter is dropped.
    """
    splitter = FrameSplitter()
    async for chunk in chunks:
        for payload in splitter.feed(chunk):
            yield payload
