"""Factory for creating stream transports."""

from typing import Any

from .base import StreamTransport


def create_transport(kind: str = "http", **config: Any) -> StreamTransport:
    """Create a stream transport.

    Args:
        kind: Transport type ("http" or "replay")
        **config: Transport-specific configuration
            For http:
                - url: str (required)
                - timeout: float (default: 30.0)
                - headers: dict[str, str] | None
            For replay:
                - data: bytes | str | None
                - path: Path | str | None
                - chunk_size: int (default: 64)
                - delay: float (default: 0.0)

    Returns:
        StreamTransport instance

    Raises:
        ValueError: If transport type is not supported
        TypeError: If required configuration is missing
    """
    kind_lower = kind.lower()

    if kind_lower == "http":
        if "url" not in config:
            raise TypeError("HTTP transport requires 'url' in config")
        from .http import HttpStreamTransport
        return HttpStreamTransport(**config)

    if kind_lower == "replay":
        from .replay import ReplayTransport
        return ReplayTransport(**config)

    raise ValueError(
        f"Unsupported transport: {kind}. "
        f"Supported transports: 'http', 'replay'"
    )
