"""Stream transport module.

Hides how raw event stream bytes are obtained (HTTP or recorded replay).
"""

from .base import (
    StreamTransport,
    TransportConnectionError,
    TransportError,
    TransportStatusError,
)
from .factory import create_transport
from .http import HttpStreamTransport
from .replay import ReplayTransport

__all__ = [
    "HttpStreamTransport",
    "ReplayTransport",
    "StreamTransport",
    "TransportConnectionError",
    "TransportError",
    "TransportStatusError",
    "create_transport",
]
