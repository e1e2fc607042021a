"""Event stream protocol module.

Splits the chunked transport into frames and normalizes heterogeneous
payloads into one canonical event type.
"""

from .frames import FrameSplitter, iter_frames
from .models import (
    CanonicalEvent,
    CompleteEvent,
    CompleteWithIdsEvent,
    EventKind,
    FinalMessageEvent,
    StreamEndEvent,
    StreamingEvent,
    StreamStatus,
    event_text,
    is_terminal,
)
from .normalizer import classify_payload, normalize_event

__all__ = [
    "CanonicalEvent",
    "CompleteEvent",
    "CompleteWithIdsEvent",
    "EventKind",
    "FinalMessageEvent",
    "FrameSplitter",
    "StreamEndEvent",
    "StreamStatus",
    "StreamingEvent",
    "classify_payload",
    "event_text",
    "is_terminal",
    "iter_frames",
    "normalize_event",
]
