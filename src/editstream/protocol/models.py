"""Canonical event types for the assistant event stream.

Wire payloads come in several overlapping shapes. The normalizer maps each
one onto exactly one of these variants, discriminated by `kind`.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class EventKind(str, Enum):
    """Canonical event variants."""

    STREAMING = "streaming"
    COMPLETE = "complete"
    FINAL_MESSAGE = "final_message"
    COMPLETE_WITH_IDS = "complete_with_ids"
    STREAM_END = "stream_end"


class StreamStatus(str, Enum):
    """Values of the wire `status` field."""

    STREAMING = "streaming"
    COMPLETE = "complete"
    DONE = "done"


TERMINAL_STATUSES = frozenset({StreamStatus.COMPLETE.value, StreamStatus.DONE.value})


class StreamingEvent(BaseModel):
    """Partial or full rendering of the assistant output so far.

    The protocol sends cumulative text: `fragment` replaces the buffer.
    None means the frame carried no usable text.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.STREAMING] = EventKind.STREAMING
    fragment: str | None = None


class CompleteEvent(BaseModel):
    """Terminal event carrying the final assistant text."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.COMPLETE] = EventKind.COMPLETE
    text: str | None = None


class FinalMessageEvent(BaseModel):
    """Terminal event carrying the final text under the `message` field."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.FINAL_MESSAGE] = EventKind.FINAL_MESSAGE
    text: str | None = None


class CompleteWithIdsEvent(BaseModel):
    """Terminal event that also carries conversation/message identifiers."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.COMPLETE_WITH_IDS] = EventKind.COMPLETE_WITH_IDS
    text: str | None = None
    assistant_message_id: str | None = None
    conversation_id: str | None = None
    user_message_id: str | None = None


class StreamEndEvent(BaseModel):
    """Sentinel: the transport has nothing more to send."""

    model_config = ConfigDict(frozen=True)

    kind: Literal[EventKind.STREAM_END] = EventKind.STREAM_END


CanonicalEvent = Annotated[
    Union[
        StreamingEvent,
        CompleteEvent,
        FinalMessageEvent,
        CompleteWithIdsEvent,
        StreamEndEvent,
    ],
    Field(discriminator="kind"),
]

TERMINAL_KINDS = frozenset({
    EventKind.COMPLETE,
    EventKind.FINAL_MESSAGE,
    EventKind.COMPLETE_WITH_IDS,
    EventKind.STREAM_END,
})


def is_terminal(event: CanonicalEvent) -> bool:
    """Check whether an event ends the stream."""
    return event.kind in TERMINAL_KINDS


def event_text(event: CanonicalEvent) -> str | None:
    """Get the text an event carries, if any."""
    if isinstance(event, StreamingEvent):
        return event.fragment
    return getattr(event, "text", None)
