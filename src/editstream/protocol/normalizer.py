"""Classification of wire payloads into canonical events.

Payload shapes overlap (a bundled completion object carries `status`,
`type` and `message` all at once), so the checks below run in a fixed
priority order and the first match wins:

1. identifier + status          -> CompleteWithIdsEvent
2. type == "final_message"      -> FinalMessageEvent
3. terminal status              -> CompleteEvent (StreamEndEvent if bare)
4. status == "streaming"        -> StreamingEvent
5. anything else                -> ignored
"""

import json
from typing import Any

from ..config import TRUNCATION_MARKER
from .models import (
    TERMINAL_STATUSES,
    CanonicalEvent,
    CompleteEvent,
    CompleteWithIdsEvent,
    FinalMessageEvent,
    StreamEndEvent,
    StreamingEvent,
    StreamStatus,
)

FINAL_MESSAGE_TYPE = "final_message"
ID_FIELD = "assistantMessageId"


def _usable(value: Any) -> str | None:
    """Return value if it is non-empty text without the truncation marker."""
    if not isinstance(value, str) or not value:
        return None
    if TRUNCATION_MARKER in value:
        return None
    return value


def _optional_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def classify_payload(data: dict[str, Any]) -> CanonicalEvent | None:
    """Map a decoded payload object onto a canonical event.

    Args:
        data: Decoded JSON object from one frame

    Returns:
        The canonical event, or None if the shape is not recognized
    """
    status = data.get("status")
    if not isinstance(status, str):
        status = None

    if ID_FIELD in data and status:
        raw_text = data.get("text") or data.get("message")
        return CompleteWithIdsEvent(
            text=_usable(raw_text),
            assistant_message_id=_optional_str(data.get(ID_FIELD)),
            conversation_id=_optional_str(data.get("conversationId")),
            user_message_id=_optional_str(data.get("userMessageId")),
        )

    if data.get("type") == FINAL_MESSAGE_TYPE:
        return FinalMessageEvent(text=_usable(data.get("message")))

    if status in TERMINAL_STATUSES:
        if set(data) == {"status"}:
            return StreamEndEvent()
        return CompleteEvent(text=_usable(data.get("text")))

    if status == StreamStatus.STREAMING.value:
        fragment = data["token"] if "token" in data else data.get("text")
        return StreamingEvent(fragment=_usable(fragment))

    return None


def normalize_event(payload: str) -> CanonicalEvent | None:
    """Parse one frame payload into a canonical event.

    Malformed payloads are swallowed: invalid or over-limit JSON (huge
    integers, deep nesting), non-object JSON and unrecognized shapes all
    return None and the stream carries on.

    Args:
        payload: Frame payload with the `data:` marker already stripped

    Returns:
        The canonical event, or None for a no-op frame
    """
    try:
        data = json.loads(payload)
    except (ValueError, TypeError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None
    return classify_payload(data)
