"""Pytest configuration and shared fixtures."""
import json
import os

import pytest

CARD_ONE = "30aebfb2-8072-4b73-9c3f-116183ef52e1"
CARD_TWO = "caca5ac8-effe-4380-8346-71b435ad5404"

INTRO = (
    "[]I'll improve the note card and one action card in the second moment "
    "to better match your channel's style and enhance the dramatic impact."
)


def edit_block(card_id: str, old: str, new: str) -> str:
    """Render one edit block the way the server emits it."""
    return f"<edit_card>\ncardid:{card_id}\nold_text:{old}\nnew_text:{new}\n</edit_card>"


def sse_frame(payload: dict) -> str:
    """Render one `data:` frame."""
    return f"data: {json.dumps(payload)}\n\n"


BLOCK_ONE = edit_block(
    CARD_ONE,
    'Text overlay: "When The Noob Beats The Dragon First 💀"',
    'Text overlay appears with dramatic zoom: "POV: The Noob Has A Secret Plan 💀"',
)
BLOCK_TWO = edit_block(
    CARD_TWO,
    "Noob suddenly pulls out a bed from inventory",
    "Noob casually pulls out a bed from inventory with confident swagger, synchronized to music beat",
)


@pytest.fixture
def fixture_events():
    """Event script replayed by the development server."""
    return [
        {"status": "streaming", "token": "[]", "text": "[]"},
        {"status": "streaming", "text": "[]I'll improve the note card and one"},
        {"status": "streaming", "text": INTRO},
        {"status": "streaming", "text": INTRO + BLOCK_ONE},
        {"status": "streaming", "text": INTRO + BLOCK_ONE + BLOCK_TWO},
        {"status": "streaming", "text": INTRO + BLOCK_ONE + BLOCK_TWO + "[]"},
        {
            "type": "final_message",
            "message": INTRO + BLOCK_ONE + BLOCK_TWO + "[]I've enhanced both cards to better capture your signature style.",
        },
        {
            "assistantMessageId": "6e52fde4-c18d-4e70-8f48-455b6adecbd4",
            "conversationId": "c18f617a-dff4-47a1-b5aa-8de32a736468",
            "message": "[]I'll improve ... \\u003cedit_card\\u003e ... \\u003c/edit_card\\u003e (truncated for brevity)",
            "status": "complete",
            "text": "[]I'll improve ... \\u003cedit_card\\u003e ... \\u003c/edit_card\\u003e (truncated for brevity)",
            "type": "outline-chat",
            "userMessageId": "6c8a87d9-2de2-4b37-917e-400dd964403b",
        },
    ]


@pytest.fixture
def recorded_stream(fixture_events):
    """The event script as raw stream bytes, keep-alive comment included."""
    body = ": connected\n\n"
    body += "".join(sse_frame(event) for event in fixture_events)
    body += sse_frame({"status": "complete"})
    return body.encode("utf-8")


@pytest.fixture(scope="session")
def stream_url():
    """Return the endpoint of a running server, if any."""
    return os.getenv("EDITSTREAM_URL")
