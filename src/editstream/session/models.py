"""Data models for reconciliation sessions."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SessionState(str, Enum):
    """Lifecycle of one stream: idle -> streaming -> finished | failed."""

    IDLE = "idle"
    STREAMING = "streaming"
    FINISHED = "finished"
    FAILED = "failed"

    @property
    def is_final(self) -> bool:
        """Finished and failed are absorbing."""
        return self in (SessionState.FINISHED, SessionState.FAILED)


class AdvisoryKind(str, Enum):
    """Non-fatal signals surfaced to the user."""

    STALL = "stall"
    FAILURE = "failure"


class Advisory(BaseModel):
    """A user-visible advisory message."""

    model_config = ConfigDict(frozen=True)

    kind: AdvisoryKind = Field(description="What triggered the advisory")
    message: str = Field(description="Text to show the user")


class TranscriptMessage(BaseModel):
    """One bubble of the chat transcript."""

    model_config = ConfigDict(frozen=True)

    role: str = Field(description="Role of the message sender: 'user' or 'assistant'")
    text: str = Field(default="", description="Displayed text")
