"""Caller-owned chat client.

Owns the transcript and the one active session. Starting a new prompt
cancels the previous session and its in-flight read, so a superseded stream
can never write into the new turn's state.
"""

import asyncio
from collections.abc import Callable
from typing import Any

from ..config import ReconcilerConfig
from ..transport import StreamTransport
from .models import Advisory, TranscriptMessage
from .session import ReconciliationSession


def _retrieve_result(task: asyncio.Task) -> None:
    # Marks a superseded task's exception as retrieved
    if not task.cancelled():
        task.exception()


class SessionHandle:
    """Awaitable handle for a running session.

    Awaiting it returns the final SessionState, or raises the
    TransportError that failed the stream.
    """

    def __init__(self, session: ReconciliationSession, task: asyncio.Task):
        self.session = session
        self.task = task

    def __await__(self):
        return self.task.__await__()

    def done(self) -> bool:
        return self.task.done()

    def cancel(self) -> None:
        """Cancel the session and its background read."""
        self.session.cancel()
        if not self.task.done():
            self.task.cancel()
        self.task.add_done_callback(_retrieve_result)


class ChatClient:
    """Runs prompts against a transport, one active stream at a time."""

    def __init__(
        self,
        transport: StreamTransport,
        config: ReconcilerConfig | None = None,
        on_update: Callable[[ReconciliationSession], None] | None = None,
        on_advisory: Callable[[Advisory], None] | None = None
    ):
        self._transport = transport
        self._config = config or ReconcilerConfig()
        self._on_update = on_update
        self._on_advisory = on_advisory
        self._debug_callback: Any | None = None
        self._active: SessionHandle | None = None
        # (message, session that renders it); user turns have no session
        self._turns: list[tuple[TranscriptMessage, ReconciliationSession | None]] = []

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback passed on to every new session.

        Args:
            callback: Callable(level: str, component: str, message: str)
        """
        self._debug_callback = callback

    @property
    def active(self) -> SessionHandle | None:
        return self._active

    @property
    def session(self) -> ReconciliationSession | None:
        """The most recently started session."""
        return self._active.session if self._active else None

    @property
    def is_streaming(self) -> bool:
        return self.session is not None and self.session.is_streaming

    @property
    def input_enabled(self) -> bool:
        """Input stays disabled from start() until the active session is final.

        A stall clears is_streaming but does not re-enable input.
        """
        return self.session is None or self.session.state.is_final

    @property
    def transcript(self) -> list[TranscriptMessage]:
        """Transcript snapshot; assistant turns mirror their session's brief."""
        messages = []
        for message, session in self._turns:
            if session is not None and session.brief:
                message = message.model_copy(update={"text": session.brief})
            messages.append(message)
        return messages

    def start(self, prompt: str) -> SessionHandle:
        """Start streaming a prompt, superseding any active session.

        Must be called from a running event loop.

        Args:
            prompt: Free-text prompt

        Returns:
            Handle for the new session

        Raises:
            ValueError: If the prompt is blank
        """
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Prompt must not be empty")

        if self._active is not None:
            self._active.cancel()

        session = ReconciliationSession(
            self._transport,
            config=self._config,
            on_update=self._on_update,
            on_advisory=self._on_advisory,
        )
        if self._debug_callback:
            session.set_debug_callback(self._debug_callback)

        self._turns.append((TranscriptMessage(role="user", text=prompt), None))
        self._turns.append((TranscriptMessage(role="assistant"), session))

        task = asyncio.create_task(session.run(prompt))
        self._active = SessionHandle(session, task)
        return self._active

    async def ask(self, prompt: str) -> ReconciliationSession:
        """Start a prompt and wait for its stream to end.

        Raises:
            TransportError: If the stream fails
        """
        handle = self.start(prompt)
        await handle
        return handle.session

    def accept(self, proposal_id: str) -> None:
        """Accept a proposal in the active session."""
        if self.session is not None:
            self.session.accept(proposal_id)

    def reject(self, proposal_id: str) -> None:
        """Reject a proposal in the active session."""
        if self.session is not None:
            self.session.reject(proposal_id)

    async def close(self) -> None:
        """Cancel the active session and close the transport."""
        if self._active is not None:
            self._active.cancel()
        await self._transport.close()
