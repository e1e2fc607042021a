"""Reconciliation session: one prompt, one stream, one proposal set.

The session owns all mutable state for a stream (assistant buffer, proposal
set, stall timer). Reading the transport is the only suspension point;
decoding, extraction and merging run synchronously between reads, so frames
are applied strictly in arrival order.
"""

import asyncio
from collections.abc import Callable
from contextlib import aclosing
from typing import Any

from ..config import FAILURE_ADVISORY, STALL_ADVISORY, ReconcilerConfig
from ..edits import ProposalSet, assistant_brief, reconcile_text
from ..protocol import (
    CanonicalEvent,
    FrameSplitter,
    event_text,
    is_terminal,
    normalize_event,
)
from ..transport import StreamTransport, TransportError
from .models import Advisory, AdvisoryKind, SessionState
from .watchdog import StallWatchdog


class ReconciliationSession:
    """Drives one event stream and reconciles its edit proposals.

    Hidden design decisions:
    - State machine (idle -> streaming -> finished | failed)
    - Buffer replacement policy (cumulative text, never appended)
    - Stall detection and advisory publication
    - Cancellation of a superseded stream

    The presentation layer only reads snapshots (assistant_text, brief,
    proposals, advisory); accept() and reject() are the user actions.
    """

    def __init__(
        self,
        transport: StreamTransport,
        config: ReconcilerConfig | None = None,
        on_update: Callable[["ReconciliationSession"], None] | None = None,
        on_advisory: Callable[[Advisory], None] | None = None
    ):
        """Initialize the session.

        Args:
            transport: Source of raw stream chunks
            config: Runtime settings (defaults to ReconcilerConfig())
            on_update: Called after any change to text, proposals or state
            on_advisory: Called when a stall or failure advisory is raised
        """
        self._transport = transport
        self._config = config or ReconcilerConfig()
        self._on_update = on_update
        self._on_advisory = on_advisory
        self._debug_callback: Any | None = None

        self._state = SessionState.IDLE
        self._assistant_text = ""
        self._proposals = ProposalSet()
        self._is_streaming = False
        self._advisory: Advisory | None = None
        self._cancelled = False
        self._events_processed = 0
        self._splitter = FrameSplitter()
        self._watchdog = StallWatchdog(self._config.stall_timeout_s, self._on_stall)
        self.error: TransportError | None = None

    def set_debug_callback(self, callback: Any) -> None:
        """Set the debug callback for detailed execution logging.

        Args:
            callback: Callable(level: str, component: str, message: str)
                      level: 'debug', 'info', 'warning', 'error'
        """
        self._debug_callback = callback

    def _debug(self, level: str, component: str, message: str) -> None:
        if self._debug_callback:
            self._debug_callback(level, component, message)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def assistant_text(self) -> str:
        """Latest full rendering of the assistant text."""
        return self._assistant_text

    @property
    def brief(self) -> str:
        """Short prose rendering of the assistant text, edit blocks removed."""
        return assistant_brief(self._assistant_text, self._config.brief_max_length)

    @property
    def proposals(self) -> ProposalSet:
        """Immutable snapshot of the current proposals."""
        return self._proposals

    @property
    def is_streaming(self) -> bool:
        """False once the stream ends, fails or stalls."""
        return self._is_streaming

    @property
    def advisory(self) -> Advisory | None:
        return self._advisory

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def events_processed(self) -> int:
        return self._events_processed

    @property
    def watchdog(self) -> StallWatchdog:
        return self._watchdog

    async def run(self, prompt: str) -> SessionState:
        """Send the prompt and process the stream until it ends.

        Args:
            prompt: Free-text prompt

        Returns:
            Final state (finished once the stream ends or is cancelled)

        Raises:
            TransportError: On connection failure or non-success status,
                after the session has moved to failed
            RuntimeError: If the session was already started
        """
        if self._state is not SessionState.IDLE:
            raise RuntimeError(f"Session already started (state: {self._state.value})")

        self._state = SessionState.STREAMING
        self._is_streaming = True
        self._debug("info", "session", "stream started")
        self._watchdog.arm()
        self._notify()

        try:
            async with aclosing(self._transport.stream(prompt)) as chunks:
                async for chunk in chunks:
                    if self._state.is_final:
                        break
                    self._watchdog.arm()
                    for payload in self._splitter.feed(chunk):
                        self.process_payload(payload)
                        if self._state.is_final:
                            break
        except TransportError as e:
            if not self._state.is_final:
                self._fail(e)
            raise
        except asyncio.CancelledError:
            self.cancel()
            raise
        finally:
            self._watchdog.cancel()
            self._is_streaming = False

        if self._state is SessionState.STREAMING:
            self._finish("transport closed")
        return self._state

    def process_payload(self, payload: str) -> CanonicalEvent | None:
        """Normalize and apply one frame payload.

        Malformed payloads are dropped; nothing raises for bad content.

        Returns:
            The applied event, or None if the frame was a no-op
        """
        if self._state.is_final:
            return None
        event = normalize_event(payload)
        if event is None:
            self._debug("debug", "normalizer", f"ignored frame: {payload[:80]!r}")
            return None
        self.apply_event(event)
        return event

    def apply_event(self, event: CanonicalEvent) -> None:
        """Apply one canonical event to the buffer and proposals."""
        if self._state.is_final:
            return
        self._events_processed += 1

        text = event_text(event)
        if text is not None:
            self._assistant_text = text
            before = len(self._proposals)
            self._proposals = reconcile_text(self._proposals, text)
            if len(self._proposals) != before:
                self._debug("info", "reconciler", f"{len(self._proposals)} proposal(s)")
            self._notify()

        if is_terminal(event):
            self._finish(f"terminal event: {event.kind.value}")

    def accept(self, proposal_id: str) -> None:
        """Mark a proposal accepted. Later extractions never clear it."""
        self._proposals = self._proposals.accept(proposal_id)
        self._notify()

    def reject(self, proposal_id: str) -> None:
        """Remove a proposal."""
        self._proposals = self._proposals.reject(proposal_id)
        self._notify()

    def cancel(self) -> None:
        """Stop processing this stream; later frames are ignored."""
        if self._cancelled:
            return
        self._cancelled = True
        self._watchdog.cancel()
        self._is_streaming = False
        if not self._state.is_final:
            self._state = SessionState.FINISHED
            self._debug("info", "session", "stream cancelled")
            self._notify()

    def _finish(self, reason: str) -> None:
        self._state = SessionState.FINISHED
        self._watchdog.cancel()
        self._is_streaming = False
        self._debug("info", "session", f"stream finished ({reason})")
        self._notify()

    def _fail(self, error: TransportError) -> None:
        self._state = SessionState.FAILED
        self.error = error
        self._watchdog.cancel()
        self._is_streaming = False
        self._debug("error", "transport", str(error))
        self._raise_advisory(Advisory(kind=AdvisoryKind.FAILURE, message=FAILURE_ADVISORY))

    def _on_stall(self) -> None:
        self._is_streaming = False
        self._debug("warning", "watchdog", f"no data for {self._watchdog.timeout_s:.1f}s")
        self._raise_advisory(Advisory(kind=AdvisoryKind.STALL, message=STALL_ADVISORY))

    def _raise_advisory(self, advisory: Advisory) -> None:
        self._advisory = advisory
        if self._on_advisory:
            self._on_advisory(advisory)
        self._notify()

    def _notify(self) -> None:
        if self._on_update:
            self._on_update(self)
