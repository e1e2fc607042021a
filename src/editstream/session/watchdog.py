"""Stall detection for an active stream.

A single-shot asyncio timer, re-armed on every frame. Firing and
cancellation both run on the event loop thread, so for one arm cycle only
one of the two effects can happen.
"""

import asyncio
from collections.abc import Callable


class StallWatchdog:
    """Single-shot liveness timer.

    Args:
        timeout_s: Seconds without a re-arm before the stall callback fires
        on_stall: Called once per arm cycle when the timer fires
    """

    def __init__(self, timeout_s: float, on_stall: Callable[[], None]):
        if timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {timeout_s}")
        self._timeout_s = timeout_s
        self._on_stall = on_stall
        self._handle: asyncio.TimerHandle | None = None
        self._fired = False
        self.fire_count = 0

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    @property
    def armed(self) -> bool:
        """Whether a timer is pending."""
        return self._handle is not None

    @property
    def fired(self) -> bool:
        """Whether the current arm cycle ended by firing."""
        return self._fired

    def arm(self) -> None:
        """Start (or restart) the timer. Must be called from a running loop."""
        self.cancel()
        self._fired = False
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self._timeout_s, self._fire)

    def cancel(self) -> None:
        """Stop the pending timer, if any. No effect after firing."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self) -> None:
        if self._handle is None:
            return
        self._handle = None
        self._fired = True
        self.fire_count += 1
        self._on_stall()
