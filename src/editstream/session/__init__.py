"""Reconciliation session module.

Drives one event stream at a time: frames in, canonical events applied,
proposals reconciled, stalls and failures surfaced as advisories.
"""

from .client import ChatClient, SessionHandle
from .models import Advisory, AdvisoryKind, SessionState, TranscriptMessage
from .session import ReconciliationSession
from .watchdog import StallWatchdog

__all__ = [
    "Advisory",
    "AdvisoryKind",
    "ChatClient",
    "ReconciliationSession",
    "SessionHandle",
    "SessionState",
    "StallWatchdog",
    "TranscriptMessage",
]
