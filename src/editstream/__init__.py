"""
Editstream: incremental reconciliation of streamed edit proposals.

Consumes a server-sent event stream of assistant text, extracts complete
edit directives as soon as they appear and merges them into a stable
proposal set that never un-accepts a proposal.
"""

__version__ = "0.1.0"

from .config import ReconcilerConfig, load_config
from .edits import (
    Proposal,
    ProposalSet,
    decode_escaped_tags,
    extract_edit_blocks,
    merge_proposals,
)
from .protocol import CanonicalEvent, FrameSplitter, normalize_event
from .session import (
    Advisory,
    ChatClient,
    ReconciliationSession,
    SessionState,
    StallWatchdog,
)
from .transport import StreamTransport, TransportError, create_transport

__all__ = [
    "Advisory",
    "CanonicalEvent",
    "ChatClient",
    "FrameSplitter",
    "Proposal",
    "ProposalSet",
    "ReconcilerConfig",
    "ReconciliationSession",
    "SessionState",
    "StallWatchdog",
    "StreamTransport",
    "TransportError",
    "create_transport",
    "decode_escaped_tags",
    "extract_edit_blocks",
    "load_config",
    "merge_proposals",
    "normalize_event",
]
