"""Edit directive handling.

Decodes escaped markup, extracts complete edit blocks from assistant text
and reconciles them into an order-stable proposal set.
"""

from .decoder import decode_escaped_tags
from .extractor import assistant_brief, extract_edit_blocks, strip_edit_blocks
from .models import Proposal, ProposalSet
from .reconciler import merge_proposals, reconcile_text

__all__ = [
    "Proposal",
    "ProposalSet",
    "assistant_brief",
    "decode_escaped_tags",
    "extract_edit_blocks",
    "merge_proposals",
    "reconcile_text",
    "strip_edit_blocks",
]
