"""Merging extracted proposals into the authoritative proposal set."""

from collections.abc import Iterable

from .decoder import decode_escaped_tags
from .extractor import extract_edit_blocks
from .models import Proposal, ProposalSet


def merge_proposals(current: ProposalSet, incoming: Iterable[Proposal]) -> ProposalSet:
    """Merge incoming proposals into current.

    Known ids keep their accepted flag: once a proposal is accepted, no
    later extraction can clear it.

    Args:
        current: Authoritative proposal set
        incoming: Freshly extracted proposals

    Returns:
        New ProposalSet (current is left untouched)
    """
    return current.merge(incoming)


def reconcile_text(current: ProposalSet, text: str | None) -> ProposalSet:
    """Decode text, extract its complete edit blocks and merge them.

    Returns current itself when the text holds no complete block.
    """
    parsed = extract_edit_blocks(decode_escaped_tags(text))
    if not parsed:
        return current
    return merge_proposals(current, parsed)
