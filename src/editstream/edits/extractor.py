"""Extraction of edit directives from assistant text.

A directive looks like:

    <edit_card>
    cardid:30aebfb2-8072-4b73-9c3f-116183ef52e1
    old_text:Text overlay: "When The Noob Beats The Dragon First"
    new_text:Text overlay appears with dramatic zoom
    </edit_card>

Only complete blocks (closing tag present) are extracted. The functions here
keep no scan state between calls, so re-running them on a longer rendering
of the same text rediscovers earlier blocks; deduplication is the
reconciler's job.
"""

import re

from ..config import BRIEF_ELLIPSIS, BRIEF_MAX_LENGTH
from .decoder import decode_escaped_tags
from .models import Proposal

OPEN_TAG = "<edit_card>"
CLOSE_TAG = "</edit_card>"

_EDIT_BLOCK = re.compile(
    r"<edit_card>\s*cardid:([^\n]+)\nold_text:(.*?)\nnew_text:(.*?)\n</edit_card>",
    re.DOTALL,
)
_ANY_BLOCK = re.compile(r"<edit_card>.*?</edit_card>", re.DOTALL)
_EDGE_QUOTES = re.compile(r'^"+|"+$')
_LEADING_PLACEHOLDER = re.compile(r"^\[\]")


def _clean(value: str) -> str:
    return _EDGE_QUOTES.sub("", value.strip())


def extract_edit_blocks(text: str | None) -> list[Proposal]:
    """Extract every complete edit block from already-decoded text.

    Args:
        text: Current full assistant text (tag-decoded)

    Returns:
        Proposals in order of appearance, all with accepted=False
    """
    if not text or CLOSE_TAG not in text:
        return []

    return [
        Proposal(
            id=match.group(1).strip(),
            original_text=_clean(match.group(2)),
            suggested_text=_clean(match.group(3)),
        )
        for match in _EDIT_BLOCK.finditer(text)
    ]


def strip_edit_blocks(text: str) -> str:
    """Remove every complete edit block from text."""
    return _ANY_BLOCK.sub("", text)


def assistant_brief(text: str | None, limit: int = BRIEF_MAX_LENGTH) -> str:
    """Build the short prose rendering of an assistant turn.

    Decodes escaped tags, drops complete edit blocks and the leading `[]`
    placeholder the backend emits, then truncates.

    Args:
        text: Raw assistant text
        limit: Maximum characters before truncation

    Returns:
        Cleaned, possibly truncated text
    """
    if not text:
        return ""
    clean = strip_edit_blocks(decode_escaped_tags(text))
    clean = _LEADING_PLACEHOLDER.sub("", clean).strip()
    if len(clean) > limit:
        return clean[:limit] + BRIEF_ELLIPSIS
    return clean
