"""Normalization of escaped angle-bracket markup.

Some backends escape `<` and `>` as `\\u003c` / `\\u003e` or as `&lt;` / `&gt;`.
Converting them up front lets the extractor match literal tags only.
"""

import re

_LESS_THAN = re.compile(r"\\u003c|&lt;", re.IGNORECASE)
_GREATER_THAN = re.compile(r"\\u003e|&gt;", re.IGNORECASE)


def decode_escaped_tags(text: str | None) -> str | None:
    """Convert escaped angle brackets to literal characters.

    Idempotent: the replacements only ever produce `<` and `>`, which no
    pattern matches, so decoding decoded text changes nothing.

    Args:
        text: Text that may contain escaped markup

    Returns:
        Decoded text, or the input unchanged if it is empty or None
    """
    if not text:
        return text
    return _GREATER_THAN.sub(">", _LESS_THAN.sub("<", text))
