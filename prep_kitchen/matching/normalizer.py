"""
Item Name Normalization.

Canonicalizes raw item names pulled out of sales reports, par sheets and
recipe cards so they can be compared against catalog names.

Rules:
- lowercase
- collapse whitespace runs, trim
- strip a leading weight prefix such as "6oz", "10 oz." (start of string only)
- optionally strip leading "Half"/"Full" portion words

"Half Caesar" and "Caesar Salad" are different menu items in most kitchens,
so portion prefixes are kept unless the caller asks otherwise.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_OZ_PREFIX_RE = re.compile(r"^\d+\s*oz\.?\s*", re.IGNORECASE)
_PORTION_PREFIX_RE = re.compile(r"^(?:half|full)\s+", re.IGNORECASE)


def _collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_item_name(raw: str, preserve_portion_prefix: bool = True) -> str:
    """
    Normalize an item name for matching.

    Prefixes are stripped repeatedly until nothing changes, so
    "6oz 8oz Ribeye" and " 6oz Ribeye" both settle on "ribeye" and
    normalizing a normalized name is a no-op.

    Args:
        raw: Name as extracted from a document.
        preserve_portion_prefix: Keep leading "half"/"full" words (default).

    Returns:
        The normalized name; "" for empty input.
    """
    if not raw:
        return ""

    name = _collapse_whitespace(raw.lower())

    previous = None
    while previous != name:
        previous = name
        name = _OZ_PREFIX_RE.sub("", name)
        if not preserve_portion_prefix:
            name = _PORTION_PREFIX_RE.sub("", name)
        name = name.strip()

    return name
