"""
Best-Match Resolver.

Matches a name extracted from an uploaded document against the canonical
catalog (menu items or recipes) and reports how confident the match is.
Review screens pre-select every row whose confidence is not "none".

Tiers, first hit wins:

1. exact       - names equal ignoring case (no normalization)
2. normalized  - names equal after normalize_item_name()
3. fuzzy       - best similarity() of the normalized names, if it reaches
                 the threshold; ties go to the earliest catalog entry
4. none        - nothing reached the threshold, or there was nothing to match

Catalog entries are anything with ``id`` and ``name`` attributes, including
ORM rows. The resolver only reads them and returns the same object it was
given.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Sequence

from .. import config
from .normalizer import normalize_item_name
from .scorer import similarity

logger = logging.getLogger(__name__)


class MatchConfidence(str, Enum):
    EXACT = "exact"
    NORMALIZED = "normalized"
    FUZZY = "fuzzy"
    NONE = "none"


# Badge labels shown next to each review row
CONFIDENCE_LABELS = {
    MatchConfidence.EXACT: "Exact",
    MatchConfidence.NORMALIZED: "Partial",
    MatchConfidence.FUZZY: "Fuzzy",
    MatchConfidence.NONE: "None",
}


@dataclass(frozen=True)
class CatalogEntry:
    """A catalog record as seen by the matcher."""
    id: Any
    name: str

    @classmethod
    def from_record(cls, record: Any) -> "CatalogEntry":
        return cls(id=record.id, name=record.name)


@dataclass(frozen=True)
class MatchResult:
    entry: Optional[Any]
    confidence: MatchConfidence
    score: float = 0.0

    @property
    def matched(self) -> bool:
        return self.confidence is not MatchConfidence.NONE

    @property
    def label(self) -> str:
        return CONFIDENCE_LABELS[self.confidence]


NO_MATCH = MatchResult(entry=None, confidence=MatchConfidence.NONE, score=0.0)


def is_selected_by_default(result: MatchResult) -> bool:
    """Review rows start selected whenever something was matched."""
    return result.confidence is not MatchConfidence.NONE


def _resolve(
    raw_name: str,
    catalog: Sequence[Any],
    normalized_names: List[str],
    preserve_portion_prefix: bool,
    threshold: float,
) -> MatchResult:
    if not raw_name or not catalog:
        return NO_MATCH

    raw_lower = raw_name.lower()
    for entry in catalog:
        if (entry.name or "").lower() == raw_lower:
            return MatchResult(entry=entry, confidence=MatchConfidence.EXACT, score=1.0)

    normalized_raw = normalize_item_name(raw_name, preserve_portion_prefix)
    if not normalized_raw:
        return NO_MATCH

    for entry, normalized in zip(catalog, normalized_names):
        if normalized == normalized_raw:
            return MatchResult(entry=entry, confidence=MatchConfidence.NORMALIZED, score=1.0)

    best_entry = None
    best_score = 0.0
    for entry, normalized in zip(catalog, normalized_names):
        score = similarity(normalized_raw, normalized)
        # strict ">" keeps the first entry on ties
        if score > best_score:
            best_score = score
            best_entry = entry

    if best_entry is not None and best_score >= threshold:
        return MatchResult(entry=best_entry, confidence=MatchConfidence.FUZZY, score=best_score)

    return NO_MATCH


def find_best_match(
    raw_name: str,
    catalog: Sequence[Any],
    *,
    preserve_portion_prefix: bool = True,
    threshold: Optional[float] = None,
) -> MatchResult:
    """
    Find the best catalog entry for a single extracted name.

    Args:
        raw_name: Name as extracted by the AI parser.
        catalog: Ordered catalog entries; order only matters for fuzzy ties.
        preserve_portion_prefix: Passed to normalize_item_name().
        threshold: Fuzzy tier cut-off, defaults to config.FUZZY_MATCH_THRESHOLD.

    Returns:
        A MatchResult. Never raises, even for empty input.
    """
    if threshold is None:
        threshold = config.FUZZY_MATCH_THRESHOLD
    catalog = list(catalog)
    normalized_names = [normalize_item_name(e.name or "", preserve_portion_prefix) for e in catalog]
    return _resolve(raw_name, catalog, normalized_names, preserve_portion_prefix, threshold)


def resolve_names(
    raw_names: Iterable[str],
    catalog: Sequence[Any],
    *,
    preserve_portion_prefix: bool = True,
    threshold: Optional[float] = None,
) -> List[MatchResult]:
    """
    Resolve many names against one catalog, normalizing the catalog once.

    Results are returned in the order of raw_names. Several names may resolve
    to the same catalog entry; callers decide how to handle that.
    """
    if threshold is None:
        threshold = config.FUZZY_MATCH_THRESHOLD
    catalog = list(catalog)
    normalized_names = [normalize_item_name(e.name or "", preserve_portion_prefix) for e in catalog]

    results = [
        _resolve(name, catalog, normalized_names, preserve_portion_prefix, threshold)
        for name in raw_names
    ]

    if logger.isEnabledFor(logging.DEBUG):
        counts = {c.value: 0 for c in MatchConfidence}
        for r in results:
            counts[r.confidence.value] += 1
        logger.debug("Resolved %d names against %d catalog entries: %s", len(results), len(catalog), counts)

    return results
