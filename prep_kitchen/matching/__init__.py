"""
Item Matching and Reconciliation
================================

Aligns item names extracted from uploaded documents (sales reports, par
sheets, recipe cards, food cost workbooks) with the canonical catalog, and
detects redundant files in a batch upload.

Modules:
--------
- **normalizer.py**: normalize_item_name()
- **scorer.py**: similarity()
- **resolver.py**: find_best_match(), resolve_names(), MatchResult
- **fingerprints.py**: FileFingerprint, build_fingerprint(), are_duplicates()
- **classification.py**: classify_content(), classify_batch()

Everything here is pure and synchronous: no I/O and no shared state.
"""

from .normalizer import normalize_item_name
from .scorer import similarity
from .resolver import (
    CONFIDENCE_LABELS,
    CatalogEntry,
    MatchConfidence,
    MatchResult,
    find_best_match,
    is_selected_by_default,
    resolve_names,
)
from .fingerprints import (
    FileFingerprint,
    are_duplicates,
    build_fingerprint,
    content_sample_token,
    extract_item_names,
    normalize_file_name,
)
from .classification import (
    BatchClassification,
    ClassifiedFile,
    FileType,
    UploadedFile,
    classify_batch,
    classify_content,
)

__all__ = [
    "normalize_item_name",
    "similarity",
    "CONFIDENCE_LABELS",
    "CatalogEntry",
    "MatchConfidence",
    "MatchResult",
    "find_best_match",
    "is_selected_by_default",
    "resolve_names",
    "FileFingerprint",
    "are_duplicates",
    "build_fingerprint",
    "content_sample_token",
    "extract_item_names",
    "normalize_file_name",
    "BatchClassification",
    "ClassifiedFile",
    "FileType",
    "UploadedFile",
    "classify_batch",
    "classify_content",
]
