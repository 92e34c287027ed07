"""
Duplicate File Detection for Batch Uploads.

When several spreadsheets are dropped at once it is common for the same
workbook to show up twice (re-exported, renamed, "copy of ..."). Each file
gets a FileFingerprint built from its name and extracted text, and files are
compared pairwise within the batch before anything is matched against the
catalog.

Two files are duplicates when:
1. their name and content-sample tokens are identical, or
2. both have at least DUPLICATE_MIN_SAMPLE_ITEMS sample item names and
   more than DUPLICATE_OVERLAP_THRESHOLD of the smaller sample overlaps
   with the other (substring match in either direction).
"""

import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .. import config

_EXTENSION_RE = re.compile(r"\.[a-z0-9]+$")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALPHA_RE = re.compile(r"[^a-z\s]")


@dataclass(frozen=True)
class FileFingerprint:
    file_name_token: str
    content_sample_token: str
    sample_item_names: Tuple[str, ...] = ()

    @property
    def token(self) -> str:
        return f"{self.file_name_token}-{self.content_sample_token}"


def normalize_file_name(file_name: str) -> str:
    """Lowercase, drop the extension, keep only [a-z0-9]."""
    name = (file_name or "").strip().lower()
    name = _EXTENSION_RE.sub("", name)
    return _NON_ALNUM_RE.sub("", name)


def content_sample_token(text: str) -> str:
    """Encode the start of a document as "<sample length>-<sample prefix>"."""
    sample = (text or "")[: config.FINGERPRINT_CONTENT_CHARS].lower()
    sample = _WHITESPACE_RE.sub("", sample)
    sample = _NON_ALNUM_RE.sub("", sample)
    return f"{len(sample)}-{sample[: config.FINGERPRINT_PREFIX_CHARS]}"


def extract_item_names(text: str) -> Tuple[str, ...]:
    """
    Pull identifying item names out of CSV-like document text.

    Looks at the first FINGERPRINT_SCAN_LINES lines, skips blank lines and
    "=== Sheet ===" separators, and takes the first column of each line,
    reduced to lowercase letters and spaces. Names of 2 characters or fewer
    are ignored. At most FINGERPRINT_SAMPLE_ITEMS names are returned.
    """
    names = []
    for line in (text or "").split("\n")[: config.FINGERPRINT_SCAN_LINES]:
        if not line.strip() or "===" in line:
            continue

        first_column = line.split(",")[0].strip()
        if len(first_column) <= 2:
            continue

        name = _NON_ALPHA_RE.sub("", first_column.lower()).strip()
        if len(name) > 2:
            names.append(name)

    return tuple(names[: config.FINGERPRINT_SAMPLE_ITEMS])


def build_fingerprint(file_name: str, text: str) -> FileFingerprint:
    return FileFingerprint(
        file_name_token=normalize_file_name(file_name),
        content_sample_token=content_sample_token(text),
        sample_item_names=extract_item_names(text),
    )


def _directional_overlap(items: Sequence[str], others: Sequence[str]) -> int:
    return sum(
        1 for item in items
        if any(item in other or other in item for other in others)
    )


def overlap_ratio(fp1: FileFingerprint, fp2: FileFingerprint) -> float:
    """
    Share of the smaller sample that also appears in the other sample.

    Both directions are counted and the larger count is used, which keeps
    the ratio symmetric. Capped at 1.0.
    """
    items1 = fp1.sample_item_names
    items2 = fp2.sample_item_names
    if not items1 or not items2:
        return 0.0

    count = max(_directional_overlap(items1, items2), _directional_overlap(items2, items1))
    return min(1.0, count / min(len(items1), len(items2)))


def are_duplicates(
    fp1: FileFingerprint,
    fp2: FileFingerprint,
    *,
    overlap_threshold: Optional[float] = None,
    min_items: Optional[int] = None,
) -> bool:
    """Decide whether two fingerprints describe the same source content."""
    if fp1.token == fp2.token:
        return True

    if overlap_threshold is None:
        overlap_threshold = config.DUPLICATE_OVERLAP_THRESHOLD
    if min_items is None:
        min_items = config.DUPLICATE_MIN_SAMPLE_ITEMS

    if len(fp1.sample_item_names) < min_items or len(fp2.sample_item_names) < min_items:
        return False

    return overlap_ratio(fp1, fp2) > overlap_threshold
