"""
File classification for smart batch uploads.

Menu-item workbooks (food cost spreadsheets) and recipe cards (production
specs) are told apart by header keywords near the top of the extracted text.
Every file in the batch is fingerprinted so redundant uploads can be dropped
before they are parsed and matched.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence

from .. import config
from .fingerprints import FileFingerprint, are_duplicates, build_fingerprint

logger = logging.getLogger(__name__)


class FileType(str, Enum):
    MENU_ITEM = "menu_item"
    RECIPE = "recipe"
    UNKNOWN = "unknown"


MENU_ITEM_KEYWORDS = ("MENU ITEM", "FOOD COST SPREADSHEET", "MENU PRICE")
RECIPE_KEYWORDS = ("RECIPE", "PRODUCTION SPEC", "INGREDIENT", "METHOD", "PREP INSTRUCTION")


def classify_content(text: str) -> FileType:
    """Classify document text by its header keywords. Menu-item markers win."""
    head = (text or "")[: config.CLASSIFICATION_SCAN_CHARS].upper()

    if any(keyword in head for keyword in MENU_ITEM_KEYWORDS):
        return FileType.MENU_ITEM
    if any(keyword in head for keyword in RECIPE_KEYWORDS):
        return FileType.RECIPE
    return FileType.UNKNOWN


@dataclass
class UploadedFile:
    id: str
    file_name: str
    content: str
    sheet_name: Optional[str] = None


@dataclass
class ClassifiedFile:
    id: str
    file_name: str
    sheet_name: Optional[str]
    file_type: FileType
    fingerprint: FileFingerprint
    is_duplicate: bool = False
    duplicate_of: Optional[str] = None


@dataclass
class BatchClassification:
    files: List[ClassifiedFile] = field(default_factory=list)

    @property
    def menu_item_count(self) -> int:
        return sum(1 for f in self.files if f.file_type is FileType.MENU_ITEM and not f.is_duplicate)

    @property
    def recipe_count(self) -> int:
        return sum(1 for f in self.files if f.file_type is FileType.RECIPE and not f.is_duplicate)

    @property
    def unknown_count(self) -> int:
        return sum(1 for f in self.files if f.file_type is FileType.UNKNOWN)

    @property
    def duplicate_count(self) -> int:
        return sum(1 for f in self.files if f.is_duplicate)

    def unique_files(self, file_type: Optional[FileType] = None) -> List[ClassifiedFile]:
        return [
            f for f in self.files
            if not f.is_duplicate and (file_type is None or f.file_type is file_type)
        ]


def classify_batch(uploads: Sequence[UploadedFile]) -> BatchClassification:
    """
    Classify every uploaded file and mark duplicates.

    A file is marked as a duplicate of the first earlier, non-duplicate file
    it duplicates; upload order decides which copy is kept.
    """
    batch = BatchClassification()

    for upload in uploads:
        fingerprint = build_fingerprint(upload.file_name, upload.content)
        classified = ClassifiedFile(
            id=upload.id,
            file_name=upload.file_name,
            sheet_name=upload.sheet_name,
            file_type=classify_content(upload.content),
            fingerprint=fingerprint,
        )

        for kept in batch.unique_files():
            if are_duplicates(kept.fingerprint, fingerprint):
                classified.is_duplicate = True
                classified.duplicate_of = kept.file_name
                logger.info("File %s is a duplicate of %s", upload.file_name, kept.file_name)
                break

        batch.files.append(classified)

    logger.info(
        "Classified %d files: %d menu item, %d recipe, %d unknown, %d duplicate",
        len(batch.files),
        batch.menu_item_count,
        batch.recipe_count,
        batch.unknown_count,
        batch.duplicate_count,
    )
    return batch
