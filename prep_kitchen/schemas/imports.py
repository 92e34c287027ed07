"""
Import Schemas for Prep Kitchen
===============================

Pydantic models for the document import flows: upload, review and commit.

Import Flow:
------------
1. **Upload**: The admin UI converts the uploaded file (CSV, PDF text, or an
   Excel sheet rendered as CSV) to text and posts it with the file name.

2. **Preview**: The AI extracts items and every item name is matched against
   the catalog. Each review row carries the best match, its confidence and
   whether it starts selected.

3. **Review**: The admin unselects rows or picks a different catalog entry
   (manual match), which always wins over the automatic match.

4. **Commit**: Selected rows are sent back and upserted. The response counts
   imported, skipped and failed rows; a failed row never aborts the batch.

Batch Classification:
---------------------
Multi-file uploads are first classified as menu item workbooks or recipe
cards, and files whose items overlap heavily with an earlier file in the
same batch are flagged as duplicates.
"""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .documents import DocumentAnalysis, ParsedMenuItem, ParsedRecipe, SkippedItem
from .menu import Station


class DocumentUploadRequest(BaseModel):
    """
    Request model for document analysis.

    Attributes:
        file_name: Original file name, used in prompts and logs
        file_content: Document text (CSV or extracted PDF/Excel text)
        document_type: Skip type detection when the caller already knows it
    """
    file_name: str = Field(..., min_length=1)
    file_content: str = Field(..., min_length=1)
    document_type: Optional[Literal["sales", "sales_report", "par_sheet", "recipe", "menu_item"]] = None


# =============================================================================
# Review Rows
# =============================================================================

class ReviewRowOut(BaseModel):
    """One extracted item with its best catalog match."""
    index: int
    name: str
    quantity: Optional[int] = None
    day_of_week: Optional[int] = None
    matched_id: Optional[int] = None
    matched_name: Optional[str] = None
    confidence: Literal["exact", "normalized", "fuzzy", "none"]
    confidence_label: str
    score: float = 0.0
    selected: bool = False


class ReviewRowIn(BaseModel):
    """
    A reviewed row sent back for commit.

    manual_match_id is set when the admin picked a catalog entry by hand and
    replaces matched_id.
    """
    name: str
    selected: bool = True
    matched_id: Optional[int] = None
    manual_match_id: Optional[int] = None
    quantity: Optional[int] = Field(default=None, ge=0)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)

    @property
    def target_id(self) -> Optional[int]:
        if self.manual_match_id is not None:
            return self.manual_match_id
        return self.matched_id


class AnalyzeResponse(BaseModel):
    """
    Response model for generic document analysis.

    review_rows are matched against menu items for sales reports, par sheets
    and recipe cards, and against recipes for menu item workbooks.
    """
    document: DocumentAnalysis
    review_rows: List[ReviewRowOut] = Field(default_factory=list)


class SalesPreviewResponse(BaseModel):
    rows: List[ReviewRowOut]
    skipped: List[SkippedItem] = Field(default_factory=list)


class ParSheetPreviewResponse(BaseModel):
    rows: List[ReviewRowOut]
    skipped: List[SkippedItem] = Field(default_factory=list)
    has_multiple_days: bool = False
    detected_days: List[int] = Field(default_factory=list)


class ParImportRequest(BaseModel):
    """
    Commit reviewed par sheet rows.

    day_of_week applies to rows that do not carry their own day.
    """
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6)
    rows: List[ReviewRowIn]


class SalesImportRequest(BaseModel):
    sales_date: date
    rows: List[ReviewRowIn]


class MenuItemImportRow(ParsedMenuItem):
    """A reviewed workbook row. station overrides the inferred station."""
    station: Optional[Station] = None


class MenuItemImportRequest(BaseModel):
    items: List[MenuItemImportRow]


class RecipeImportRequest(BaseModel):
    recipes: List[ParsedRecipe]


class ImportSummaryOut(BaseModel):
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = Field(default_factory=list)
    recipes_created: int = 0
    recipes_linked: int = 0


# =============================================================================
# Batch Classification
# =============================================================================

class BatchFileIn(BaseModel):
    """
    One file (or one sheet of a workbook) in a batch upload.

    Attributes:
        id: Client-side identifier, echoed back in the response
        file_name: Original file name
        content: File text
        sheet_name: Excel sheet the text came from, if any
    """
    id: Optional[str] = None
    file_name: str = Field(..., min_length=1)
    content: str = ""
    sheet_name: Optional[str] = None


class BatchClassifyRequest(BaseModel):
    files: List[BatchFileIn] = Field(..., min_length=1)


class ClassifiedFileOut(BaseModel):
    id: str
    file_name: str
    sheet_name: Optional[str] = None
    file_type: Literal["menu_item", "recipe", "unknown"]
    fingerprint: str
    sample_item_names: List[str] = Field(default_factory=list)
    is_duplicate: bool = False
    duplicate_of: Optional[str] = None


class BatchClassifyResponse(BaseModel):
    files: List[ClassifiedFileOut]
    menu_item_count: int
    recipe_count: int
    unknown_count: int
    duplicate_count: int
