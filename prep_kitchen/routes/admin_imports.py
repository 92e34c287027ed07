"""
Admin Import Routes for Prep Kitchen
====================================

Generic document import: auto-detect what an uploaded document is, match its
items, and commit reviewed menu items and recipe cards.

Endpoints:
----------
- POST /admin/imports/analyze: Detect the document type, extract items and
  match them (AI call, rate limited)
- POST /admin/imports/classify: Classify a multi-file upload as menu item
  workbooks or recipe cards and flag duplicate files (no AI call)
- POST /admin/imports/menu-items: Create menu items from reviewed rows
- POST /admin/imports/recipes: Create recipe cards from reviewed rows

Batch Upload Flow:
------------------
1. The client renders every file (and every Excel sheet) as text and posts
   the batch to /classify.
2. Files marked as duplicates are dropped; the remaining ones are sent to
   /analyze one at a time.
3. Reviewed menu items and recipes are committed. Recipes are committed
   first so new menu items can be linked to them.
"""

import logging
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..llm_client import DocumentExtractionError, analyze_document, extract_document
from ..matching import UploadedFile, classify_batch
from ..rate_limit import get_rate_limit_extraction, limiter
from ..schemas.imports import (
    AnalyzeResponse,
    BatchClassifyRequest,
    BatchClassifyResponse,
    ClassifiedFileOut,
    DocumentUploadRequest,
    ImportSummaryOut,
    MenuItemImportRequest,
    RecipeImportRequest,
)
from ..services.helpers import extraction_http_exception, serialize_review_row
from ..services.import_review import import_menu_items, import_recipes, review_document

logger = logging.getLogger(__name__)

admin_imports_router = APIRouter(prefix="/admin/imports", tags=["Admin - Imports"])


@admin_imports_router.post("/analyze", response_model=AnalyzeResponse)
@limiter.limit(get_rate_limit_extraction)
def analyze_upload(
    request: Request,
    payload: DocumentUploadRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> AnalyzeResponse:
    """
    Extract an uploaded document and match its items.

    When document_type is given the type detection step is skipped. An
    unrecognized document comes back as type "unknown" with no review rows.
    """
    try:
        if payload.document_type:
            document = extract_document(payload.file_content, payload.file_name, payload.document_type)
        else:
            document = analyze_document(payload.file_content, payload.file_name)
    except DocumentExtractionError as e:
        raise extraction_http_exception(e) from e

    rows = review_document(db, document)
    logger.info("Analyzed %s: %s with %d rows", payload.file_name, document.type, len(rows))
    return AnalyzeResponse(document=document, review_rows=[serialize_review_row(r) for r in rows])


@admin_imports_router.post("/classify", response_model=BatchClassifyResponse)
def classify_uploads(
    payload: BatchClassifyRequest,
    _admin: str = Depends(verify_admin_credentials),
) -> BatchClassifyResponse:
    uploads = [
        UploadedFile(
            id=f.id or str(index),
            file_name=f.file_name,
            content=f.content,
            sheet_name=f.sheet_name,
        )
        for index, f in enumerate(payload.files)
    ]
    batch = classify_batch(uploads)

    files: List[ClassifiedFileOut] = [
        ClassifiedFileOut(
            id=f.id,
            file_name=f.file_name,
            sheet_name=f.sheet_name,
            file_type=f.file_type.value,
            fingerprint=f.fingerprint.token,
            sample_item_names=list(f.fingerprint.sample_item_names),
            is_duplicate=f.is_duplicate,
            duplicate_of=f.duplicate_of,
        )
        for f in batch.files
    ]
    return BatchClassifyResponse(
        files=files,
        menu_item_count=batch.menu_item_count,
        recipe_count=batch.recipe_count,
        unknown_count=batch.unknown_count,
        duplicate_count=batch.duplicate_count,
    )


@admin_imports_router.post("/menu-items", response_model=ImportSummaryOut)
def commit_menu_items(
    payload: MenuItemImportRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ImportSummaryOut:
    summary = import_menu_items(db, payload.items)
    return ImportSummaryOut(**asdict(summary))


@admin_imports_router.post("/recipes", response_model=ImportSummaryOut)
def commit_recipes(
    payload: RecipeImportRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ImportSummaryOut:
    summary = import_recipes(db, payload.recipes)
    return ImportSummaryOut(**asdict(summary))
