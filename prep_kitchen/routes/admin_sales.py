"""
Admin Sales Routes for Prep Kitchen
===================================

Endpoints for importing POS item sales reports.

Endpoints:
----------
- GET /admin/sales: List sales rows for a date
- POST /admin/sales/preview: Extract a sales report and match its items
  against the menu (AI call, rate limited)
- POST /admin/sales: Commit reviewed sales rows for a business date

Sales rows are unique per (menu item, sales date); importing the same date
again overwrites the quantities.
"""

import logging
from dataclasses import asdict
from datetime import date
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session, joinedload

from .. import config
from ..auth import verify_admin_credentials
from ..db import get_db
from ..llm_client import DocumentExtractionError, extract_document
from ..models import SalesData
from ..rate_limit import get_rate_limit_extraction, limiter
from ..schemas.imports import (
    DocumentUploadRequest,
    ImportSummaryOut,
    SalesImportRequest,
    SalesPreviewResponse,
)
from ..schemas.sales import SalesDataOut
from ..services.catalog import load_menu_catalog
from ..services.helpers import extraction_http_exception, serialize_review_row
from ..services.import_review import build_review_rows, import_sales

logger = logging.getLogger(__name__)

admin_sales_router = APIRouter(prefix="/admin/sales", tags=["Admin - Sales"])


@admin_sales_router.get("", response_model=List[SalesDataOut])
def list_sales(
    sales_date: date = Query(..., description="Business date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[SalesDataOut]:
    rows = (
        db.query(SalesData)
        .options(joinedload(SalesData.menu_item))
        .filter(SalesData.sales_date == sales_date)
        .order_by(SalesData.menu_item_id.asc())
        .all()
    )
    return [
        SalesDataOut(
            id=r.id,
            menu_item_id=r.menu_item_id,
            menu_item_name=r.menu_item.name if r.menu_item else None,
            sales_date=r.sales_date,
            quantity_sold=r.quantity_sold,
        )
        for r in rows
    ]


@admin_sales_router.post("/preview", response_model=SalesPreviewResponse)
@limiter.limit(get_rate_limit_extraction)
def preview_sales_report(
    request: Request,
    payload: DocumentUploadRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> SalesPreviewResponse:
    """Extract units sold per item and match every item against the active menu."""
    catalog = load_menu_catalog(db)
    if not catalog:
        raise HTTPException(status_code=400, detail="No menu items found. Please import menu items first.")

    try:
        document = extract_document(
            payload.file_content,
            payload.file_name,
            "sales",
            menu_item_names=[entry.name for entry in catalog],
        )
    except DocumentExtractionError as e:
        raise extraction_http_exception(e) from e

    rows = build_review_rows(document.items, catalog, config.SALES_PRESERVE_PORTION_PREFIX)
    return SalesPreviewResponse(rows=[serialize_review_row(r) for r in rows], skipped=document.skipped)


@admin_sales_router.post("", response_model=ImportSummaryOut)
def commit_sales(
    payload: SalesImportRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ImportSummaryOut:
    summary = import_sales(db, payload.rows, payload.sales_date)
    return ImportSummaryOut(**asdict(summary))
