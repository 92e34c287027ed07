"""
Admin Par Level Routes for Prep Kitchen
=======================================

Endpoints for par levels: the target quantity of each menu item per day of
the week, entered by hand or imported from a par sheet.

Endpoints:
----------
- GET /admin/par-levels: List par levels, optionally for one day
- PUT /admin/par-levels: Create or replace the par for (menu item, day)
- DELETE /admin/par-levels/{id}: Delete a par level
- POST /admin/par-levels/import/preview: Extract a par sheet and match its
  items against the menu (AI call, rate limited)
- POST /admin/par-levels/import: Commit reviewed par sheet rows

Par Sheet Import:
-----------------
"Half" and "Full" prefixes are kept while matching: "Half Caesar" and
"Caesar" are separate menu items with separate pars. Rows matched with any
confidence start selected; the admin can unselect rows or pick a different
menu item before committing.
"""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session, joinedload

from .. import config
from ..auth import verify_admin_credentials
from ..db import get_db
from ..llm_client import DocumentExtractionError, extract_document
from ..models import MenuItem, ParLevel
from ..rate_limit import get_rate_limit_extraction, limiter
from ..schemas.imports import (
    DocumentUploadRequest,
    ImportSummaryOut,
    ParImportRequest,
    ParSheetPreviewResponse,
)
from ..schemas.par_levels import ParLevelOut, ParLevelUpsert
from ..services.catalog import load_menu_catalog
from ..services.helpers import extraction_http_exception, serialize_review_row
from ..services.import_review import build_review_rows, import_par_levels

logger = logging.getLogger(__name__)

admin_par_levels_router = APIRouter(prefix="/admin/par-levels", tags=["Admin - Par Levels"])


def serialize_par_level(par: ParLevel) -> ParLevelOut:
    return ParLevelOut(
        id=par.id,
        menu_item_id=par.menu_item_id,
        menu_item_name=par.menu_item.name if par.menu_item else None,
        day_of_week=par.day_of_week,
        par_quantity=par.par_quantity,
    )


# =============================================================================
# Par Level Endpoints
# =============================================================================

@admin_par_levels_router.get("", response_model=List[ParLevelOut])
def list_par_levels(
    day_of_week: Optional[int] = Query(None, ge=0, le=6, description="0=Sunday .. 6=Saturday"),
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[ParLevelOut]:
    query = db.query(ParLevel).options(joinedload(ParLevel.menu_item))
    if day_of_week is not None:
        query = query.filter(ParLevel.day_of_week == day_of_week)
    pars = query.order_by(ParLevel.day_of_week.asc(), ParLevel.menu_item_id.asc()).all()
    return [serialize_par_level(p) for p in pars]


@admin_par_levels_router.put("", response_model=ParLevelOut)
def upsert_par_level(
    payload: ParLevelUpsert,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ParLevelOut:
    if not db.query(MenuItem.id).filter(MenuItem.id == payload.menu_item_id).first():
        raise HTTPException(status_code=404, detail="Menu item not found")

    par = (
        db.query(ParLevel)
        .filter(ParLevel.menu_item_id == payload.menu_item_id, ParLevel.day_of_week == payload.day_of_week)
        .first()
    )
    if par:
        par.par_quantity = payload.par_quantity
    else:
        par = ParLevel(
            menu_item_id=payload.menu_item_id,
            day_of_week=payload.day_of_week,
            par_quantity=payload.par_quantity,
        )
        db.add(par)
    db.commit()
    db.refresh(par)
    logger.info(
        "Set par level: menu_item_id=%d day=%d quantity=%d",
        par.menu_item_id, par.day_of_week, par.par_quantity,
    )
    return serialize_par_level(par)


@admin_par_levels_router.delete("/{par_level_id}", status_code=204)
def delete_par_level(
    par_level_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    par = db.query(ParLevel).filter(ParLevel.id == par_level_id).first()
    if not par:
        raise HTTPException(status_code=404, detail="Par level not found")
    db.delete(par)
    db.commit()
    return None


# =============================================================================
# Par Sheet Import Endpoints
# =============================================================================

@admin_par_levels_router.post("/import/preview", response_model=ParSheetPreviewResponse)
@limiter.limit(get_rate_limit_extraction)
def preview_par_sheet(
    request: Request,
    payload: DocumentUploadRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ParSheetPreviewResponse:
    """Extract a par sheet and match every item against the active menu."""
    catalog = load_menu_catalog(db)
    if not catalog:
        raise HTTPException(status_code=400, detail="No menu items found. Please import menu items first.")

    try:
        document = extract_document(
            payload.file_content,
            payload.file_name,
            "par_sheet",
            menu_item_names=[entry.name for entry in catalog],
        )
    except DocumentExtractionError as e:
        raise extraction_http_exception(e) from e

    rows = build_review_rows(document.items, catalog, config.PAR_SHEET_PRESERVE_PORTION_PREFIX)
    return ParSheetPreviewResponse(
        rows=[serialize_review_row(r) for r in rows],
        skipped=document.skipped,
        has_multiple_days=document.has_multiple_days,
        detected_days=document.detected_days,
    )


@admin_par_levels_router.post("/import", response_model=ImportSummaryOut)
def commit_par_sheet(
    payload: ParImportRequest,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> ImportSummaryOut:
    """Upsert the selected rows. Manual matches replace automatic ones."""
    summary = import_par_levels(db, payload.rows, payload.day_of_week)
    return ImportSummaryOut(**asdict(summary))
