"""
Prep List Routes for Prep Kitchen
=================================

Endpoints:
----------
- POST /admin/prep-lists/generate: Generate the prep list for a date (admin)
- GET /prep-lists/{prep_date}: Prep list for a date, grouped by station
- PATCH /prep-lists/items/{item_id}: Update one item's status

The read and status endpoints are used by line cooks on the kitchen tablet
and do not require admin credentials.
"""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..schemas.prep import (
    PrepItemStatusUpdate,
    PrepListGenerateRequest,
    PrepListGenerateResponse,
    PrepListItemOut,
    PrepListOut,
)
from ..services.helpers import serialize_prep_list
from ..services.prep_list import generate_prep_list, get_prep_list, update_item_status

logger = logging.getLogger(__name__)

admin_prep_lists_router = APIRouter(prefix="/admin/prep-lists", tags=["Admin - Prep Lists"])
prep_lists_router = APIRouter(prefix="/prep-lists", tags=["Prep Lists"])


@admin_prep_lists_router.post("/generate", response_model=PrepListGenerateResponse)
def generate(
    payload: PrepListGenerateRequest,
    db: Session = Depends(get_db),
    admin: str = Depends(verify_admin_credentials),
) -> PrepListGenerateResponse:
    """Generate or regenerate a prep list. Both dates default to today."""
    prep_date = payload.prep_date or date.today()
    sales_date = payload.sales_date or prep_date
    prep_list = generate_prep_list(db, sales_date=sales_date, prep_date=prep_date, created_by=admin)
    return PrepListGenerateResponse(
        prep_list_id=prep_list.id,
        prep_date=prep_list.prep_date,
        sales_date=sales_date,
        item_count=len(prep_list.items),
    )


@prep_lists_router.get("/{prep_date}", response_model=PrepListOut)
def read_prep_list(
    prep_date: date,
    db: Session = Depends(get_db),
) -> PrepListOut:
    prep_list = get_prep_list(db, prep_date)
    if not prep_list:
        raise HTTPException(status_code=404, detail=f"No prep list for {prep_date.isoformat()}")
    return serialize_prep_list(prep_list)


@prep_lists_router.patch("/items/{item_id}", response_model=PrepListItemOut)
def set_item_status(
    item_id: int,
    payload: PrepItemStatusUpdate,
    db: Session = Depends(get_db),
) -> PrepListItemOut:
    item = update_item_status(db, item_id, payload.status)
    if item is None:
        raise HTTPException(status_code=404, detail="Prep item not found")
    return PrepListItemOut(
        id=item.id,
        menu_item_id=item.menu_item_id,
        menu_item_name=item.menu_item.name,
        station=item.menu_item.station,
        unit=item.menu_item.unit,
        quantity_needed=item.quantity_needed,
        status=item.status,
    )
