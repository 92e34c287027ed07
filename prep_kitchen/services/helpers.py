"""
Helper Functions for Prep Kitchen
=================================

Shared serializers used by the route handlers.

- serialize_review_row: ReviewRow dataclass -> ReviewRowOut
- serialize_prep_list: PrepList ORM object -> PrepListOut, grouped by station
- extraction_http_exception: DocumentExtractionError -> HTTPException
"""

from typing import Dict, List

from fastapi import HTTPException

from ..llm_client import DocumentExtractionError
from ..models import PrepList
from ..schemas.imports import ReviewRowOut
from ..schemas.prep import PrepListItemOut, PrepListOut
from .import_review import ReviewRow
from .prep_list import sorted_items


def serialize_review_row(row: ReviewRow) -> ReviewRowOut:
    entry = row.match.entry
    return ReviewRowOut(
        index=row.index,
        name=row.name,
        quantity=row.quantity,
        day_of_week=row.day_of_week,
        matched_id=entry.id if entry is not None else None,
        matched_name=entry.name if entry is not None else None,
        confidence=row.match.confidence.value,
        confidence_label=row.match.label,
        score=round(row.match.score, 4),
        selected=row.selected,
    )


def serialize_prep_list(prep_list: PrepList) -> PrepListOut:
    items: List[PrepListItemOut] = []
    stations: Dict[str, List[int]] = {}
    for item in sorted_items(prep_list):
        items.append(PrepListItemOut(
            id=item.id,
            menu_item_id=item.menu_item_id,
            menu_item_name=item.menu_item.name,
            station=item.menu_item.station,
            unit=item.menu_item.unit,
            quantity_needed=item.quantity_needed,
            status=item.status,
        ))
        stations.setdefault(item.menu_item.station, []).append(item.id)

    return PrepListOut(
        id=prep_list.id,
        prep_date=prep_list.prep_date,
        created_by=prep_list.created_by,
        items=items,
        stations=stations,
    )


def extraction_http_exception(exc: DocumentExtractionError) -> HTTPException:
    """Retryable failures tell the client to try again."""
    detail = str(exc) or "Document extraction failed"
    headers = {"Retry-After": "60"} if exc.retryable else None
    return HTTPException(status_code=exc.status_code, detail=detail, headers=headers)
