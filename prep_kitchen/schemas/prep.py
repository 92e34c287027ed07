"""
Prep List Schemas for Prep Kitchen
==================================

A prep list is generated once per prep date from the par levels for that
weekday and the previous sales. Line cooks work through the items and move
each one from "open" to "in_progress" to "completed".

Endpoint Coverage:
------------------
- POST /admin/prep-lists/generate: Generate (or regenerate) a prep list
- GET /prep-lists/{prep_date}: Get the prep list for a date, grouped by station
- PATCH /prep-lists/items/{id}: Update the status of one prep item
"""

from datetime import date
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

PrepStatus = Literal["open", "in_progress", "completed"]


class PrepListItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    menu_item_name: str
    station: str
    unit: str
    quantity_needed: int
    status: str


class PrepListOut(BaseModel):
    """
    Response model for a prep list.

    Attributes:
        id: Database primary key
        prep_date: Date the list is prepared for
        created_by: Admin user who generated the list
        items: All items, ordered by station then name
        stations: Item ids grouped by station, for station-by-station display
    """
    id: int
    prep_date: date
    created_by: Optional[str] = None
    items: List[PrepListItemOut] = Field(default_factory=list)
    stations: Dict[str, List[int]] = Field(default_factory=dict)


class PrepListGenerateRequest(BaseModel):
    """
    Request model for prep list generation.

    Both dates default to today. Sales from sales_date determine how much of
    each item has to be prepped on prep_date.
    """
    prep_date: Optional[date] = None
    sales_date: Optional[date] = None


class PrepListGenerateResponse(BaseModel):
    prep_list_id: int
    prep_date: date
    sales_date: date
    item_count: int


class PrepItemStatusUpdate(BaseModel):
    status: PrepStatus
