"""
Par Level Schemas for Prep Kitchen
==================================

A par level is the target on-hand quantity of a menu item for one day of the
week. Days are numbered 0=Sunday through 6=Saturday, and each
(menu item, day) pair has at most one par level.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ParLevelOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    menu_item_id: int
    menu_item_name: Optional[str] = None
    day_of_week: int
    par_quantity: int


class ParLevelUpsert(BaseModel):
    """Create or replace the par level for a (menu item, day) pair."""
    menu_item_id: int
    day_of_week: int = Field(..., ge=0, le=6)
    par_quantity: int = Field(..., ge=0)
