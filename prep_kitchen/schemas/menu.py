"""
Menu Item Schemas for Prep Kitchen
==================================

Pydantic models for menu item CRUD. Menu items are the canonical catalog that
sales reports and par sheets are reconciled against.

Endpoint Coverage:
------------------
- GET /admin/menu-items: List menu items
- POST /admin/menu-items: Create a menu item
- GET /admin/menu-items/{id}: Get a menu item
- PUT /admin/menu-items/{id}: Update a menu item
- DELETE /admin/menu-items/{id}: Delete a menu item (cascades to par levels,
  sales rows and prep list items)

Stations:
---------
Each item is prepared at one of the kitchen stations: grill, saute, fry,
salad or line. The station groups the daily prep list.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Station = Literal["grill", "saute", "fry", "salad", "line"]


class MenuItemOut(BaseModel):
    """
    Response model for menu item data.

    Attributes:
        id: Database primary key
        name: Display name as it appears on the menu (e.g., "Half Caesar")
        station: Kitchen station the item is prepared at
        unit: Counting unit for par levels and prep quantities
        category: Workbook category (e.g., "ENTREES")
        recipe_id: Linked recipe card, if any
        is_active: Inactive items are skipped by matching and prep lists
    """
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    station: str
    unit: str
    category: Optional[str] = None
    recipe_id: Optional[int] = None
    is_active: bool = True


class MenuItemCreate(BaseModel):
    """Request model for creating a menu item."""
    name: str = Field(..., min_length=1)
    station: Station = "line"
    unit: str = "portions"
    category: Optional[str] = None
    recipe_id: Optional[int] = None
    is_active: bool = True


class MenuItemUpdate(BaseModel):
    """Request model for updating a menu item. All fields are optional."""
    name: Optional[str] = Field(default=None, min_length=1)
    station: Optional[Station] = None
    unit: Optional[str] = None
    category: Optional[str] = None
    recipe_id: Optional[int] = None
    is_active: Optional[bool] = None
