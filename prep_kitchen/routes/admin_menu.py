"""
Admin Menu Item Routes for Prep Kitchen
=======================================

Endpoints for managing the menu item catalog that sales reports and par
sheets are matched against.

Endpoints:
----------
- GET /admin/menu-items: List menu items (filter by station, active only)
- POST /admin/menu-items: Create a menu item
- GET /admin/menu-items/{id}: Get a menu item
- PUT /admin/menu-items/{id}: Update a menu item
- DELETE /admin/menu-items/{id}: Delete a menu item

Authentication:
---------------
All endpoints require admin authentication via HTTP Basic Auth.

Names are unique ignoring case and surrounding whitespace, so an imported
name never has two equally good exact matches.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import MenuItem, Recipe
from ..schemas.menu import MenuItemCreate, MenuItemOut, MenuItemUpdate, Station

logger = logging.getLogger(__name__)

admin_menu_router = APIRouter(prefix="/admin/menu-items", tags=["Admin - Menu Items"])


# =============================================================================
# Helper Functions
# =============================================================================

def _get_item_or_404(db: Session, item_id: int) -> MenuItem:
    item = db.query(MenuItem).filter(MenuItem.id == item_id).first()
    if not item:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return item


def _check_name_available(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(MenuItem.id).filter(func.lower(func.trim(MenuItem.name)) == name.strip().lower())
    if exclude_id is not None:
        query = query.filter(MenuItem.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=409, detail=f"Menu item '{name}' already exists")


def _check_recipe_exists(db: Session, recipe_id: Optional[int]) -> None:
    if recipe_id is not None and not db.query(Recipe.id).filter(Recipe.id == recipe_id).first():
        raise HTTPException(status_code=400, detail=f"Recipe {recipe_id} does not exist")


# =============================================================================
# Menu Item Endpoints
# =============================================================================

@admin_menu_router.get("", response_model=List[MenuItemOut])
def list_menu_items(
    station: Optional[Station] = Query(None, description="Only items prepared at this station"),
    active_only: bool = Query(False, description="Skip deactivated items"),
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[MenuItemOut]:
    """List menu items ordered by station, then name."""
    query = db.query(MenuItem)
    if station:
        query = query.filter(MenuItem.station == station)
    if active_only:
        query = query.filter(MenuItem.is_active.is_(True))
    items = query.order_by(MenuItem.station.asc(), MenuItem.name.asc()).all()
    return [MenuItemOut.model_validate(m) for m in items]


@admin_menu_router.post("", response_model=MenuItemOut, status_code=201)
def create_menu_item(
    payload: MenuItemCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    _check_name_available(db, payload.name)
    _check_recipe_exists(db, payload.recipe_id)

    item = MenuItem(
        name=payload.name.strip(),
        station=payload.station,
        unit=payload.unit,
        category=payload.category,
        recipe_id=payload.recipe_id,
        is_active=payload.is_active,
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.info("Created menu item: %s (id=%d)", item.name, item.id)
    return MenuItemOut.model_validate(item)


@admin_menu_router.get("/{item_id}", response_model=MenuItemOut)
def get_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    return MenuItemOut.model_validate(_get_item_or_404(db, item_id))


@admin_menu_router.put("/{item_id}", response_model=MenuItemOut)
def update_menu_item(
    item_id: int,
    payload: MenuItemUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> MenuItemOut:
    """Update a menu item. Only fields present in the body are changed."""
    item = _get_item_or_404(db, item_id)
    changes = payload.model_dump(exclude_unset=True)

    if changes.get("name") is not None:
        _check_name_available(db, changes["name"], exclude_id=item_id)
        changes["name"] = changes["name"].strip()
    if "recipe_id" in changes:
        _check_recipe_exists(db, changes["recipe_id"])

    for field_name, value in changes.items():
        if value is None and field_name not in ("recipe_id", "category"):
            continue
        setattr(item, field_name, value)

    db.commit()
    db.refresh(item)
    logger.info("Updated menu item: %s (id=%d)", item.name, item.id)
    return MenuItemOut.model_validate(item)


@admin_menu_router.delete("/{item_id}", status_code=204)
def delete_menu_item(
    item_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    """Delete a menu item along with its par levels, sales and prep items."""
    item = _get_item_or_404(db, item_id)
    logger.info("Deleting menu item: %s (id=%d)", item.name, item.id)
    db.delete(item)
    db.commit()
    return None
