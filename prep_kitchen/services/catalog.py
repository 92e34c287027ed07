"""
Catalog loading for the matcher.

The matcher only needs ``id`` and ``name``, so catalogs are loaded as
CatalogEntry snapshots rather than live ORM rows. Order matters: the fuzzy
tier keeps the earliest entry on ties.
"""

import logging
from typing import List

from sqlalchemy.orm import Session

from ..matching import CatalogEntry
from ..models import MenuItem, Recipe

logger = logging.getLogger(__name__)


def load_menu_catalog(db: Session, active_only: bool = True, order_by: str = "name") -> List[CatalogEntry]:
    """
    Load menu items for matching.

    Args:
        db: Database session
        active_only: Skip items that have been deactivated
        order_by: "name" or "station" (station, then name)
    """
    query = db.query(MenuItem.id, MenuItem.name)
    if active_only:
        query = query.filter(MenuItem.is_active.is_(True))
    if order_by == "station":
        query = query.order_by(MenuItem.station.asc(), MenuItem.name.asc())
    else:
        query = query.order_by(MenuItem.name.asc(), MenuItem.id.asc())

    catalog = [CatalogEntry.from_record(row) for row in query.all()]
    logger.debug("Loaded menu catalog with %d entries", len(catalog))
    return catalog


def load_recipe_catalog(db: Session) -> List[CatalogEntry]:
    rows = db.query(Recipe.id, Recipe.name).order_by(Recipe.name.asc(), Recipe.id.asc()).all()
    return [CatalogEntry.from_record(row) for row in rows]
