"""
Prep List Service
=================

Generates the daily prep list and tracks the status of each item.

Generation:
-----------
For every active menu item with a par level on the prep date's weekday, the
quantity needed is what was sold on the sales date: prepping back what was
sold brings the item back to par. Items with nothing to prep are left off.

There is one list per prep date. Generating again for the same date replaces
the list's items, and every item starts as "open".

Weekdays follow the par sheet convention: 0=Sunday .. 6=Saturday.
"""

import logging
from datetime import date
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from .. import config
from ..models import MenuItem, ParLevel, PrepList, PrepListItem, SalesData

logger = logging.getLogger(__name__)


def day_of_week_index(d: date) -> int:
    """Sunday-based weekday index (date.weekday() is Monday-based)."""
    return (d.weekday() + 1) % 7


def quantity_needed(quantity_sold: Optional[int]) -> int:
    return max(0, quantity_sold or 0)


def generate_prep_list(
    db: Session,
    sales_date: Optional[date] = None,
    prep_date: Optional[date] = None,
    created_by: Optional[str] = None,
) -> PrepList:
    """
    Generate (or regenerate) the prep list for prep_date.

    Args:
        db: Database session
        sales_date: Business date whose sales drive the quantities
            (defaults to prep_date)
        prep_date: Date the list is for (defaults to today)
        created_by: Admin user generating the list

    Returns:
        The PrepList, committed, with its items loaded.
    """
    if prep_date is None:
        prep_date = date.today()
    if sales_date is None:
        sales_date = prep_date

    weekday = day_of_week_index(prep_date)
    menu_item_ids = [
        item_id
        for (item_id,) in (
            db.query(MenuItem.id)
            .join(ParLevel, ParLevel.menu_item_id == MenuItem.id)
            .filter(MenuItem.is_active.is_(True), ParLevel.day_of_week == weekday)
            .order_by(MenuItem.station.asc(), MenuItem.name.asc())
            .all()
        )
    ]

    sold: Dict[int, int] = dict(
        db.query(SalesData.menu_item_id, SalesData.quantity_sold)
        .filter(SalesData.sales_date == sales_date)
        .all()
    )

    prep_list = db.query(PrepList).filter(PrepList.prep_date == prep_date).first()
    if prep_list is None:
        prep_list = PrepList(prep_date=prep_date, created_by=created_by)
        db.add(prep_list)
    else:
        prep_list.items.clear()
        if created_by:
            prep_list.created_by = created_by

    for menu_item_id in menu_item_ids:
        needed = quantity_needed(sold.get(menu_item_id))
        if needed == 0:
            continue
        prep_list.items.append(PrepListItem(menu_item_id=menu_item_id, quantity_needed=needed, status="open"))

    db.commit()
    db.refresh(prep_list)
    logger.info(
        "Generated prep list for %s from sales on %s: %d items",
        prep_date, sales_date, len(prep_list.items),
    )
    return prep_list


def get_prep_list(db: Session, prep_date: date) -> Optional[PrepList]:
    return (
        db.query(PrepList)
        .options(joinedload(PrepList.items).joinedload(PrepListItem.menu_item))
        .filter(PrepList.prep_date == prep_date)
        .first()
    )


def sorted_items(prep_list: PrepList) -> List[PrepListItem]:
    """Items ordered by station then menu item name."""
    return sorted(prep_list.items, key=lambda i: (i.menu_item.station, i.menu_item.name))


def update_item_status(db: Session, item_id: int, status: str) -> Optional[PrepListItem]:
    """
    Move a prep item to a new status.

    Returns None when the item does not exist.

    Raises:
        ValueError: status is not one of config.PREP_STATUSES
    """
    if status not in config.PREP_STATUSES:
        raise ValueError(f"Invalid prep status: {status!r}")

    item = db.query(PrepListItem).filter(PrepListItem.id == item_id).first()
    if item is None:
        return None

    previous = item.status
    item.status = status
    db.commit()
    db.refresh(item)
    logger.info("Prep item %d: %s -> %s", item_id, previous, status)
    return item
