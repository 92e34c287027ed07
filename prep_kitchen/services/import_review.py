"""
Import Review and Commit Service
================================

Sits between the document extractor and the database. Extracted item names
are matched against the catalog to build review rows; reviewed rows are then
committed as par levels, sales data, menu items or recipes.

Review Rows:
------------
Each extracted item becomes a ReviewRow holding the best catalog match, its
confidence and whether the row starts selected (any confidence other than
"none"). A manual override from the review screen replaces the matched entry
directly; the resolver is not re-run.

Commit Rules:
-------------
Par levels and sales are upserted row by row:

- unselected rows, rows without a target, and rows whose target was already
  written earlier in the same batch are skipped
- each row is committed on its own; a failing row is rolled back, counted
  and reported, and the batch continues

Menu item and recipe imports skip names that already exist (trimmed,
case-insensitive). A new menu item is linked to the best matching recipe card,
or gets a recipe created from its own recipe data when it has any.

The matcher never writes anything; all persistence happens here.
"""

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Callable, Hashable, Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import config
from ..matching import (
    CatalogEntry,
    MatchResult,
    find_best_match,
    is_selected_by_default,
    resolve_names,
)
from ..models import MenuItem, ParLevel, Recipe, SalesData
from ..schemas.documents import (
    MenuItemDocument,
    ParSheetDocument,
    RecipeDocument,
    SalesDocument,
    document_items,
)
from ..stations import infer_station
from .catalog import load_menu_catalog, load_recipe_catalog

logger = logging.getLogger(__name__)


# =============================================================================
# Review Rows
# =============================================================================

@dataclass
class ReviewRow:
    """One extracted item and the catalog entry it will be imported into."""
    index: int
    name: str
    match: MatchResult
    selected: bool
    quantity: Optional[int] = None
    day_of_week: Optional[int] = None
    manual: bool = False

    @property
    def target_id(self) -> Optional[Any]:
        if self.match.entry is None:
            return None
        return self.match.entry.id


@dataclass
class ImportSummary:
    imported: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[str] = field(default_factory=list)
    recipes_created: int = 0
    recipes_linked: int = 0

    def record_failure(self, message: str) -> None:
        self.failed += 1
        self.errors.append(message)


def _item_quantity(item: Any) -> Optional[int]:
    quantity = getattr(item, "quantity", None)
    if quantity is None:
        quantity = getattr(item, "par_quantity", None)
    return quantity


def build_review_rows(
    parsed_items: Sequence[Any],
    catalog: Sequence[Any],
    preserve_portion_prefix: bool = True,
) -> List[ReviewRow]:
    """
    Match every parsed item against the catalog.

    Args:
        parsed_items: Extracted items; anything with a ``name`` and optionally
            ``quantity`` / ``par_quantity`` / ``day_of_week``.
        catalog: Ordered catalog entries (see services.catalog).
        preserve_portion_prefix: Keep "Half"/"Full" while matching.

    Returns:
        One ReviewRow per parsed item, in input order.
    """
    results = resolve_names(
        [item.name for item in parsed_items],
        catalog,
        preserve_portion_prefix=preserve_portion_prefix,
    )
    return [
        ReviewRow(
            index=index,
            name=item.name,
            match=result,
            selected=is_selected_by_default(result),
            quantity=_item_quantity(item),
            day_of_week=getattr(item, "day_of_week", None),
        )
        for index, (item, result) in enumerate(zip(parsed_items, results))
    ]


def apply_manual_override(row: ReviewRow, entry: Any) -> ReviewRow:
    """Point a review row at a catalog entry picked by hand. Selects the row."""
    match = MatchResult(entry=entry, confidence=row.match.confidence, score=row.match.score)
    return replace(row, match=match, selected=True, manual=True)


def review_document(db: Session, document) -> List[ReviewRow]:
    """
    Build review rows for any extracted document.

    Sales reports, par sheets and recipe cards are matched against the active
    menu items; food cost workbook rows are matched against recipe cards so
    the admin can see which recipe each new menu item will be linked to.
    """
    if isinstance(document, SalesDocument):
        return build_review_rows(document.items, load_menu_catalog(db), config.SALES_PRESERVE_PORTION_PREFIX)
    if isinstance(document, ParSheetDocument):
        return build_review_rows(document.items, load_menu_catalog(db), config.PAR_SHEET_PRESERVE_PORTION_PREFIX)
    if isinstance(document, RecipeDocument):
        return build_review_rows(document.recipes, load_menu_catalog(db), config.RECIPE_LINK_PRESERVE_PORTION_PREFIX)
    if isinstance(document, MenuItemDocument):
        return build_review_rows(document.menu_items, load_recipe_catalog(db), config.RECIPE_LINK_PRESERVE_PORTION_PREFIX)
    return build_review_rows(document_items(document), [])


# =============================================================================
# Par Level and Sales Commit
# =============================================================================

def _commit_rows(
    db: Session,
    rows: Iterable[Any],
    key_for: Callable[[Any], Tuple[Optional[Hashable], Optional[str]]],
    write: Callable[[Any, Hashable], None],
    label: str,
) -> ImportSummary:
    """
    Shared per-row commit loop.

    key_for returns (key, error); a None key with an error fails the row, a
    None key without one skips it. write applies the row for that key.
    """
    summary = ImportSummary()
    valid_ids = {item_id for (item_id,) in db.query(MenuItem.id).all()}
    seen = set()

    for row in rows:
        if not row.selected or row.target_id is None:
            summary.skipped += 1
            continue
        if row.target_id not in valid_ids:
            summary.record_failure(f"{row.name}: menu item {row.target_id} not found")
            continue

        key, error = key_for(row)
        if key is None:
            if error:
                summary.record_failure(f"{row.name}: {error}")
            else:
                summary.skipped += 1
            continue
        if key in seen:
            # several report lines matched the same item; first written one wins
            summary.skipped += 1
            continue

        try:
            write(row, key)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to import %s row %r: %s", label, row.name, e)
            summary.record_failure(f"{row.name}: {e.__class__.__name__}")
            continue
        seen.add(key)
        summary.imported += 1

    logger.info(
        "Imported %s: %d imported, %d skipped, %d failed",
        label, summary.imported, summary.skipped, summary.failed,
    )
    return summary


def import_par_levels(db: Session, rows: Iterable[Any], day_of_week: Optional[int] = None) -> ImportSummary:
    """
    Upsert reviewed par sheet rows on (menu item, day of week).

    A row's own day_of_week wins over the day_of_week argument; a row with
    neither fails.
    """
    def key_for(row):
        day = row.day_of_week if row.day_of_week is not None else day_of_week
        if day is None:
            return None, "no day of week"
        return (row.target_id, day), None

    def write(row, key):
        menu_item_id, day = key
        par = (
            db.query(ParLevel)
            .filter(ParLevel.menu_item_id == menu_item_id, ParLevel.day_of_week == day)
            .first()
        )
        quantity = row.quantity or 0
        if par:
            par.par_quantity = quantity
        else:
            db.add(ParLevel(menu_item_id=menu_item_id, day_of_week=day, par_quantity=quantity))

    return _commit_rows(db, rows, key_for, write, "par levels")


def import_sales(db: Session, rows: Iterable[Any], sales_date: date) -> ImportSummary:
    """Upsert reviewed sales rows on (menu item, sales date)."""
    def key_for(row):
        return (row.target_id, sales_date), None

    def write(row, key):
        menu_item_id, _ = key
        sales = (
            db.query(SalesData)
            .filter(SalesData.menu_item_id == menu_item_id, SalesData.sales_date == sales_date)
            .first()
        )
        quantity = row.quantity or 0
        if sales:
            sales.quantity_sold = quantity
        else:
            db.add(SalesData(menu_item_id=menu_item_id, sales_date=sales_date, quantity_sold=quantity))

    return _commit_rows(db, rows, key_for, write, "sales")


# =============================================================================
# Menu Item and Recipe Commit
# =============================================================================

def _recipe_from_parsed(parsed: Any) -> Recipe:
    ingredients = [i.model_dump() for i in getattr(parsed, "ingredients", [])]
    return Recipe(
        name=parsed.name.strip(),
        ingredients=ingredients or None,
        method=getattr(parsed, "method", None),
        plating_notes=getattr(parsed, "plating_notes", None),
        yield_amount=getattr(parsed, "yield_amount", None),
        yield_measure=getattr(parsed, "yield_measure", None),
        shelf_life=getattr(parsed, "shelf_life", None),
        tools=getattr(parsed, "tools", None) or None,
        vehicle=getattr(parsed, "vehicle", None),
        recipe_cost=getattr(parsed, "recipe_cost", None),
        portion_cost=getattr(parsed, "portion_cost", None),
        menu_price=getattr(parsed, "menu_price", None),
        food_cost_percent=getattr(parsed, "food_cost_percent", None),
    )


def _station_for(item: Any) -> str:
    for station in (getattr(item, "station", None), getattr(item, "inferred_station", None)):
        if station in config.KITCHEN_STATIONS:
            return station
    return infer_station(item.name, getattr(item, "category", None))


def _existing_names(db: Session, column) -> set:
    return {(name or "").strip().lower() for (name,) in db.query(column).all()}


def import_menu_items(db: Session, items: Iterable[Any]) -> ImportSummary:
    """
    Create menu items from reviewed workbook rows.

    Existing names are skipped. Each new item is linked to the best matching
    recipe card (portion prefixes stripped by default, since one card usually
    covers both portions); failing that, a recipe is created from the row's
    own ingredients and method when it has any.
    """
    summary = ImportSummary()
    existing = _existing_names(db, MenuItem.name)
    recipe_catalog: List[CatalogEntry] = load_recipe_catalog(db)

    for item in items:
        key = item.name.strip().lower()
        if not key or key in existing:
            summary.skipped += 1
            continue

        created_recipe = None
        recipe_id = None
        try:
            match = find_best_match(
                item.name,
                recipe_catalog,
                preserve_portion_prefix=config.RECIPE_LINK_PRESERVE_PORTION_PREFIX,
            )
            if match.matched:
                recipe_id = match.entry.id
            elif getattr(item, "has_recipe_data", False):
                created_recipe = _recipe_from_parsed(item)
                db.add(created_recipe)
                db.flush()
                recipe_id = created_recipe.id

            db.add(MenuItem(
                name=item.name.strip(),
                station=_station_for(item),
                unit=config.DEFAULT_UNIT,
                category=getattr(item, "category", None),
                recipe_id=recipe_id,
            ))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to import menu item %r: %s", item.name, e)
            summary.record_failure(f"{item.name}: {e.__class__.__name__}")
            continue

        existing.add(key)
        summary.imported += 1
        if created_recipe is not None:
            summary.recipes_created += 1
            recipe_catalog.append(CatalogEntry.from_record(created_recipe))
        elif recipe_id is not None:
            summary.recipes_linked += 1

    logger.info(
        "Imported menu items: %d imported, %d skipped, %d failed, %d recipes created, %d linked",
        summary.imported, summary.skipped, summary.failed,
        summary.recipes_created, summary.recipes_linked,
    )
    return summary


def import_recipes(db: Session, recipes: Iterable[Any]) -> ImportSummary:
    """Create recipe cards, skipping names that already exist."""
    summary = ImportSummary()
    existing = _existing_names(db, Recipe.name)

    for parsed in recipes:
        key = parsed.name.strip().lower()
        if not key or key in existing:
            summary.skipped += 1
            continue
        try:
            db.add(_recipe_from_parsed(parsed))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Failed to import recipe %r: %s", parsed.name, e)
            summary.record_failure(f"{parsed.name}: {e.__class__.__name__}")
            continue
        existing.add(key)
        summary.imported += 1
        summary.recipes_created += 1

    logger.info(
        "Imported recipes: %d imported, %d skipped, %d failed",
        summary.imported, summary.skipped, summary.failed,
    )
    return summary
