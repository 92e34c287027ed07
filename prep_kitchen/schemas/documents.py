"""
Document Extraction Schemas for Prep Kitchen
============================================

This module defines the Pydantic models for data returned by the AI document
extraction service, and the boundary function that narrows untrusted JSON
into those models.

Document Types:
---------------
The extraction service first detects what kind of document it was given and
returns an envelope tagged by ``type``:

- **sales**: item sales report (units sold per item); "sales_report" is
  accepted as an alias
- **par_sheet**: par level sheet (target quantity per item, optionally per day)
- **recipe**: production spec / recipe cards
- **menu_item**: food cost workbook (category, price, margins per item)
- **unknown**: anything that could not be recognized

Envelope shape:

    {"type": "par_sheet", "data": {"items": [{"name": "Half Caesar", "par_quantity": 12}]}}

Validation Policy:
------------------
The model output is noisy, so parse_document_analysis() never raises:

- an unrecognized type, or a payload that is not a JSON object, narrows to
  UnknownDocument with a reason
- each item is validated on its own; a malformed item is recorded in
  ``skipped`` and the rest of the batch continues

Only the ``name`` fields feed the matching engine (see extract_raw_names()).
"""

import logging
import math
from typing import Any, Dict, List, Literal, Optional, Tuple, Type, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import Annotated

logger = logging.getLogger(__name__)

DocumentType = Literal["sales", "par_sheet", "recipe", "menu_item", "unknown"]

DOCUMENT_TYPE_ALIASES = {
    "sales_report": "sales",
    "par": "par_sheet",
    "menu_items": "menu_item",
    "recipes": "recipe",
}

_NAME_ALIASES = AliasChoices("name", "item_name", "item")


# =============================================================================
# Item Models
# =============================================================================

class _ExtractedItem(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)


def _round_half_up(value: Any) -> Any:
    # 2.5 -> 3, "4.0" -> 4; anything else is left for the int validator
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return value
    if isinstance(value, float) and math.isfinite(value):
        return int(math.floor(value + 0.5))
    return value


class SalesItem(_ExtractedItem):
    """One line of a sales report."""
    name: str = Field(min_length=1, validation_alias=_NAME_ALIASES, description="Item name as printed on the report")
    quantity: int = Field(default=0, ge=0, description="Units sold (not dollar sales)")
    original_name: Optional[str] = Field(default=None, description="Name before the AI mapped it to a menu item")

    @field_validator("quantity", mode="before")
    @classmethod
    def round_quantity(cls, value: Any) -> Any:
        return _round_half_up(value)


class ParSheetItem(_ExtractedItem):
    """One line of a par sheet."""
    name: str = Field(min_length=1, validation_alias=_NAME_ALIASES)
    par_quantity: int = Field(default=0, ge=0)
    day_of_week: Optional[int] = Field(default=None, ge=0, le=6, description="0=Sunday .. 6=Saturday")
    unit: str = "portions"

    @field_validator("par_quantity", mode="before")
    @classmethod
    def round_par_quantity(cls, value: Any) -> Any:
        return _round_half_up(value)


class RecipeIngredient(_ExtractedItem):
    item: str = Field(min_length=1)
    quantity: Optional[Union[float, str]] = None
    measure: Optional[str] = None
    unit_cost: Optional[float] = None
    total_cost: Optional[float] = None


class ParsedRecipe(_ExtractedItem):
    """A recipe card / production spec."""
    name: str = Field(min_length=1, validation_alias=_NAME_ALIASES)
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    method: Optional[str] = None
    plating_notes: Optional[str] = None
    yield_amount: Optional[str] = None
    yield_measure: Optional[str] = None
    shelf_life: Optional[str] = None
    tools: List[str] = Field(default_factory=list)
    vehicle: Optional[str] = None
    recipe_cost: Optional[float] = None
    portion_cost: Optional[float] = None
    menu_price: Optional[float] = None
    food_cost_percent: Optional[float] = None
    inferred_station: Optional[str] = None

    @property
    def has_recipe_data(self) -> bool:
        return bool(self.ingredients or self.method)


class ParsedMenuItem(_ExtractedItem):
    """A row of a food cost workbook, optionally carrying its recipe card."""
    name: str = Field(min_length=1, validation_alias=_NAME_ALIASES)
    category: Optional[str] = None
    menu_price: Optional[float] = None
    food_cost: Optional[float] = None
    cost_percent: Optional[float] = None
    gross_margin: Optional[float] = None
    gross_margin_percent: Optional[float] = None
    ingredients: List[RecipeIngredient] = Field(default_factory=list)
    method: Optional[str] = None
    recipe_cost: Optional[float] = None
    portion_cost: Optional[float] = None
    food_cost_percent: Optional[float] = None
    inferred_station: Optional[str] = None

    @property
    def has_recipe_data(self) -> bool:
        return bool(self.ingredients or self.method)


# =============================================================================
# Document Envelopes (tagged union)
# =============================================================================

class SkippedItem(BaseModel):
    """An item dropped at the boundary because it failed validation."""
    index: int
    error: str


class SalesDocument(BaseModel):
    type: Literal["sales"] = "sales"
    items: List[SalesItem] = Field(default_factory=list)
    skipped: List[SkippedItem] = Field(default_factory=list)


class ParSheetDocument(BaseModel):
    type: Literal["par_sheet"] = "par_sheet"
    items: List[ParSheetItem] = Field(default_factory=list)
    has_multiple_days: bool = False
    detected_days: List[int] = Field(default_factory=list)
    skipped: List[SkippedItem] = Field(default_factory=list)


class RecipeDocument(BaseModel):
    type: Literal["recipe"] = "recipe"
    recipes: List[ParsedRecipe] = Field(default_factory=list)
    skipped: List[SkippedItem] = Field(default_factory=list)


class MenuItemDocument(BaseModel):
    type: Literal["menu_item"] = "menu_item"
    menu_items: List[ParsedMenuItem] = Field(default_factory=list)
    skipped: List[SkippedItem] = Field(default_factory=list)


class UnknownDocument(BaseModel):
    type: Literal["unknown"] = "unknown"
    reason: str = ""
    skipped: List[SkippedItem] = Field(default_factory=list)


DocumentAnalysis = Annotated[
    Union[SalesDocument, ParSheetDocument, RecipeDocument, MenuItemDocument, UnknownDocument],
    Field(discriminator="type"),
]


# =============================================================================
# Boundary Narrowing
# =============================================================================

# document type -> (envelope class, list field, item model)
_DOCUMENT_SHAPES: Dict[str, Tuple[Type[BaseModel], str, Type[BaseModel]]] = {
    "sales": (SalesDocument, "items", SalesItem),
    "par_sheet": (ParSheetDocument, "items", ParSheetItem),
    "recipe": (RecipeDocument, "recipes", ParsedRecipe),
    "menu_item": (MenuItemDocument, "menu_items", ParsedMenuItem),
}


def _summarize_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "item"
    return f"{location}: {first.get('msg', 'invalid value')}"


def _validate_items(raw_items: List[Any], item_model: Type[BaseModel]) -> Tuple[list, List[SkippedItem]]:
    items = []
    skipped = []
    for index, raw in enumerate(raw_items):
        try:
            items.append(item_model.model_validate(raw))
        except ValidationError as exc:
            error = _summarize_error(exc)
            logger.warning("Skipping extracted %s #%d: %s", item_model.__name__, index, error)
            skipped.append(SkippedItem(index=index, error=error))
    return items, skipped


def _detected_days(value: Any) -> List[int]:
    if not isinstance(value, list):
        return []
    return sorted({d for d in value if isinstance(d, int) and not isinstance(d, bool) and 0 <= d <= 6})


def normalize_document_type(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    doc_type = value.strip().lower()
    return DOCUMENT_TYPE_ALIASES.get(doc_type, doc_type)


def parse_document_analysis(payload: Any, document_type: Optional[str] = None):
    """
    Narrow a raw extraction payload into a DocumentAnalysis.

    Args:
        payload: Decoded JSON from the extraction service. Either the tagged
            envelope ({"type": ..., "data": {...}}) or, when document_type is
            given, the bare data object.
        document_type: Expected type when the caller already knows it.

    Returns:
        One of SalesDocument, ParSheetDocument, RecipeDocument,
        MenuItemDocument or UnknownDocument. Never raises.
    """
    if not isinstance(payload, dict):
        return UnknownDocument(reason="Extraction result is not a JSON object")

    doc_type = normalize_document_type(document_type or payload.get("type"))
    shape = _DOCUMENT_SHAPES.get(doc_type)
    if shape is None:
        return UnknownDocument(reason=f"Unrecognized document type: {payload.get('type')!r}")

    data = payload.get("data", payload)
    if not isinstance(data, dict):
        return UnknownDocument(reason=f"Malformed data section for {doc_type} document")

    document_cls, list_field, item_model = shape
    raw_items = data.get(list_field)
    if raw_items is None and list_field != "items":
        raw_items = data.get("items")
    if raw_items is None:
        raw_items = []
    if not isinstance(raw_items, list):
        return UnknownDocument(reason=f"Expected a list of {list_field} for {doc_type} document")

    items, skipped = _validate_items(raw_items, item_model)
    fields = {list_field: items, "skipped": skipped}
    if document_cls is ParSheetDocument:
        fields["has_multiple_days"] = bool(data.get("has_multiple_days", False))
        fields["detected_days"] = _detected_days(data.get("detected_days"))

    document = document_cls(**fields)
    logger.info(
        "Parsed %s document: %d items, %d skipped",
        doc_type, len(items), len(skipped),
    )
    return document


def document_items(document) -> list:
    """Return the item list of any document envelope."""
    if isinstance(document, (SalesDocument, ParSheetDocument)):
        return list(document.items)
    if isinstance(document, RecipeDocument):
        return list(document.recipes)
    if isinstance(document, MenuItemDocument):
        return list(document.menu_items)
    return []


def extract_raw_names(document) -> List[str]:
    """Item names to feed into the matcher, in document order."""
    return [item.name for item in document_items(document)]


# =============================================================================
# Structured Extraction Models
# =============================================================================
# Response models for type-specific extraction, where the caller already knows
# what kind of document it uploaded. Rows are kept as raw objects here so one
# malformed row cannot fail the whole response; to_document() validates them
# one at a time through parse_document_analysis().

_RawRows = List[Dict[str, Any]]


class SalesReportExtraction(BaseModel):
    """Units sold per item from a POS item sales report."""
    items: _RawRows = Field(
        default_factory=list,
        description='One object per item: {"name", "quantity", "original_name"}',
    )

    def to_document(self) -> SalesDocument:
        return parse_document_analysis({"items": self.items}, document_type="sales")


class ParSheetExtraction(BaseModel):
    """Par quantities per item, optionally split by day of week."""
    items: _RawRows = Field(
        default_factory=list,
        description='One object per (item, day): {"name", "par_quantity", "day_of_week", "unit"}',
    )
    has_multiple_days: bool = False
    detected_days: List[Any] = Field(default_factory=list)

    def to_document(self) -> ParSheetDocument:
        return parse_document_analysis(self.model_dump(), document_type="par_sheet")


class RecipeExtraction(BaseModel):
    """Recipe cards / production specs."""
    recipes: _RawRows = Field(
        default_factory=list,
        description='One object per recipe: {"name", "ingredients", "method", "yield_amount", "recipe_cost", ...}',
    )

    def to_document(self) -> RecipeDocument:
        return parse_document_analysis({"recipes": self.recipes}, document_type="recipe")


class MenuItemExtraction(BaseModel):
    """Rows of a food cost workbook."""
    menu_items: _RawRows = Field(
        default_factory=list,
        description='One object per row: {"category", "name", "menu_price", "food_cost", "cost_percent", ...}',
    )

    def to_document(self) -> MenuItemDocument:
        return parse_document_analysis({"menu_items": self.menu_items}, document_type="menu_item")
