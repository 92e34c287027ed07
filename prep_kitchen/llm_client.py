"""
Document Extraction Client for Prep Kitchen
===========================================

Turns uploaded back-of-house documents (POS sales reports, par sheets,
recipe cards, food cost workbooks) into typed documents using OpenAI.

Two entry points:

- analyze_document(): the model detects the document type and returns the
  tagged JSON envelope. Used by the generic import endpoint.
- extract_document(): the caller already knows the type; instructor
  validates the response against the matching extraction model.

Both return one of the DocumentAnalysis variants from schemas.documents, with
an inferred kitchen station added to menu items and recipes.

Errors:
-------
Provider failures are translated into DocumentExtractionError subclasses,
each carrying the HTTP status the routes respond with:

- ExtractionConfigError (503): OPENAI_API_KEY missing or rejected
- ExtractionRateLimitError (429): provider rate limit, retryable
- ExtractionCreditsError (402): provider credits exhausted
- ExtractionTimeoutError (504): provider timed out, retryable
- DocumentExtractionError (502): anything else, including unparseable output
"""

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, List, Optional, Sequence

import instructor
import openai
from dotenv import load_dotenv
from instructor.core import InstructorRetryException
from openai import OpenAI

from . import config
from .schemas.documents import (
    MenuItemDocument,
    MenuItemExtraction,
    ParSheetExtraction,
    RecipeDocument,
    RecipeExtraction,
    SalesReportExtraction,
    normalize_document_type,
    parse_document_analysis,
)
from .stations import infer_station

logger = logging.getLogger(__name__)

# Load .env from the project root (one level above prep_kitchen/)
BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=BASE_DIR / ".env")


# =============================================================================
# Errors
# =============================================================================

class DocumentExtractionError(Exception):
    """Extraction failed. status_code is the HTTP status routes respond with."""
    status_code = 502
    retryable = False


class ExtractionConfigError(DocumentExtractionError):
    status_code = 503


class ExtractionRateLimitError(DocumentExtractionError):
    status_code = 429
    retryable = True


class ExtractionCreditsError(DocumentExtractionError):
    status_code = 402


class ExtractionTimeoutError(DocumentExtractionError):
    status_code = 504
    retryable = True


def translate_provider_error(exc: Exception) -> DocumentExtractionError:
    """Map an OpenAI SDK exception onto the extraction error hierarchy."""
    if isinstance(exc, openai.RateLimitError):
        if getattr(exc, "code", None) == "insufficient_quota":
            return ExtractionCreditsError("AI credits exhausted. Please add credits to continue.")
        return ExtractionRateLimitError("Rate limit exceeded. Please try again in a moment.")
    if isinstance(exc, openai.AuthenticationError):
        return ExtractionConfigError("Invalid OpenAI API key")
    if isinstance(exc, openai.APIStatusError):
        if exc.status_code == 402:
            return ExtractionCreditsError("AI credits exhausted. Please add credits to continue.")
        if exc.status_code in (504, 524):
            return ExtractionTimeoutError("AI request timed out. Try uploading a smaller file.")
        return DocumentExtractionError(f"AI service error: {exc.status_code}")
    if isinstance(exc, openai.APITimeoutError):
        return ExtractionTimeoutError("AI request timed out. Try uploading a smaller file.")
    return DocumentExtractionError("Failed to process document with AI")


# =============================================================================
# Clients
# =============================================================================

_client: Optional[OpenAI] = None


def get_client() -> OpenAI:
    """Return the shared OpenAI client, creating it on first use."""
    global _client
    if _client is None:
        api_key = os.getenv("OPENAI_API_KEY")
        # Log configuration at DEBUG level (no sensitive data in INFO or higher)
        logger.debug("OpenAI API key configured: %s", "Yes" if api_key else "No")
        if not api_key:
            raise ExtractionConfigError("OPENAI_API_KEY not set")
        _client = OpenAI(api_key=api_key)
    return _client


def get_instructor_client():
    """Get instructor-wrapped OpenAI client."""
    return instructor.from_openai(get_client())


def reset_clients() -> None:
    global _client
    _client = None


# =============================================================================
# Prompts
# =============================================================================

ANALYZE_SYSTEM_PROMPT = """You are an expert restaurant data parser. Analyze this file content.

First, identify the document type:
- "recipe" - Production spec sheets with ingredients, method, costs
- "menu_item" - Food cost spreadsheets with category, price, margins
- "par_sheet" - Par level documents with stock quantities
- "sales" - Item sales reports with quantities sold

Then extract the data according to the type.

For recipe:
{"type": "recipe", "data": {"recipes": [{"name": "...", "ingredients": [{"item": "...", "quantity": "...", "measure": "...", "unit_cost": 0, "total_cost": 0}], "method": "...", "recipe_cost": 0, "portion_cost": 0, "menu_price": 0, "food_cost_percent": 0}]}}

For menu_item:
{"type": "menu_item", "data": {"menu_items": [{"category": "ENTREES", "name": "...", "menu_price": 0, "food_cost": 0, "cost_percent": 0, "gross_margin": 0, "gross_margin_percent": 0}]}}

For par_sheet:
{"type": "par_sheet", "data": {"items": [{"name": "...", "par_quantity": 0, "day_of_week": null, "unit": "portions"}], "has_multiple_days": false, "detected_days": []}}

For sales:
{"type": "sales", "data": {"items": [{"name": "...", "quantity": 0}]}}

If the document is none of these, return {"type": "unknown", "data": {}}.
Return ONLY valid JSON."""

SALES_PROMPT = """You are a sales data parser for a restaurant kitchen.

This is a POS "Item Sales Report" with columns like: Item | Units Sold | Sales | Discounts | Net Sales.
Items are grouped by category.

EXTRACTION RULES:
1. Extract the item name and "Units Sold" (quantity sold, NOT the dollar "Sales" column)
2. Round decimal quantities to integers (4.0 -> 4, 2.5 -> 3)
3. Only include items where Units Sold > 0

ROWS TO SKIP:
- Category totals and the final "Totals:" row
- Modifiers and add-ons ("ADD SALMON", "ADD SHRIMP")
- Service instructions ("SALAD OUT FIRST")
- Generic items ("Open Food", "You Choose")
- Category headers without quantities

ITEM NAMES:
- PRESERVE "Half" and "Full" prefixes; "Half Caesar" and "Caesar" are different menu items
- Preserve size prefixes like "7oz" or "10 oz."
- Use the exact name from the available menu items when one clearly matches,
  otherwise return the name from the report
- Always put the name as printed on the report in "original_name"
{menu_items_section}"""

PAR_SHEET_PROMPT = """You are a par sheet data extractor for a kitchen management system.
Par sheets list menu items with target stock levels, possibly per day of the week.

EXTRACTION RULES:
1. Extract the item name exactly as written
2. Extract the par quantity as a number
3. If multiple days are present, return one item per (name, day)
4. Ignore items with zero or empty quantities
5. Include units when specified (portions, each, pan, qt)

day_of_week is 0=Sunday, 1=Monday, 2=Tuesday, 3=Wednesday, 4=Thursday, 5=Friday, 6=Saturday.
If the sheet has a single "Par" column, set day_of_week to null.
If multiple days are detected, set has_multiple_days and list the day numbers in detected_days.
{menu_items_section}"""

RECIPE_PROMPT = """You are a recipe card parser for a restaurant kitchen.
Extract every recipe / production spec in the document: name, ingredients
(item, quantity, measure, unit and total cost), method, plating notes, yield,
shelf life, tools, serving vehicle, and costing (recipe cost, portion cost,
menu price, food cost percent). Leave fields null when they are not present."""

MENU_ITEM_PROMPT = """You are a food cost spreadsheet parser for a restaurant kitchen.
Extract every menu item row: category, name, menu price, food cost, cost percent,
gross margin and gross margin percent. Skip header, subtotal and total rows.
Keep "Half" and "Full" prefixes in item names."""


def _menu_items_section(menu_item_names: Optional[Sequence[str]]) -> str:
    if not menu_item_names:
        return ""
    return "\nAvailable menu items in the system: " + ", ".join(menu_item_names)


# document type -> (prompt, response model, uses menu item names)
_EXTRACTORS = {
    "sales": (SALES_PROMPT, SalesReportExtraction, True),
    "par_sheet": (PAR_SHEET_PROMPT, ParSheetExtraction, True),
    "recipe": (RECIPE_PROMPT, RecipeExtraction, False),
    "menu_item": (MENU_ITEM_PROMPT, MenuItemExtraction, False),
}


# =============================================================================
# Helpers
# =============================================================================

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```")


def truncate_document(text: str, max_chars: Optional[int] = None) -> str:
    """Cap the document text sent to the model."""
    if max_chars is None:
        max_chars = config.MAX_DOCUMENT_CHARS
    if len(text) <= max_chars:
        return text
    logger.info("Truncating document from %d to %d characters", len(text), max_chars)
    return text[:max_chars]


def parse_json_payload(content: str) -> Any:
    """Decode model output, tolerating a markdown code fence around the JSON."""
    match = _CODE_FENCE_RE.search(content)
    json_str = match.group(1).strip() if match else content.strip()
    try:
        return json.loads(json_str)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response as JSON: %s", str(e))
        logger.debug("Raw AI response: %s", content[:500])
        raise DocumentExtractionError("Failed to parse AI response as JSON") from e


def with_inferred_stations(document):
    """Fill inferred_station on menu items and recipes."""
    if isinstance(document, MenuItemDocument):
        for item in document.menu_items:
            item.inferred_station = infer_station(item.name, item.category)
    elif isinstance(document, RecipeDocument):
        for recipe in document.recipes:
            recipe.inferred_station = infer_station(
                recipe.name, ingredients=[i.item for i in recipe.ingredients]
            )
    return document


# =============================================================================
# Extraction
# =============================================================================

def analyze_document(file_content: str, file_name: str, model: Optional[str] = None):
    """
    Detect the document type and extract its items.

    Args:
        file_content: Document text
        file_name: Original file name, included in the prompt
        model: OpenAI model to use (defaults to config.OPENAI_MODEL)

    Returns:
        A DocumentAnalysis variant. Malformed items are reported in
        ``skipped`` rather than failing the whole document.

    Raises:
        DocumentExtractionError: The provider call failed or returned
            something that is not JSON.
    """
    if model is None:
        model = config.OPENAI_MODEL

    client = get_client()
    messages = [
        {"role": "system", "content": ANALYZE_SYSTEM_PROMPT},
        {"role": "user", "content": f'Analyze this file "{file_name}":\n\n{truncate_document(file_content)}'},
    ]

    try:
        completion = client.chat.completions.create(
            model=model,
            messages=messages,
            response_format={"type": "json_object"},
            temperature=0.0,
        )
    except openai.OpenAIError as e:
        logger.error("Document analysis failed for %s: %s", file_name, e)
        raise translate_provider_error(e) from e

    content = completion.choices[0].message.content
    if not content:
        raise DocumentExtractionError("AI did not return content")

    document = parse_document_analysis(parse_json_payload(content))
    logger.info("Analyzed %s as %s", file_name, document.type)
    return with_inferred_stations(document)


def extract_document(
    file_content: str,
    file_name: str,
    document_type: str,
    menu_item_names: Optional[List[str]] = None,
    model: Optional[str] = None,
):
    """
    Extract a document whose type is already known.

    menu_item_names lets the model return canonical names for sales reports
    and par sheets; the matcher still reconciles every name afterwards.
    """
    if model is None:
        model = config.OPENAI_MODEL

    doc_type = normalize_document_type(document_type)
    if doc_type not in _EXTRACTORS:
        raise ValueError(f"Unsupported document type: {document_type!r}")
    prompt, response_model, uses_menu_items = _EXTRACTORS[doc_type]
    if uses_menu_items:
        prompt = prompt.format(menu_items_section=_menu_items_section(menu_item_names))

    client = get_instructor_client()
    try:
        result = client.chat.completions.create(
            model=model,
            response_model=response_model,
            max_retries=1,
            messages=[
                {"role": "system", "content": prompt},
                {"role": "user", "content": f'Extract data from "{file_name}":\n\n{truncate_document(file_content)}'},
            ],
        )
    except InstructorRetryException as e:
        logger.error("Extraction of %s did not validate as %s: %s", file_name, doc_type, e)
        raise DocumentExtractionError("AI response did not match the expected format") from e
    except openai.OpenAIError as e:
        logger.error("Extraction failed for %s: %s", file_name, e)
        raise translate_provider_error(e) from e

    document = result.to_document()
    logger.info("Extracted %s document from %s", doc_type, file_name)
    return with_inferred_stations(document)
