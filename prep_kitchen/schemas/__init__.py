"""
Schemas Package for Prep Kitchen
================================

Pydantic models used for API request validation and response serialization,
and for narrowing AI extraction output.

Schema Organization:
--------------------
- **menu.py**: Menu item CRUD schemas
- **recipes.py**: Recipe card CRUD schemas
- **par_levels.py**: Par level schemas
- **sales.py**: Sales data schemas
- **prep.py**: Prep list generation and status schemas
- **imports.py**: Document upload, review and commit schemas
- **documents.py**: Extracted document models (tagged by document type)

Naming Conventions:
-------------------
- *Out: Response models (e.g., MenuItemOut)
- *Create / *Update: Request models for POST and PUT
- *Request / *Response: Complex request and response bodies
"""

from .menu import MenuItemOut, MenuItemCreate, MenuItemUpdate, Station
from .recipes import RecipeOut, RecipeCreate, RecipeUpdate
from .par_levels import ParLevelOut, ParLevelUpsert
from .sales import SalesDataOut
from .prep import (
    PrepListItemOut,
    PrepListOut,
    PrepListGenerateRequest,
    PrepListGenerateResponse,
    PrepItemStatusUpdate,
)
from .imports import (
    DocumentUploadRequest,
    ReviewRowOut,
    ReviewRowIn,
    AnalyzeResponse,
    SalesPreviewResponse,
    ParSheetPreviewResponse,
    ParImportRequest,
    SalesImportRequest,
    MenuItemImportRow,
    MenuItemImportRequest,
    RecipeImportRequest,
    ImportSummaryOut,
    BatchFileIn,
    BatchClassifyRequest,
    ClassifiedFileOut,
    BatchClassifyResponse,
)
from .documents import (
    DocumentAnalysis,
    SalesDocument,
    ParSheetDocument,
    RecipeDocument,
    MenuItemDocument,
    UnknownDocument,
    SalesItem,
    ParSheetItem,
    ParsedRecipe,
    ParsedMenuItem,
    RecipeIngredient,
    SkippedItem,
    parse_document_analysis,
    extract_raw_names,
)

__all__ = [
    # Menu
    "MenuItemOut",
    "MenuItemCreate",
    "MenuItemUpdate",
    "Station",
    # Recipes
    "RecipeOut",
    "RecipeCreate",
    "RecipeUpdate",
    # Par levels
    "ParLevelOut",
    "ParLevelUpsert",
    # Sales
    "SalesDataOut",
    # Prep lists
    "PrepListItemOut",
    "PrepListOut",
    "PrepListGenerateRequest",
    "PrepListGenerateResponse",
    "PrepItemStatusUpdate",
    # Imports
    "DocumentUploadRequest",
    "ReviewRowOut",
    "ReviewRowIn",
    "AnalyzeResponse",
    "SalesPreviewResponse",
    "ParSheetPreviewResponse",
    "ParImportRequest",
    "SalesImportRequest",
    "MenuItemImportRow",
    "MenuItemImportRequest",
    "RecipeImportRequest",
    "ImportSummaryOut",
    "BatchFileIn",
    "BatchClassifyRequest",
    "ClassifiedFileOut",
    "BatchClassifyResponse",
    # Documents
    "DocumentAnalysis",
    "SalesDocument",
    "ParSheetDocument",
    "RecipeDocument",
    "MenuItemDocument",
    "UnknownDocument",
    "SalesItem",
    "ParSheetItem",
    "ParsedRecipe",
    "ParsedMenuItem",
    "RecipeIngredient",
    "SkippedItem",
    "parse_document_analysis",
    "extract_raw_names",
]
