"""
Configuration Module for Prep Kitchen
=====================================

This module centralizes the configuration settings, environment variables, and
constants used throughout the Prep Kitchen service. Values are read once at
import time; tests override them by patching the module attributes.

Configuration Categories:
-------------------------
- **Matching**: Thresholds and portion-prefix policies used when reconciling
  AI-extracted item names against the menu item and recipe catalogs.

- **Duplicate Detection**: Fingerprint sizes and the overlap ratio used to flag
  redundant files in a batch upload.

- **Document Extraction**: Model name and input size limits for the AI
  extraction client.

- **Rate Limiting**: Throttling for endpoints that call the AI service.

- **CORS / Admin Auth**: Frontend origins and HTTP Basic admin credentials.

Environment Variables:
----------------------
- FUZZY_MATCH_THRESHOLD: Minimum similarity for a fuzzy match (default: 0.5)
- DUPLICATE_OVERLAP_THRESHOLD: Item overlap ratio above which two files are
  duplicates (default: 0.7)
- PAR_SHEET_PRESERVE_PORTION_PREFIX: Keep "Half"/"Full" when matching par
  sheets (default: "true")
- SALES_PRESERVE_PORTION_PREFIX: Keep "Half"/"Full" when matching sales
  reports (default: "true")
- RECIPE_LINK_PRESERVE_PORTION_PREFIX: Keep "Half"/"Full" when linking menu
  items to recipe cards (default: "false")
- OPENAI_MODEL: Model used for document extraction (default: "gpt-4o-mini")
- MAX_DOCUMENT_CHARS: Characters of document text sent to the AI (default: 60000)
- RATE_LIMIT_EXTRACTION: Rate limit for AI endpoints (default: "10 per minute")
- RATE_LIMIT_ENABLED: Enable/disable rate limiting (default: "true")
- CORS_ORIGINS: Comma-separated allowed origins (default: "*")
- ADMIN_USERNAME: Admin username (default: "admin")
- ADMIN_PASSWORD: Admin password (required for admin access)

Usage:
------
    from prep_kitchen import config

    if score >= config.FUZZY_MATCH_THRESHOLD:
        ...
"""

import os
from typing import List


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# =============================================================================
# Matching Configuration
# =============================================================================
# Both thresholds come from empirical tuning against real sales reports and
# par sheets. They are flagged for product-level calibration.

# Minimum word-overlap / containment similarity for the fuzzy tier
FUZZY_MATCH_THRESHOLD: float = float(os.getenv("FUZZY_MATCH_THRESHOLD", "0.5"))

# Portion-size prefix policy per import flow. "Half Caesar" and "Caesar" are
# separate menu items for par sheets and sales, while recipe cards are usually
# written once for both portions.
PAR_SHEET_PRESERVE_PORTION_PREFIX: bool = _env_bool("PAR_SHEET_PRESERVE_PORTION_PREFIX", "true")
SALES_PRESERVE_PORTION_PREFIX: bool = _env_bool("SALES_PRESERVE_PORTION_PREFIX", "true")
RECIPE_LINK_PRESERVE_PORTION_PREFIX: bool = _env_bool("RECIPE_LINK_PRESERVE_PORTION_PREFIX", "false")


# =============================================================================
# Duplicate Detection Configuration
# =============================================================================

# Files whose sample item names overlap by MORE than this ratio are duplicates
DUPLICATE_OVERLAP_THRESHOLD: float = float(os.getenv("DUPLICATE_OVERLAP_THRESHOLD", "0.7"))

# Fewer sample names than this on either side means "not enough signal"
DUPLICATE_MIN_SAMPLE_ITEMS: int = int(os.getenv("DUPLICATE_MIN_SAMPLE_ITEMS", "3"))

# Fingerprint construction sizes
FINGERPRINT_CONTENT_CHARS: int = 1000
FINGERPRINT_PREFIX_CHARS: int = 100
FINGERPRINT_SCAN_LINES: int = 50
FINGERPRINT_SAMPLE_ITEMS: int = 10

# Header keywords are only searched for near the top of a document
CLASSIFICATION_SCAN_CHARS: int = 3000


# =============================================================================
# Document Extraction Configuration
# =============================================================================

OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

# Large workbooks are truncated before being sent to the model
MAX_DOCUMENT_CHARS: int = int(os.getenv("MAX_DOCUMENT_CHARS", "60000"))


# =============================================================================
# Rate Limiting Configuration
# =============================================================================
# Every extraction request is a paid AI call. Uses slowapi with in-memory
# storage (use Redis for multi-worker prod).

RATE_LIMIT_EXTRACTION: str = os.getenv("RATE_LIMIT_EXTRACTION", "10 per minute")
RATE_LIMIT_ENABLED: bool = _env_bool("RATE_LIMIT_ENABLED", "true")


def get_rate_limit_extraction() -> str:
    """
    Return the current extraction rate limit.

    Allows dynamic override in tests without modifying the module-level constant.
    """
    return RATE_LIMIT_EXTRACTION


# =============================================================================
# CORS Configuration
# =============================================================================

_cors_origins_env = os.getenv("CORS_ORIGINS", "")
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in _cors_origins_env.split(",")
    if origin.strip()
] or ["*"]


# =============================================================================
# Admin Authentication Configuration
# =============================================================================
# ADMIN_PASSWORD must be set in production for admin access to work.

ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")


# =============================================================================
# Kitchen Constants
# =============================================================================

KITCHEN_STATIONS = ("grill", "saute", "fry", "salad", "line")
PREP_STATUSES = ("open", "in_progress", "completed")
DEFAULT_UNIT = "portions"
