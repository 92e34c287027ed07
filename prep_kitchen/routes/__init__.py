"""
Routes Package for Prep Kitchen
===============================

API route definitions organized by domain. Each module defines a FastAPI
APIRouter with a prefix and tags; main.py mounts them all under /api/v1.

**Admin Routes (require authentication):**
- admin_menu.py: Menu item CRUD
- admin_recipes.py: Recipe card CRUD
- admin_par_levels.py: Par levels and par sheet import
- admin_sales.py: Sales report import
- admin_imports.py: Document analysis, batch classification, menu item and
  recipe import
- prep_lists.py: Prep list generation (admin_prep_lists_router)

**Kitchen Routes (no authentication):**
- prep_lists.py: Prep list view and item status (prep_lists_router)

Error Handling:
---------------
- 400: Bad request (e.g. nothing to match against)
- 401: Unauthorized (invalid credentials)
- 402: AI credits exhausted
- 404: Not found
- 409: Conflict (duplicate menu item name)
- 429: Too many requests (local rate limit or AI provider rate limit)
- 502 / 504: AI provider failure or timeout
- 503: Service unavailable (missing configuration)
"""

from .admin_menu import admin_menu_router
from .admin_recipes import admin_recipes_router
from .admin_par_levels import admin_par_levels_router
from .admin_sales import admin_sales_router
from .admin_imports import admin_imports_router
from .prep_lists import admin_prep_lists_router, prep_lists_router

__all__ = [
    "admin_menu_router",
    "admin_recipes_router",
    "admin_par_levels_router",
    "admin_sales_router",
    "admin_imports_router",
    "admin_prep_lists_router",
    "prep_lists_router",
]
