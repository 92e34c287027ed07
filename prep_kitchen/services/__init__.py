"""
Services Package for Prep Kitchen
=================================

Business logic shared by the routes. Services receive a SQLAlchemy Session
and never create their own.

Available Services:
-------------------
- **catalog**: Loads menu items and recipes as matcher catalogs
- **import_review**: Builds review rows for extracted documents and commits
  reviewed rows (par levels, sales, menu items, recipes)
- **prep_list**: Generates daily prep lists and tracks item status

Usage:
------
    from prep_kitchen.services.catalog import load_menu_catalog
    from prep_kitchen.services.import_review import build_review_rows
    from prep_kitchen.services.prep_list import generate_prep_list
"""
