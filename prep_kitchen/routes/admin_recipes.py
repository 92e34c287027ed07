"""
Admin Recipe Routes for Prep Kitchen
====================================

CRUD for recipe cards (production specs with costing).

Endpoints:
----------
- GET /admin/recipes: List recipes
- POST /admin/recipes: Create a recipe
- GET /admin/recipes/{id}: Get a recipe
- PUT /admin/recipes/{id}: Update a recipe
- DELETE /admin/recipes/{id}: Delete a recipe; linked menu items are kept
  and unlinked
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..auth import verify_admin_credentials
from ..db import get_db
from ..models import Recipe
from ..schemas.recipes import RecipeCreate, RecipeOut, RecipeUpdate

logger = logging.getLogger(__name__)

admin_recipes_router = APIRouter(prefix="/admin/recipes", tags=["Admin - Recipes"])


def _get_recipe_or_404(db: Session, recipe_id: int) -> Recipe:
    recipe = db.query(Recipe).filter(Recipe.id == recipe_id).first()
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@admin_recipes_router.get("", response_model=List[RecipeOut])
def list_recipes(
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> List[RecipeOut]:
    recipes = db.query(Recipe).order_by(Recipe.name.asc()).all()
    return [RecipeOut.model_validate(r) for r in recipes]


@admin_recipes_router.post("", response_model=RecipeOut, status_code=201)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> RecipeOut:
    recipe = Recipe(**payload.model_dump())
    recipe.name = recipe.name.strip()
    db.add(recipe)
    db.commit()
    db.refresh(recipe)
    logger.info("Created recipe: %s (id=%d)", recipe.name, recipe.id)
    return RecipeOut.model_validate(recipe)


@admin_recipes_router.get("/{recipe_id}", response_model=RecipeOut)
def get_recipe(
    recipe_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> RecipeOut:
    return RecipeOut.model_validate(_get_recipe_or_404(db, recipe_id))


@admin_recipes_router.put("/{recipe_id}", response_model=RecipeOut)
def update_recipe(
    recipe_id: int,
    payload: RecipeUpdate,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> RecipeOut:
    recipe = _get_recipe_or_404(db, recipe_id)
    changes = payload.model_dump(exclude_unset=True)
    if changes.get("name") is None:
        changes.pop("name", None)
    for field_name, value in changes.items():
        setattr(recipe, field_name, value)
    db.commit()
    db.refresh(recipe)
    logger.info("Updated recipe: %s (id=%d)", recipe.name, recipe.id)
    return RecipeOut.model_validate(recipe)


@admin_recipes_router.delete("/{recipe_id}", status_code=204)
def delete_recipe(
    recipe_id: int,
    db: Session = Depends(get_db),
    _admin: str = Depends(verify_admin_credentials),
) -> None:
    recipe = _get_recipe_or_404(db, recipe_id)
    logger.info("Deleting recipe: %s (id=%d)", recipe.name, recipe.id)
    db.delete(recipe)
    db.commit()
    return None
