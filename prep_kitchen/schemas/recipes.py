"""
Recipe Schemas for Prep Kitchen
===============================

Pydantic models for recipe card CRUD. A recipe holds the production spec
(ingredients, method, yield, tools) and costing for one or more menu items.

Ingredients are stored as a JSON list of objects:

    {"item": "romaine", "quantity": 4, "measure": "oz", "unit_cost": 0.12, "total_cost": 0.48}
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RecipeOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    ingredients: Optional[List[Dict[str, Any]]] = None
    method: Optional[str] = None
    plating_notes: Optional[str] = None
    file_url: Optional[str] = None
    yield_amount: Optional[str] = None
    yield_measure: Optional[str] = None
    shelf_life: Optional[str] = None
    tools: Optional[List[str]] = None
    vehicle: Optional[str] = None
    recipe_cost: Optional[float] = None
    portion_cost: Optional[float] = None
    menu_price: Optional[float] = None
    food_cost_percent: Optional[float] = None


class RecipeCreate(BaseModel):
    name: str = Field(..., min_length=1)
    ingredients: Optional[List[Dict[str, Any]]] = None
    method: Optional[str] = None
    plating_notes: Optional[str] = None
    file_url: Optional[str] = None
    yield_amount: Optional[str] = None
    yield_measure: Optional[str] = None
    shelf_life: Optional[str] = None
    tools: Optional[List[str]] = None
    vehicle: Optional[str] = None
    recipe_cost: Optional[float] = None
    portion_cost: Optional[float] = None
    menu_price: Optional[float] = None
    food_cost_percent: Optional[float] = None


class RecipeUpdate(BaseModel):
    """Partial update; only fields present in the request body are applied."""
    name: Optional[str] = Field(default=None, min_length=1)
    ingredients: Optional[List[Dict[str, Any]]] = None
    method: Optional[str] = None
    plating_notes: Optional[str] = None
    file_url: Optional[str] = None
    yield_amount: Optional[str] = None
    yield_measure: Optional[str] = None
    shelf_life: Optional[str] = None
    tools: Optional[List[str]] = None
    vehicle: Optional[str] = None
    recipe_cost: Optional[float] = None
    portion_cost: Optional[float] = None
    menu_price: Optional[float] = None
    food_cost_percent: Optional[float] = None
