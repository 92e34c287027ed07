"""
Kitchen station inference.

Suggests the station (grill, saute, fry, salad, line) an imported menu item or
recipe is prepared at. Keyword overrides on the item name come first, then the
workbook category, then "line". Admins can always change the station later.
"""

import re
from typing import Iterable, Optional

CATEGORY_STATION_MAP = {
    "APPS": "fry",
    "SOUPS": "saute",
    "SALAD": "salad",
    "PROTEIN": "grill",
    "SIDES": "line",
    "HANDHELDS": "grill",
    "PASTA": "saute",
    "BBQ": "grill",
    "ENTREES": "grill",
    "SAUCES": "line",
}

_FRY_NAME_RE = re.compile(r"fried|fry|wings|rings|fries|curds|tendies|tots|crispy|breaded|tempura")
_FRY_INGREDIENT_RE = re.compile(r"fried|fry|breaded")
_SALAD_NAME_RE = re.compile(r"salad|caesar|greens|slaw|cole|greek|asian|house")
_SAUTE_NAME_RE = re.compile(r"pasta|risotto|sauteed|saute|pan|alfredo|rav|mostaccioli|fett")
_SAUTE_INGREDIENT_RE = re.compile(r"pasta|risotto")
_GRILL_NAME_RE = re.compile(r"steak|sirloin|ribeye|filet|strip|burger|grilled|char|bavette|salmon|shrimp")
_GRILL_INGREDIENT_RE = re.compile(r"steak|sirloin|ribeye|bavette")


def infer_station(
    name: str,
    category: Optional[str] = None,
    ingredients: Optional[Iterable[str]] = None,
) -> str:
    name_text = (name or "").lower()
    ingredient_text = " ".join(i for i in (ingredients or []) if i).lower()

    if _FRY_NAME_RE.search(name_text) or _FRY_INGREDIENT_RE.search(ingredient_text):
        return "fry"
    if _SALAD_NAME_RE.search(name_text):
        return "salad"
    if _SAUTE_NAME_RE.search(name_text) or _SAUTE_INGREDIENT_RE.search(ingredient_text):
        return "saute"
    if _GRILL_NAME_RE.search(name_text) or _GRILL_INGREDIENT_RE.search(ingredient_text):
        return "grill"

    if category:
        return CATEGORY_STATION_MAP.get(category.upper().strip(), "line")
    return "line"
