"""
Tests for kitchen station inference.
"""
import pytest

from prep_kitchen.stations import infer_station


@pytest.mark.parametrize("name,category,expected", [
    ("Fried Pickles", "APPS", "fry"),
    ("Onion Rings", None, "fry"),
    ("Half Caesar", "SALAD", "salad"),
    ("House Greens", None, "salad"),
    ("Chicken Alfredo", "PASTA", "saute"),
    ("Ribeye Steak", "ENTREES", "grill"),
    ("Smash Burger", "HANDHELDS", "grill"),
    ("Tomato Bisque", "SOUPS", "saute"),
    ("Mac and Cheese", "SIDES", "line"),
    ("Mystery Dish", None, "line"),
    ("Mystery Dish", "desserts", "line"),
])
def test_infer_station(name, category, expected):
    assert infer_station(name, category) == expected


def test_name_keywords_win_over_category():
    assert infer_station("Crispy Chicken Sandwich", "HANDHELDS") == "fry"


def test_ingredients_can_decide():
    assert infer_station("Chef Special", ingredients=["breaded cutlet", "lemon"]) == "fry"
    assert infer_station("Chef Special", ingredients=["bavette", "chimichurri"]) == "grill"


def test_category_lookup_ignores_case():
    assert infer_station("Brisket Plate", " bbq ") == "grill"
