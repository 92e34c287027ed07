"""
Tests for building review rows and committing reviewed imports.
"""
from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from prep_kitchen.matching import CatalogEntry, MatchConfidence
from prep_kitchen.models import MenuItem, ParLevel, Recipe, SalesData
from prep_kitchen.schemas.documents import (
    MenuItemDocument,
    ParsedMenuItem,
    ParsedRecipe,
    ParSheetDocument,
    ParSheetItem,
    SalesDocument,
    SalesItem,
    UnknownDocument,
)
from prep_kitchen.schemas.imports import MenuItemImportRow, ReviewRowIn
from prep_kitchen.services.catalog import load_menu_catalog, load_recipe_catalog
from prep_kitchen.services.import_review import (
    apply_manual_override,
    build_review_rows,
    import_menu_items,
    import_par_levels,
    import_recipes,
    import_sales,
    review_document,
)


class TestCatalog:

    def test_menu_catalog_is_active_and_ordered_by_name(self, db_session):
        names = [entry.name for entry in load_menu_catalog(db_session)]
        assert names == ["Caesar Salad", "Fried Pickles", "Half Caesar", "Ribeye Steak"]

    def test_inactive_items_included_on_request(self, db_session):
        names = [entry.name for entry in load_menu_catalog(db_session, active_only=False)]
        assert "Old Special" in names

    def test_station_order(self, db_session):
        names = [entry.name for entry in load_menu_catalog(db_session, order_by="station")]
        assert names == ["Fried Pickles", "Ribeye Steak", "Caesar Salad", "Half Caesar"]

    def test_recipe_catalog(self, db_session):
        assert [entry.name for entry in load_recipe_catalog(db_session)] == ["Caesar Salad"]

    def test_entries_are_snapshots(self, db_session, menu_ids):
        catalog = load_menu_catalog(db_session)
        assert all(type(entry) is CatalogEntry for entry in catalog)
        assert CatalogEntry(id=menu_ids["Ribeye Steak"], name="Ribeye Steak") in catalog


class TestBuildReviewRows:

    def test_rows_follow_input_order(self, db_session, menu_ids):
        items = [
            SalesItem(name="HALF CAESAR", quantity=4),
            SalesItem(name="  6oz Ribeye Steak", quantity=7),
            SalesItem(name="Pickles", quantity=2),
            SalesItem(name="Lobster Roll", quantity=1),
        ]
        rows = build_review_rows(items, load_menu_catalog(db_session))

        assert [r.index for r in rows] == [0, 1, 2, 3]
        assert [r.match.confidence for r in rows] == [
            MatchConfidence.EXACT,
            MatchConfidence.NORMALIZED,
            MatchConfidence.FUZZY,
            MatchConfidence.NONE,
        ]
        assert [r.target_id for r in rows] == [
            menu_ids["Half Caesar"],
            menu_ids["Ribeye Steak"],
            menu_ids["Fried Pickles"],
            None,
        ]
        assert [r.selected for r in rows] == [True, True, True, False]
        assert [r.quantity for r in rows] == [4, 7, 2, 1]

    def test_par_items_carry_day(self, db_session):
        rows = build_review_rows(
            [ParSheetItem(name="Ribeye Steak", par_quantity=6, day_of_week=5)],
            load_menu_catalog(db_session),
        )
        assert rows[0].quantity == 6
        assert rows[0].day_of_week == 5

    def test_inactive_items_are_not_matched(self, db_session):
        rows = build_review_rows([SalesItem(name="Old Special", quantity=3)], load_menu_catalog(db_session))
        assert rows[0].match.confidence is MatchConfidence.NONE

    def test_empty_catalog(self):
        rows = build_review_rows([SalesItem(name="Half Caesar", quantity=1)], [])
        assert rows[0].target_id is None
        assert not rows[0].selected

    def test_manual_override(self, db_session, menu_ids):
        row = build_review_rows([SalesItem(name="Lobster Roll", quantity=1)], load_menu_catalog(db_session))[0]
        entry = CatalogEntry(id=menu_ids["Ribeye Steak"], name="Ribeye Steak")

        overridden = apply_manual_override(row, entry)

        assert overridden.selected
        assert overridden.manual
        assert overridden.target_id == menu_ids["Ribeye Steak"]
        # the original row is left alone
        assert row.target_id is None


class TestReviewDocument:

    def test_sales_document_keeps_portion_prefix(self, db_session, menu_ids):
        document = SalesDocument(items=[SalesItem(name="Half Caesar", quantity=3)])
        rows = review_document(db_session, document)
        assert rows[0].target_id == menu_ids["Half Caesar"]

    def test_par_sheet_document(self, db_session, menu_ids):
        document = ParSheetDocument(items=[ParSheetItem(name="caesar salad", par_quantity=10)])
        rows = review_document(db_session, document)
        assert rows[0].target_id == menu_ids["Caesar Salad"]
        assert rows[0].match.confidence is MatchConfidence.EXACT

    def test_menu_items_are_matched_against_recipes(self, db_session):
        recipe_id = db_session.query(Recipe.id).filter(Recipe.name == "Caesar Salad").scalar()
        document = MenuItemDocument(menu_items=[ParsedMenuItem(name="Full Caesar", category="SALAD")])
        rows = review_document(db_session, document)
        assert rows[0].target_id == recipe_id
        assert rows[0].match.confidence is MatchConfidence.FUZZY

    def test_unknown_document_has_no_rows(self, db_session):
        assert review_document(db_session, UnknownDocument(reason="invoice")) == []


class TestImportParLevels:

    def test_upserts_selected_rows(self, db_session, menu_ids):
        db_session.add(ParLevel(menu_item_id=menu_ids["Ribeye Steak"], day_of_week=1, par_quantity=2))
        db_session.commit()

        rows = [
            ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=8),
            ReviewRowIn(name="Half Caesar", matched_id=menu_ids["Half Caesar"], quantity=12),
            ReviewRowIn(name="Fried Pickles", matched_id=menu_ids["Fried Pickles"], quantity=5, selected=False),
        ]
        summary = import_par_levels(db_session, rows, day_of_week=1)

        assert summary.imported == 2
        assert summary.skipped == 1
        assert summary.failed == 0
        pars = {p.menu_item_id: p.par_quantity for p in db_session.query(ParLevel).filter(ParLevel.day_of_week == 1)}
        assert pars == {menu_ids["Ribeye Steak"]: 8, menu_ids["Half Caesar"]: 12}

    def test_row_day_wins_over_default(self, db_session, menu_ids):
        rows = [ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=9, day_of_week=6)]
        import_par_levels(db_session, rows, day_of_week=1)
        par = db_session.query(ParLevel).one()
        assert par.day_of_week == 6

    def test_multi_day_rows(self, db_session, menu_ids):
        rows = [
            ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=6, day_of_week=5),
            ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=9, day_of_week=6),
        ]
        summary = import_par_levels(db_session, rows)
        assert summary.imported == 2
        assert db_session.query(ParLevel).count() == 2

    def test_missing_day_fails_row(self, db_session, menu_ids):
        rows = [ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=6)]
        summary = import_par_levels(db_session, rows)
        assert summary.failed == 1
        assert "no day of week" in summary.errors[0]

    def test_manual_match_replaces_automatic_match(self, db_session, menu_ids):
        rows = [ReviewRowIn(
            name="Caesar",
            matched_id=menu_ids["Caesar Salad"],
            manual_match_id=menu_ids["Half Caesar"],
            quantity=4,
        )]
        import_par_levels(db_session, rows, day_of_week=0)
        assert db_session.query(ParLevel).one().menu_item_id == menu_ids["Half Caesar"]

    def test_unknown_menu_item_fails_row(self, db_session, menu_ids):
        rows = [
            ReviewRowIn(name="Ghost", matched_id=99999, quantity=4),
            ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=4),
        ]
        summary = import_par_levels(db_session, rows, day_of_week=0)
        assert summary.failed == 1
        assert summary.imported == 1

    def test_failed_write_does_not_stop_batch(self, db_session, menu_ids, monkeypatch):
        real_commit = db_session.commit
        calls = {"count": 0}

        def flaky_commit():
            calls["count"] += 1
            if calls["count"] == 1:
                raise OperationalError("INSERT", {}, Exception("database is locked"))
            real_commit()

        monkeypatch.setattr(db_session, "commit", flaky_commit)
        rows = [
            ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=4),
            ReviewRowIn(name="Fried Pickles", matched_id=menu_ids["Fried Pickles"], quantity=3),
        ]
        summary = import_par_levels(db_session, rows, day_of_week=2)

        assert summary.failed == 1
        assert summary.imported == 1
        assert "OperationalError" in summary.errors[0]
        assert db_session.query(ParLevel).one().menu_item_id == menu_ids["Fried Pickles"]

    def test_failed_write_lets_next_row_for_same_item_through(self, db_session, menu_ids, monkeypatch):
        real_commit = db_session.commit
        calls = {"count": 0}

        def flaky_commit():
            calls["count"] += 1
            if calls["count"] == 1:
                raise OperationalError("INSERT", {}, Exception("database is locked"))
            real_commit()

        monkeypatch.setattr(db_session, "commit", flaky_commit)
        rows = [
            ReviewRowIn(name="RIBEYE", matched_id=menu_ids["Ribeye Steak"], quantity=4),
            ReviewRowIn(name="Ribeye Steak", matched_id=menu_ids["Ribeye Steak"], quantity=5),
            ReviewRowIn(name="6oz Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=6),
        ]
        summary = import_par_levels(db_session, rows, day_of_week=2)

        assert summary.failed == 1
        assert summary.imported == 1
        assert summary.skipped == 1
        assert db_session.query(ParLevel).one().par_quantity == 5


class TestImportSales:

    def test_first_row_wins_for_duplicate_targets(self, db_session, menu_ids):
        sales_date = date(2026, 10, 18)
        rows = [
            ReviewRowIn(name="HALF CAESAR", matched_id=menu_ids["Half Caesar"], quantity=4),
            ReviewRowIn(name="Half Caesar Salad", matched_id=menu_ids["Half Caesar"], quantity=9),
            ReviewRowIn(name="Lobster Roll", quantity=2),
        ]
        summary = import_sales(db_session, rows, sales_date)

        assert summary.imported == 1
        assert summary.skipped == 2
        assert db_session.query(SalesData).one().quantity_sold == 4

    def test_reimport_overwrites(self, db_session, menu_ids):
        sales_date = date(2026, 10, 18)
        import_sales(db_session, [ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=4)], sales_date)
        import_sales(db_session, [ReviewRowIn(name="Ribeye", matched_id=menu_ids["Ribeye Steak"], quantity=11)], sales_date)

        sales = db_session.query(SalesData).all()
        assert len(sales) == 1
        assert sales[0].quantity_sold == 11


class TestImportMenuItems:

    def test_links_creates_and_skips(self, db_session):
        items = [
            ParsedMenuItem(name="Full Caesar", category="SALAD"),
            ParsedMenuItem(name="fried pickles "),
            ParsedMenuItem(
                name="Short Rib",
                category="ENTREES",
                ingredients=[{"item": "short rib", "quantity": "8", "measure": "oz"}],
                method="Braise overnight.",
            ),
            ParsedMenuItem(name="Lobster Roll", category="ENTREES"),
        ]
        summary = import_menu_items(db_session, items)

        assert summary.imported == 3
        assert summary.skipped == 1
        assert summary.recipes_linked == 1
        assert summary.recipes_created == 1

        caesar_recipe = db_session.query(Recipe).filter(Recipe.name == "Caesar Salad").one()
        full_caesar = db_session.query(MenuItem).filter(MenuItem.name == "Full Caesar").one()
        assert full_caesar.recipe_id == caesar_recipe.id
        assert full_caesar.station == "salad"

        short_rib = db_session.query(MenuItem).filter(MenuItem.name == "Short Rib").one()
        assert short_rib.recipe.name == "Short Rib"
        assert short_rib.recipe.method == "Braise overnight."

        lobster = db_session.query(MenuItem).filter(MenuItem.name == "Lobster Roll").one()
        assert lobster.recipe_id is None

    def test_station_precedence(self, db_session):
        items = [
            MenuItemImportRow(name="Crab Cakes", category="APPS", station="saute"),
            ParsedMenuItem(name="Onion Rings", inferred_station="not-a-station"),
            ParsedMenuItem(name="Chicken Alfredo", inferred_station="grill"),
        ]
        import_menu_items(db_session, items)

        stations = {
            m.name: m.station
            for m in db_session.query(MenuItem).filter(MenuItem.name.in_(["Crab Cakes", "Onion Rings", "Chicken Alfredo"]))
        }
        assert stations == {"Crab Cakes": "saute", "Onion Rings": "fry", "Chicken Alfredo": "grill"}

    def test_duplicate_names_in_one_batch(self, db_session):
        summary = import_menu_items(db_session, [ParsedMenuItem(name="Wedge"), ParsedMenuItem(name="WEDGE")])
        assert summary.imported == 1
        assert summary.skipped == 1


class TestImportRecipes:

    def test_skips_existing_names(self, db_session):
        recipes = [
            ParsedRecipe(name="caesar salad "),
            ParsedRecipe(name="Short Rib", method="Braise overnight.", tools=["dutch oven"]),
        ]
        summary = import_recipes(db_session, recipes)

        assert summary.imported == 1
        assert summary.skipped == 1
        assert summary.recipes_created == 1
        short_rib = db_session.query(Recipe).filter(Recipe.name == "Short Rib").one()
        assert short_rib.tools == ["dutch oven"]

    @pytest.mark.parametrize("name", ["Caesar Salad", "CAESAR SALAD"])
    def test_existing_recipe_variants(self, db_session, name):
        summary = import_recipes(db_session, [ParsedRecipe(name=name)])
        assert summary.skipped == 1
        assert db_session.query(Recipe).count() == 1
