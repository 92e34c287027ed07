"""
Tests for prep list generation and the kitchen prep list endpoints.
"""
from datetime import date

import pytest

from prep_kitchen.models import ParLevel, SalesData

API = "/api/v1"


@pytest.fixture
def monday_pars(db_session, menu_ids):
    """Monday pars with Sunday 2026-10-18 sales for a grill, fry and salad item."""
    for name, sold in (("Ribeye Steak", 8), ("Fried Pickles", 3), ("Half Caesar", 5)):
        db_session.add(ParLevel(menu_item_id=menu_ids[name], day_of_week=1, par_quantity=10))
        db_session.add(SalesData(menu_item_id=menu_ids[name], sales_date=date(2026, 10, 18), quantity_sold=sold))
    db_session.commit()


def _generate(client, admin_auth):
    return client.post(
        f"{API}/admin/prep-lists/generate",
        json={"prep_date": "2026-10-19", "sales_date": "2026-10-18"},
        auth=admin_auth,
    )


class TestGenerate:

    def test_generate(self, client, admin_auth, monday_pars):
        response = _generate(client, admin_auth)

        assert response.status_code == 200
        data = response.json()
        assert data["prep_date"] == "2026-10-19"
        assert data["sales_date"] == "2026-10-18"
        assert data["item_count"] == 3

    def test_requires_admin(self, client):
        assert client.post(f"{API}/admin/prep-lists/generate", json={}).status_code == 401

    def test_regenerate_keeps_list_id(self, client, admin_auth, monday_pars):
        first = _generate(client, admin_auth).json()
        second = _generate(client, admin_auth).json()
        assert first["prep_list_id"] == second["prep_list_id"]


class TestReadPrepList:

    def test_grouped_by_station(self, client, admin_auth, monday_pars):
        _generate(client, admin_auth)

        # kitchen view needs no credentials
        response = client.get(f"{API}/prep-lists/2026-10-19")

        assert response.status_code == 200
        data = response.json()
        assert data["created_by"] == "testadmin"
        assert [(i["menu_item_name"], i["station"], i["quantity_needed"]) for i in data["items"]] == [
            ("Fried Pickles", "fry", 3),
            ("Ribeye Steak", "grill", 8),
            ("Half Caesar", "salad", 5),
        ]
        assert list(data["stations"]) == ["fry", "grill", "salad"]
        assert data["stations"]["grill"] == [data["items"][1]["id"]]

    def test_missing_date(self, client):
        response = client.get(f"{API}/prep-lists/2026-10-20")
        assert response.status_code == 404

    def test_invalid_date(self, client):
        assert client.get(f"{API}/prep-lists/not-a-date").status_code == 422


class TestItemStatus:

    def test_update_status(self, client, admin_auth, monday_pars):
        _generate(client, admin_auth)
        item_id = client.get(f"{API}/prep-lists/2026-10-19").json()["items"][0]["id"]

        response = client.patch(f"{API}/prep-lists/items/{item_id}", json={"status": "completed"})

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        items = client.get(f"{API}/prep-lists/2026-10-19").json()["items"]
        assert items[0]["status"] == "completed"

    def test_invalid_status(self, client, admin_auth, monday_pars):
        _generate(client, admin_auth)
        item_id = client.get(f"{API}/prep-lists/2026-10-19").json()["items"][0]["id"]
        response = client.patch(f"{API}/prep-lists/items/{item_id}", json={"status": "burnt"})
        assert response.status_code == 422

    def test_missing_item(self, client):
        response = client.patch(f"{API}/prep-lists/items/99999", json={"status": "open"})
        assert response.status_code == 404
