"""Menu and admin endpoints: the 401 / 403 / success matrix."""

import io

import pandas as pd
import pytest
from fastapi.testclient import TestClient

from conftest import ADMIN_EMAIL, login, make_settings
from foodorder.main import create_app

MENU = {"restaurant": "Test Admin Restaurant", "food": "Admin Food", "drink": "Admin Drink"}


def create_menu(client, headers, **overrides):
    return client.post("/create-menu", json={**MENU, **overrides}, headers=headers)


class TestCreateMenu:

    def test_admin_creates_menu_item(self, client, admin_headers):
        res = create_menu(client, admin_headers, restaurant="X")

        assert res.status_code == 201
        assert res.json()["menu"]["restaurant"] == "X"

    def test_regular_user_forbidden(self, client, user_headers):
        res = create_menu(client, user_headers)
        assert res.status_code == 403
        assert res.json()["error"] == "Admin access required"

    def test_unauthenticated(self, client):
        assert create_menu(client, {}).status_code == 401

    def test_restaurant_required(self, client, admin_headers):
        res = client.post("/create-menu", json={"food": "Food"}, headers=admin_headers)
        assert res.status_code == 400


class TestGetMenu:

    def test_anyone_can_read_menu(self, client, admin_headers):
        create_menu(client, admin_headers, restaurant="Test Menu Restaurant")

        anonymous = client.get("/get-menu")
        assert anonymous.status_code == 200
        assert [m["restaurant"] for m in anonymous.json()] == ["Test Menu Restaurant"]

        as_admin = client.get("/get-menu", headers=admin_headers)
        assert as_admin.status_code == 200
        assert as_admin.json() == anonymous.json()


class TestEditMenu:

    def test_scenario_edit_as_user_then_admin(self, client, admin_headers, user_headers):
        menu_id = create_menu(client, admin_headers, restaurant="X").json()["menu"]["id"]
        update = {"id": menu_id, "restaurant": "Updated Restaurant", "food": "Updated Food"}

        denied = client.patch("/edit-menu", json=update, headers=user_headers)
        assert denied.status_code == 403

        res = client.patch("/edit-menu", json=update, headers=admin_headers)
        assert res.status_code == 200
        menu = res.json()["menu"]
        assert menu["restaurant"] == "Updated Restaurant"
        assert menu["food"] == "Updated Food"
        assert menu["drink"] == "Admin Drink"

    def test_unauthenticated(self, client):
        assert client.patch("/edit-menu", json={"id": 1, "food": "x"}).status_code == 401

    def test_unknown_item_is_404(self, client, admin_headers):
        res = client.patch("/edit-menu", json={"id": 999, "food": "x"}, headers=admin_headers)
        assert res.status_code == 404

    def test_blank_restaurant_rejected(self, client, admin_headers):
        menu_id = create_menu(client, admin_headers).json()["menu"]["id"]
        res = client.patch("/edit-menu", json={"id": menu_id, "restaurant": "   "}, headers=admin_headers)
        assert res.status_code == 400

        after = client.patch("/edit-menu", json={"id": menu_id, "food": "Still Editable"}, headers=admin_headers)
        assert after.status_code == 200
        assert after.json()["menu"]["restaurant"] == MENU["restaurant"]

    def test_id_beyond_integer_range_is_404(self, client, admin_headers):
        res = client.patch("/edit-menu", json={"id": 2**63, "food": "x"}, headers=admin_headers)
        assert res.status_code == 404


class TestDeleteMenu:

    def test_regular_user_forbidden(self, client, admin_headers, user_headers):
        menu_id = create_menu(client, admin_headers).json()["menu"]["id"]
        res = client.request("DELETE", "/delete-menu", json={"id": menu_id}, headers=user_headers)
        assert res.status_code == 403
        assert len(client.get("/get-menu").json()) == 1

    def test_admin_deletes(self, client, admin_headers):
        menu_id = create_menu(client, admin_headers).json()["menu"]["id"]
        res = client.request("DELETE", "/delete-menu", json={"id": menu_id}, headers=admin_headers)
        assert res.status_code == 200
        assert client.get("/get-menu").json() == []

    def test_unknown_item_is_404(self, client, admin_headers):
        res = client.request("DELETE", "/delete-menu", json={"id": 999}, headers=admin_headers)
        assert res.status_code == 404

    def test_id_beyond_integer_range_is_404(self, client, admin_headers):
        res = client.request("DELETE", "/delete-menu", json={"id": 2**63}, headers=admin_headers)
        assert res.status_code == 404


class TestAllOrders:

    def test_admin_sees_every_order(self, client, admin_headers, user_headers):
        client.post("/make-order", json={"restaurant": "R1"}, headers=user_headers)
        client.post("/make-order", json={"restaurant": "R2"}, headers=admin_headers)

        res = client.get("/get-all-orders", headers=admin_headers)
        assert res.status_code == 200
        assert [o["restaurant"] for o in res.json()] == ["R1", "R2"]

    def test_regular_user_forbidden(self, client, user_headers):
        assert client.get("/get-all-orders", headers=user_headers).status_code == 403

    def test_unauthenticated(self, client):
        assert client.get("/get-all-orders").status_code == 401


class TestExport:

    def test_admin_downloads_spreadsheet(self, client, admin_headers, user_headers):
        client.post("/make-order", json={"name": "Jane", "restaurant": "R1", "food": "Soup"}, headers=user_headers)
        client.post("/make-order", json={"name": "John", "restaurant": "R2"}, headers=user_headers)

        res = client.get("/export", headers=admin_headers)
        assert res.status_code == 200
        assert res.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "orders.xlsx" in res.headers["content-disposition"]

        df = pd.read_excel(io.BytesIO(res.content), engine="openpyxl")
        assert list(df["owner"]) == ["Jane", "John"]
        assert list(df["restaurant"]) == ["R1", "R2"]

    def test_regular_user_forbidden(self, client, user_headers):
        assert client.get("/export", headers=user_headers).status_code == 403


class TestBootstrapAdmin:

    def test_bootstrap_admin_can_log_in(self, client):
        headers = login(client, ADMIN_EMAIL, "adminpass123")
        res = client.get("/", headers=headers)
        assert res.json()["user"]["role"] == "Admin"

    @pytest.fixture
    def plain_client(self, tmp_path):
        app = create_app(make_settings(tmp_path, bootstrap_admin_email=None, bootstrap_admin_password=None))
        with TestClient(app) as c:
            yield c

    def test_no_admin_without_settings(self, plain_client):
        res = plain_client.post("/login", json={"email": ADMIN_EMAIL, "password": "adminpass123"})
        assert res.status_code == 400
