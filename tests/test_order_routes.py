"""Order endpoints."""

import pytest
from fastapi.testclient import TestClient

from conftest import login, make_settings, signup
from foodorder.main import create_app

ORDER = {
    "name": "Order Test User",
    "restaurant": "Test Restaurant",
    "food": "Test Food",
    "drink": "Test Drink",
}


def make_order(client, headers, **overrides):
    return client.post("/make-order", json={**ORDER, **overrides}, headers=headers)


class TestMakeOrder:

    def test_create_order(self, client, user_headers):
        res = make_order(client, user_headers)

        assert res.status_code == 201
        order = res.json()["order"]
        assert order["restaurant"] == "Test Restaurant"
        assert order["owner"] == "Order Test User"
        assert order["user_id"] is not None

    def test_owner_defaults_to_account_name(self, client, user_headers):
        res = client.post("/make-order", json={"restaurant": "Test Restaurant"}, headers=user_headers)
        assert res.status_code == 201
        assert res.json()["order"]["owner"] == "regular user"

    def test_requires_authentication(self, client):
        res = make_order(client, {})
        assert res.status_code == 401


class TestGetOrders:

    def test_lists_only_own_orders(self, client, user_headers):
        signup(client, "Other User", "other@example.com")
        other_headers = login(client, "other@example.com")

        make_order(client, user_headers, restaurant="Restaurant 1")
        make_order(client, other_headers, restaurant="Restaurant 2")

        res = client.get("/get-orders", headers=user_headers)
        assert res.status_code == 200
        assert [o["restaurant"] for o in res.json()] == ["Restaurant 1"]

    def test_requires_authentication(self, client):
        assert client.get("/get-orders").status_code == 401


class TestEditOrder:

    def test_update_existing_order(self, client, user_headers):
        order_id = make_order(client, user_headers, restaurant="Original Restaurant").json()["order"]["id"]

        res = client.patch(
            "/edit-order",
            json={"id": order_id, "restaurant": "Updated Restaurant", "food": "Updated Food"},
            headers=user_headers,
        )
        assert res.status_code == 200
        order = res.json()["order"]
        assert order["restaurant"] == "Updated Restaurant"
        assert order["food"] == "Updated Food"
        assert order["drink"] == "Test Drink"

    def test_unknown_order_is_404(self, client, user_headers):
        res = client.patch("/edit-order", json={"id": 4242, "food": "x"}, headers=user_headers)
        assert res.status_code == 404

    def test_id_beyond_integer_range_is_404(self, client, user_headers):
        res = client.patch("/edit-order", json={"id": 2**63, "food": "x"}, headers=user_headers)
        assert res.status_code == 404

    def test_missing_id_is_400(self, client, user_headers):
        res = client.patch("/edit-order", json={"food": "x"}, headers=user_headers)
        assert res.status_code == 400

    def test_requires_authentication(self, client):
        assert client.patch("/edit-order", json={"id": 1}).status_code == 401

    def test_other_users_may_edit_by_default(self, client, user_headers):
        order_id = make_order(client, user_headers).json()["order"]["id"]
        signup(client, "Other User", "other@example.com")
        other_headers = login(client, "other@example.com")

        res = client.patch("/edit-order", json={"id": order_id, "food": "Changed"}, headers=other_headers)
        assert res.status_code == 200


class TestDeleteOrder:

    def test_delete_existing_order(self, client, user_headers):
        order_id = make_order(client, user_headers, restaurant="Delete Restaurant").json()["order"]["id"]

        res = client.request("DELETE", "/delete-order", json={"id": order_id}, headers=user_headers)
        assert res.status_code == 200
        assert res.json()["order"]["id"] == order_id
        assert client.get("/get-orders", headers=user_headers).json() == []

    def test_unknown_order_is_404(self, client, user_headers):
        res = client.request("DELETE", "/delete-order", json={"id": 4242}, headers=user_headers)
        assert res.status_code == 404

    def test_id_beyond_integer_range_is_404(self, client, user_headers):
        res = client.request("DELETE", "/delete-order", json={"id": 2**63}, headers=user_headers)
        assert res.status_code == 404

    def test_requires_authentication(self, client):
        assert client.request("DELETE", "/delete-order", json={"id": 1}).status_code == 401


class TestOrderOwnership:

    @pytest.fixture
    def strict_client(self, tmp_path):
        app = create_app(make_settings(tmp_path, enforce_order_ownership=True))
        with TestClient(app) as c:
            yield c

    def test_non_owner_gets_404(self, strict_client):
        signup(strict_client, "Owner", "owner@example.com")
        signup(strict_client, "Intruder", "intruder@example.com")
        owner = login(strict_client, "owner@example.com")
        intruder = login(strict_client, "intruder@example.com")
        order_id = make_order(strict_client, owner).json()["order"]["id"]

        edit = strict_client.patch("/edit-order", json={"id": order_id, "food": "x"}, headers=intruder)
        delete = strict_client.request("DELETE", "/delete-order", json={"id": order_id}, headers=intruder)
        assert edit.status_code == 404
        assert delete.status_code == 404

        own = strict_client.patch("/edit-order", json={"id": order_id, "food": "Mine"}, headers=owner)
        assert own.status_code == 200
        assert own.json()["order"]["food"] == "Mine"
