"""Integration tests for the ordering FastAPI endpoints."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from ordering.api import order_router
from ordering.order.order import Order
from protean import current_domain
from shared.access import issue_token
from shared.errors import install_error_handlers

ACCOUNTS = {
    "user-1": ("Una User", "user"),
    "user-2": ("Ulf User", "user"),
    "seller-1": ("Sally Seller", "seller"),
    "admin-1": ("Ada Admin", "admin"),
}


def _bearer(user_id):
    name, role = ACCOUNTS[user_id]
    return {"Authorization": f"Bearer {issue_token(user_id, name, role)}"}


CUSTOMER = _bearer("user-1")
OTHER_CUSTOMER = _bearer("user-2")
SELLER = _bearer("seller-1")
ADMIN = _bearer("admin-1")

SHIPPING = {
    "address": "123 Elm Street",
    "city": "Springfield",
    "phone_number": "5550123",
    "postal_code": "62701",
    "country": "US",
}


@pytest.fixture()
def client(fake_catalogue, account_directory):
    for user_id, (name, role) in ACCOUNTS.items():
        account_directory.enroll(user_id, name, role)
    fake_catalogue.stock("A", "Mug", 10.0, stock=5, seller_id="seller-1")
    fake_catalogue.stock("B", "Coaster", 5.0, stock=5, seller_id="seller-2")

    app = FastAPI()
    install_error_handlers(app)
    app.include_router(order_router)
    return TestClient(app)


def _place(client, headers=CUSTOMER, **overrides):
    payload = {
        "items": [{"product": "A", "quantity": 2, "price": 1.0}, {"product": "B", "quantity": 1}],
        "shipping_info": SHIPPING,
        "payment_info": {"id": "pay_123", "status": "succeeded"},
    }
    payload.update(overrides)
    return client.post("/orders/new", json=payload, headers=headers)


class TestPlaceOrderEndpoint:
    def test_place_order(self, client):
        response = _place(client)
        assert response.status_code == 201
        order = response.json()["order"]
        assert order["total_amount"] == 25.0
        assert order["status"] == "Processing"
        assert order["user_id"] == "user-1"
        assert order["payment_info"]["id"] == "pay_123"

    def test_anonymous_cannot_order(self, client):
        assert _place(client, headers={}).status_code == 401

    def test_blank_city_creates_no_order(self, client):
        response = _place(client, shipping_info={**SHIPPING, "city": ""})
        assert response.status_code == 400
        assert "shipping_info.city" in response.json()["error"]
        assert current_domain.repository_for(Order).newest_first() == []

    def test_empty_items(self, client):
        response = _place(client, items=[])
        assert response.status_code == 400
        assert "items" in response.json()["error"]

    def test_unknown_product(self, client):
        response = _place(client, items=[{"product": "Z", "quantity": 1}])
        assert response.status_code == 404
        assert response.json() == {"error": "Product not found: Z"}
        assert current_domain.repository_for(Order).newest_first() == []


class TestReadOrderEndpoints:
    def test_my_orders(self, client):
        _place(client)
        _place(client, headers=OTHER_CUSTOMER)

        response = client.get("/orders/me", headers=CUSTOMER)
        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_owner_reads_order(self, client):
        order_id = _place(client).json()["order"]["id"]
        response = client.get(f"/orders/{order_id}", headers=CUSTOMER)
        assert response.status_code == 200

    def test_other_user_cannot_read_order(self, client):
        order_id = _place(client).json()["order"]["id"]
        response = client.get(f"/orders/{order_id}", headers=OTHER_CUSTOMER)
        assert response.status_code == 403
        assert response.json() == {"error": "You are not authorized to view this order"}

    def test_admin_reads_any_order(self, client):
        order_id = _place(client).json()["order"]["id"]
        assert client.get(f"/orders/{order_id}", headers=ADMIN).status_code == 200

    def test_unknown_order(self, client):
        assert client.get("/orders/missing", headers=ADMIN).status_code == 404


class TestAdminEndpoints:
    def test_list_all_orders(self, client):
        _place(client)
        _place(client, headers=OTHER_CUSTOMER)

        response = client.get("/orders/admin/all", headers=ADMIN)
        assert response.status_code == 200
        assert response.json()["total_amount"] == 50.0
        assert len(response.json()["orders"]) == 2

    def test_customer_cannot_list_all_orders(self, client):
        assert client.get("/orders/admin/all", headers=CUSTOMER).status_code == 403

    def test_ship_order_releases_stock(self, client, fake_catalogue):
        order_id = _place(client).json()["order"]["id"]

        response = client.put(f"/orders/admin/{order_id}", json={"status": "Shipped"}, headers=ADMIN)
        assert response.status_code == 200
        assert response.json()["order"]["status"] == "Shipped"
        assert fake_catalogue.products["A"].stock == 3
        assert fake_catalogue.products["B"].stock == 4

    def test_delivered_order_conflict(self, client):
        order_id = _place(client).json()["order"]["id"]
        client.put(f"/orders/admin/{order_id}", json={"status": "Delivered"}, headers=ADMIN)

        response = client.put(f"/orders/admin/{order_id}", json={"status": "Shipped"}, headers=ADMIN)
        assert response.status_code == 409
        assert response.json() == {"error": "You have already delivered this order"}

    def test_unknown_status_value(self, client):
        order_id = _place(client).json()["order"]["id"]
        response = client.put(f"/orders/admin/{order_id}", json={"status": "Lost"}, headers=ADMIN)
        assert response.status_code == 400


class TestSellerEndpoints:
    def test_seller_stats(self, client):
        _place(client)
        response = client.get("/orders/seller/stats", headers=SELLER)
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "total_products": 1,
            "total_orders": 1,
            "total_revenue": 20.0,
            "total_customers": 1,
        }

    def test_seller_recent_orders_show_only_their_lines(self, client):
        _place(client)
        response = client.get("/orders/seller/recent", headers=SELLER)
        orders = response.json()["orders"]
        assert len(orders) == 1
        assert [item["product_id"] for item in orders[0]["items"]] == ["A"]

    def test_customer_cannot_see_seller_reports(self, client):
        assert client.get("/orders/seller/stats", headers=CUSTOMER).status_code == 403
