"""Integration tests for the order API via TestClient."""

import pytest


def _place(client, shop, price=80.0, quantity=2, color="Red"):
    return client.post(
        "/orders",
        headers=shop["buyer"],
        json={
            "products": [{"product_id": shop["product_id"], "color": color, "quantity": quantity, "price": price}],
            "address_id": shop["address_id"],
        },
    )


@pytest.fixture()
def order_id(client, shop):
    response = _place(client, shop)
    assert response.status_code == 201
    return response.json()["id"]


@pytest.mark.fast
def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestAuthentication:
    def test_missing_principal_is_401(self, client, shop):
        response = client.get("/orders/admin")
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_unknown_principal_is_404(self, client, shop):
        response = client.get("/orders/admin", headers={"X-User-Id": "ghost"})
        assert response.status_code == 404

    def test_admin_routes_reject_buyers(self, client, shop):
        response = client.get("/orders/admin", headers=shop["buyer"])
        assert response.status_code == 403


class TestPlaceOrder:
    def test_place_order(self, client, shop):
        response = _place(client, shop)

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "order-requested"
        assert body["subtotal"] == 160.0
        assert body["items"][0]["product"]["product_image"] == "/uploads/products/lamp.jpg"

    def test_stale_price_is_400(self, client, shop):
        response = _place(client, shop, price=100.0)

        assert response.status_code == 400
        assert "Price mismatch" in response.json()["error"]
        assert client.get(f"/orders/user/{shop['buyer_id']}", headers=shop["buyer"]).json() == []

    def test_missing_color_is_400(self, client, shop):
        response = _place(client, shop, color=None)
        assert response.status_code == 400
        assert "Color is required" in response.json()["error"]

    def test_insufficient_stock_is_400(self, client, shop):
        response = _place(client, shop, quantity=11)
        assert response.status_code == 400
        assert response.json()["details"]["in_stock"] == [
            "Insufficient stock for product Desk Lamp. Available: 10, Requested: 11"
        ]

    def test_unknown_address_is_404(self, client, shop):
        response = client.post(
            "/orders",
            headers=shop["buyer"],
            json={
                "products": [{"product_id": shop["product_id"], "color": "Red", "quantity": 1, "price": 80.0}],
                "address_id": "nowhere",
            },
        )
        assert response.status_code == 404


class TestReadOrders:
    def test_owner_reads_order(self, client, shop, order_id):
        response = client.get(f"/orders/{order_id}", headers=shop["buyer"])
        assert response.status_code == 200
        assert response.json()["id"] == order_id

    def test_admin_reads_any_order(self, client, shop, order_id):
        assert client.get(f"/orders/{order_id}", headers=shop["admin"]).status_code == 200

    def test_other_users_cannot_read(self, client, shop, order_id, register_user):
        other_id, _ = register_user(email="other@example.com")
        response = client.get(f"/orders/{order_id}", headers={"X-User-Id": other_id})
        assert response.status_code == 403

    def test_list_user_orders(self, client, shop, order_id):
        response = client.get(f"/orders/user/{shop['buyer_id']}", headers=shop["buyer"])
        assert [o["id"] for o in response.json()] == [order_id]

    def test_admin_listing_embeds_user(self, client, shop, order_id):
        response = client.get("/orders/admin", headers=shop["admin"])
        assert response.status_code == 200
        assert response.json()[0]["user"]["full_name"] == "Ann Buyer"

    def test_missing_order_is_404(self, client, shop):
        assert client.get("/orders/nope", headers=shop["admin"]).status_code == 404


class TestAdminTransitions:
    def test_full_lifecycle_with_return(self, client, shop, order_id):
        admin = shop["admin"]
        assert client.patch(f"/orders/admin/{order_id}/confirm", headers=admin).json()["status"] == "order-confirmed"
        assert client.patch(f"/orders/admin/{order_id}/ship", headers=admin).json()["status"] == "order-shipped"
        assert client.patch(f"/orders/admin/{order_id}/deliver", headers=admin).json()["status"] == "order-delivered"

        response = client.patch(
            f"/orders/{order_id}/return-request", headers=shop["buyer"], json={"reason": "Wrong size"}
        )
        assert response.json()["status"] == "return-requested"

        response = client.patch(
            f"/orders/admin/{order_id}/disapprove-return", headers=admin, json={"reason": "Worn"}
        )
        assert response.json()["status"] == "return-disapproved"
        assert response.json()["reason"] == "Worn"

    def test_approve_return(self, client, shop, order_id):
        admin = shop["admin"]
        for step in ("confirm", "ship", "deliver"):
            client.patch(f"/orders/admin/{order_id}/{step}", headers=admin)
        client.patch(f"/orders/{order_id}/return-request", headers=shop["buyer"], json={"reason": "Broken"})

        response = client.patch(f"/orders/admin/{order_id}/approve-return", headers=admin)
        assert response.json()["status"] == "return-approved"

    def test_admin_cancel_on_confirmed_order_is_400(self, client, shop, order_id):
        client.patch(f"/orders/admin/{order_id}/confirm", headers=shop["admin"])

        response = client.patch(f"/orders/admin/{order_id}/cancel", headers=shop["admin"], json={"reason": "x"})

        assert response.status_code == 400
        assert response.json()["error"] == "Only requested orders can be canceled"

    def test_status_overwrite(self, client, shop, order_id):
        response = client.patch(f"/orders/admin/{order_id}", headers=shop["admin"], json={"status": "payment-completed"})
        assert response.json()["status"] == "payment-completed"

    def test_invalid_status_overwrite(self, client, shop, order_id):
        response = client.patch(f"/orders/admin/{order_id}", headers=shop["admin"], json={"status": "lost"})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid status value: lost"

    def test_buyer_cannot_confirm(self, client, shop, order_id):
        assert client.patch(f"/orders/admin/{order_id}/confirm", headers=shop["buyer"]).status_code == 403


class TestDeletion:
    def test_user_cancel_within_window(self, client, shop, order_id):
        response = client.request("DELETE", f"/orders/{order_id}", headers=shop["buyer"], json={"reason": "Oops"})
        assert response.status_code == 200
        assert response.json()["status"] == "order-cancelled"

    def test_user_cannot_cancel_someone_elses_order(self, client, shop, order_id):
        response = client.delete(f"/orders/{order_id}", headers=shop["admin"])
        assert response.status_code == 403

    def test_admin_delete_of_shipped_order_is_forbidden(self, client, shop, order_id):
        for step in ("confirm", "ship"):
            client.patch(f"/orders/admin/{order_id}/{step}", headers=shop["admin"])

        response = client.delete(f"/orders/admin/{order_id}", headers=shop["admin"])

        assert response.status_code == 403
        assert client.get(f"/orders/{order_id}", headers=shop["admin"]).json()["status"] == "order-shipped"

    def test_admin_deletes_cancelled_order(self, client, shop, order_id):
        client.patch(f"/orders/admin/{order_id}/cancel", headers=shop["admin"], json={"reason": "Duplicate"})

        response = client.delete(f"/orders/admin/{order_id}", headers=shop["admin"])

        assert response.status_code == 200
        assert response.json() == {"message": "Order deleted successfully"}
        assert client.get(f"/orders/{order_id}", headers=shop["admin"]).status_code == 404
