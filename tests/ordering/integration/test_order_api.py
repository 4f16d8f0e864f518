"""Integration tests for the order, payment and admin dashboard endpoints."""

import pytest
from protean.utils.globals import current_domain
from storefront.catalogue.product import Product

SHIPPING = {
    "full_name": "Ada Lovelace",
    "phone": "+1-555-0100",
    "address": "12 Analytical Way",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
}


def _order_body(product_id, quantity=1, **overrides):
    body = {
        "items": [{"product_id": product_id, "quantity": quantity}],
        "shipping_address": SHIPPING,
        "payment_info": {"method": "card", "status": "pending"},
        "tax_price": 10.0,
        "shipping_price": 5.0,
    }
    body.update(overrides)
    return body


@pytest.fixture()
def product_id(create_product):
    return create_product(price=100.0, stock=5)


@pytest.fixture()
def order(client, customer_headers, product_id):
    return client.post("/api/orders", json=_order_body(product_id, 2), headers=customer_headers).json()


class TestPlaceOrderEndpoint:
    def test_place_order(self, client, customer_headers, product_id):
        response = client.post("/api/orders", json=_order_body(product_id, 3), headers=customer_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["status"] == "processing"
        assert data["items_price"] == 300.0
        assert data["total_price"] == 315.0
        assert data["customer_id"] == "cust-001"
        assert data["shipping_address"]["country"] == "United States"
        assert data["order_number"].startswith("ORD-")
        assert current_domain.repository_for(Product).get(product_id).stock == 2

    def test_client_supplied_price_ignored(self, client, customer_headers, product_id):
        body = _order_body(product_id)
        body["items"][0]["price"] = 0.01

        response = client.post("/api/orders", json=body, headers=customer_headers)

        assert response.json()["items"][0]["price"] == 100.0

    def test_insufficient_stock(self, client, customer_headers, product_id):
        response = client.post("/api/orders", json=_order_body(product_id, 6), headers=customer_headers)

        assert response.status_code == 400
        assert "Insufficient stock" in response.json()["error"]["stock"][0]
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_unknown_product(self, client, customer_headers):
        response = client.post("/api/orders", json=_order_body("missing"), headers=customer_headers)
        assert response.status_code == 404
        assert response.json() == {"error": {"product": ["Product not found: missing"]}}

    def test_empty_items(self, client, customer_headers, product_id):
        response = client.post("/api/orders", json=_order_body(product_id, items=[]), headers=customer_headers)
        assert response.status_code == 400

    def test_zero_quantity(self, client, customer_headers, product_id):
        response = client.post("/api/orders", json=_order_body(product_id, 0), headers=customer_headers)
        assert response.status_code == 400

    def test_unknown_payment_method(self, client, customer_headers, product_id):
        body = _order_body(product_id, payment_info={"method": "barter"})
        response = client.post("/api/orders", json=body, headers=customer_headers)
        assert response.status_code == 400
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_requires_authentication(self, client, product_id):
        response = client.post("/api/orders", json=_order_body(product_id))
        assert response.status_code == 401
        assert response.json() == {"error": {"auth": ["Please login to access this resource"]}}


class TestCustomerOrders:
    def test_get_own_order(self, client, customer_headers, order):
        response = client.get(f"/api/orders/{order['order_id']}", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["order_id"] == order["order_id"]

    def test_other_customer_forbidden(self, client, order):
        response = client.get(f"/api/orders/{order['order_id']}", headers={"X-User-Id": "someone-else"})
        assert response.status_code == 403
        assert response.json() == {"error": {"order": ["Not authorized to access this order"]}}

    def test_admin_can_read_any_order(self, client, admin_headers, order):
        assert client.get(f"/api/orders/{order['order_id']}", headers=admin_headers).status_code == 200

    def test_my_orders(self, client, customer_headers, order):
        data = client.get("/api/orders/me", headers=customer_headers).json()
        assert data["total_orders"] == 1
        assert data["orders"][0]["order_id"] == order["order_id"]

        other = client.get("/api/orders/me", headers={"X-User-Id": "someone-else"}).json()
        assert other["total_orders"] == 0

    def test_my_stats(self, client, customer_headers, order):
        data = client.get("/api/orders/me/stats", headers=customer_headers).json()
        assert data["total_orders"] == 1
        assert data["total_spent"] == 215.0
        assert data["orders_by_status"][0]["status"] == "processing"


class TestCancelOrderEndpoint:
    def test_cancel_restores_stock(self, client, customer_headers, order, product_id):
        response = client.put(
            f"/api/orders/{order['order_id']}/cancel",
            json={"reason": "Changed my mind"},
            headers=customer_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "cancelled"
        assert response.json()["cancellation_reason"] == "Changed my mind"
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_cancel_without_body(self, client, customer_headers, order):
        response = client.put(f"/api/orders/{order['order_id']}/cancel", headers=customer_headers)
        assert response.json()["cancellation_reason"] == "Cancelled by customer"

    def test_cancel_shipped_order_rejected(self, client, customer_headers, admin_headers, order, product_id):
        client.put(f"/api/admin/orders/{order['order_id']}/status", json={"status": "shipped"}, headers=admin_headers)

        response = client.put(f"/api/orders/{order['order_id']}/cancel", headers=customer_headers)

        assert response.status_code == 400
        assert response.json() == {"error": {"status": ["Cannot cancel order with status: shipped"]}}
        assert current_domain.repository_for(Product).get(product_id).stock == 3

    def test_cancel_someone_elses_order(self, client, order):
        response = client.put(f"/api/orders/{order['order_id']}/cancel", headers={"X-User-Id": "someone-else"})
        assert response.status_code == 403
        assert response.json() == {"error": {"order": ["Not authorized to cancel this order"]}}


class TestAdminOrders:
    def test_list_orders_with_total_amount(self, client, admin_headers, order):
        data = client.get("/api/admin/orders", headers=admin_headers).json()
        assert data["total_orders"] == 1
        assert data["total_amount"] == 215.0

    def test_list_requires_admin(self, client, customer_headers):
        assert client.get("/api/admin/orders", headers=customer_headers).status_code == 403

    def test_update_status(self, client, admin_headers, order):
        response = client.put(
            f"/api/admin/orders/{order['order_id']}/status",
            json={"status": "shipped", "tracking_number": "1Z999"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["status"] == "shipped"
        assert response.json()["tracking_number"] == "1Z999"
        assert response.json()["shipped_at"] is not None

    def test_invalid_status(self, client, admin_headers, order):
        response = client.put(
            f"/api/admin/orders/{order['order_id']}/status", json={"status": "lost"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert "status" in response.json()["error"]

    def test_dashboard(self, client, admin_headers, order):
        client.put(f"/api/admin/orders/{order['order_id']}/status", json={"status": "delivered"}, headers=admin_headers)

        data = client.get("/api/admin/dashboard/stats", headers=admin_headers).json()

        assert data["total_orders"] == 1
        assert data["total_products"] == 1
        assert data["total_customers"] == 1
        assert data["total_revenue"] == 215.0
        assert data["top_products"][0]["total_sold"] == 2


class TestPaymentEndpoints:
    def test_create_and_confirm_intent(self, client, customer_headers):
        created = client.post("/api/orders/payment/create-intent", json={"amount": 215.0}, headers=customer_headers)

        assert created.status_code == 200
        intent_id = created.json()["payment_intent_id"]

        confirmed = client.post(
            "/api/orders/payment/confirm", json={"payment_intent_id": intent_id}, headers=customer_headers
        )
        assert confirmed.status_code == 200
        assert confirmed.json() == {
            "payment_status": "succeeded",
            "payment_intent_id": intent_id,
            "amount": 21500,
            "currency": "usd",
        }

    def test_invalid_amount(self, client, customer_headers):
        response = client.post("/api/orders/payment/create-intent", json={"amount": 0}, headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["error"] == {"amount": ["Invalid payment amount"]}

    def test_confirm_requires_authentication(self, client):
        response = client.post("/api/orders/payment/confirm", json={"payment_intent_id": "pi_x"})
        assert response.status_code == 401


class TestUnexpectedErrors:
    def test_unhandled_error_is_500(self, client, customer_headers, monkeypatch):
        from storefront.ordering.api import routes

        def boom(customer_id):
            raise RuntimeError("database on fire")

        monkeypatch.setattr(routes, "customer_order_stats", boom)

        response = client.get("/api/orders/me/stats", headers=customer_headers)

        assert response.status_code == 500
        assert response.json() == {"error": {"_entity": ["Internal Server Error"]}}

    def test_version_conflict_is_409(self, client, customer_headers, product_id, monkeypatch):
        from protean.exceptions import ExpectedVersionError
        from storefront.domain import storefront

        def stale_write(command, asynchronous=True):
            raise ExpectedVersionError(f"Wrong expected version: 0 (Identifier: {product_id}, Version: 1)")

        monkeypatch.setattr(storefront, "process", stale_write)

        response = client.post("/api/orders", json=_order_body(product_id), headers=customer_headers)

        assert response.status_code == 409
        assert response.json() == {
            "error": {"_entity": ["The resource was modified by another request. Please retry."]}
        }


class TestPaginationBounds:
    @pytest.mark.parametrize("params", [{"page": 0}, {"page": -1}, {"limit": 0}, {"limit": -5}])
    def test_my_orders_rejects_out_of_range(self, client, customer_headers, params):
        response = client.get("/api/orders/me", params=params, headers=customer_headers)
        assert response.status_code == 400

    def test_admin_list_rejects_oversized_limit(self, client, admin_headers):
        response = client.get("/api/admin/orders", params={"limit": 1000}, headers=admin_headers)

        assert response.status_code == 400
        assert "limit" in response.json()["error"]
