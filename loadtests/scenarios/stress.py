"""Stress scenarios for stock consistency under contention.

StockContentionUser has many shoppers racing for a handful of products with
little stock. Every order must either succeed or be turned away for
insufficient stock; any other failure is a consistency problem worth
investigating. Check afterwards that no product ever reports negative stock.
"""

import random

import requests
from locust import HttpUser, constant_pacing, events, task

from loadtests.data_generators import admin_headers, customer_headers, order_data, product_data
from loadtests.helpers.response import extract_error_detail, is_insufficient_stock

CONTENDED_PRODUCTS = 3
CONTENDED_STOCK = 20

_contended_ids: list[str] = []


@events.test_start.add_listener
def seed_contended_products(environment, **_kwargs):
    """Create the scarce products once per run."""
    _contended_ids.clear()
    for _ in range(CONTENDED_PRODUCTS):
        resp = requests.post(
            f"{environment.host}/api/admin/products",
            json=product_data(stock=CONTENDED_STOCK),
            headers=admin_headers(),
            timeout=10,
        )
        if resp.status_code == 201:
            _contended_ids.append(resp.json()["product_id"])


class StockContentionUser(HttpUser):
    """Shoppers racing for scarce stock."""

    wait_time = constant_pacing(0.2)

    def on_start(self):
        self.headers = customer_headers()

    @task(5)
    def order_scarce_product(self):
        if not _contended_ids:
            return
        payload = order_data([random.choice(_contended_ids)], max_quantity=2)
        with self.client.post(
            "/api/orders",
            json=payload,
            headers=self.headers,
            catch_response=True,
            name="[STRESS] POST /api/orders",
        ) as resp:
            if resp.status_code == 201 or is_insufficient_stock(resp):
                resp.success()
            else:
                resp.failure(f"Unexpected order failure: {resp.status_code} — {extract_error_detail(resp)}")

    @task(1)
    def cancel_latest_order(self):
        orders = self.client.get("/api/orders/me", headers=self.headers, name="[STRESS] GET /api/orders/me")
        if orders.status_code != 200:
            return
        cancellable = [o for o in orders.json()["orders"] if o["status"] == "processing"]
        if cancellable:
            self.client.put(
                f"/api/orders/{cancellable[0]['order_id']}/cancel",
                headers=self.headers,
                name="[STRESS] PUT /api/orders/{id}/cancel",
            )

    @task(2)
    def check_stock(self):
        if not _contended_ids:
            return
        with self.client.get(
            f"/api/products/{random.choice(_contended_ids)}",
            catch_response=True,
            name="[STRESS] GET /api/products/{id}",
        ) as resp:
            if resp.status_code == 200 and resp.json()["stock"] < 0:
                resp.failure("Negative stock observed")
