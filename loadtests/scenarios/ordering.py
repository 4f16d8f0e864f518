"""Ordering load test scenarios.

Stateful SequentialTaskSet journeys covering the full order lifecycle
through delivery and customer cancellation with restocking.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    admin_headers,
    cancellation_reason,
    customer_headers,
    order_data,
    product_data,
    tracking_number,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import OrderState


class _OrderJourney(SequentialTaskSet):
    """Shared setup: an admin lists products, then the customer orders them."""

    def on_start(self):
        self.state = OrderState(headers=customer_headers())
        self.admin = admin_headers()

    def _create_products(self, count=2):
        for _ in range(count):
            with self.client.post(
                "/api/admin/products",
                json=product_data(),
                headers=self.admin,
                catch_response=True,
                name="POST /api/admin/products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_ids.append(resp.json()["product_id"])
                else:
                    resp.failure(f"Create product failed: {resp.status_code} — {extract_error_detail(resp)}")
                    self.interrupt()

    def _place_order(self):
        with self.client.post(
            "/api/orders",
            json=order_data(self.state.product_ids),
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["order_id"]
                self.state.total_price = body["total_price"]
            else:
                resp.failure(f"Place order failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    def _set_status(self, status, **extra):
        with self.client.put(
            f"/api/admin/orders/{self.state.order_id}/status",
            json={"status": status, **extra},
            headers=self.admin,
            catch_response=True,
            name="PUT /api/admin/orders/{id}/status",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = status
            else:
                resp.failure(f"Set status {status} failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()


class OrderFullLifecycleJourney(_OrderJourney):
    """Products -> Pay -> Place -> Confirm -> Ship -> Deliver -> Stats."""

    @task
    def create_products(self):
        self._create_products(random.randint(1, 3))

    @task
    def place_order(self):
        self._place_order()

    @task
    def create_payment_intent(self):
        with self.client.post(
            "/api/orders/payment/create-intent",
            json={"amount": self.state.total_price, "metadata": {"order_id": self.state.order_id}},
            headers=self.state.headers,
            catch_response=True,
            name="POST /api/orders/payment/create-intent",
        ) as resp:
            if resp.status_code == 200:
                self.state.payment_intent_id = resp.json()["payment_intent_id"]
            else:
                resp.failure(f"Create intent failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def confirm_payment(self):
        if not self.state.payment_intent_id:
            return
        self.client.post(
            "/api/orders/payment/confirm",
            json={"payment_intent_id": self.state.payment_intent_id},
            headers=self.state.headers,
            name="POST /api/orders/payment/confirm",
        )

    @task
    def confirm(self):
        self._set_status("confirmed")

    @task
    def ship(self):
        self._set_status("shipped", tracking_number=tracking_number())

    @task
    def deliver(self):
        self._set_status("delivered")

    @task
    def view_history(self):
        self.client.get("/api/orders/me", headers=self.state.headers, name="GET /api/orders/me")
        self.client.get("/api/orders/me/stats", headers=self.state.headers, name="GET /api/orders/me/stats")

    @task
    def done(self):
        self.interrupt()


class OrderCancellationJourney(_OrderJourney):
    """Products -> Place -> View -> Cancel (stock restored)."""

    @task
    def create_products(self):
        self._create_products(1)

    @task
    def place_order(self):
        self._place_order()

    @task
    def view_order(self):
        self.client.get(
            f"/api/orders/{self.state.order_id}",
            headers=self.state.headers,
            name="GET /api/orders/{id}",
        )

    @task
    def cancel(self):
        with self.client.put(
            f"/api/orders/{self.state.order_id}/cancel",
            json={"reason": cancellation_reason()},
            headers=self.state.headers,
            catch_response=True,
            name="PUT /api/orders/{id}/cancel",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "cancelled"
            else:
                resp.failure(f"Cancel failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class AdminReportingJourney(SequentialTaskSet):
    """Admin checks the order list and the dashboard."""

    def on_start(self):
        self.headers = admin_headers()

    @task
    def list_orders(self):
        self.client.get("/api/admin/orders", headers=self.headers, name="GET /api/admin/orders")

    @task
    def dashboard(self):
        self.client.get("/api/admin/dashboard/stats", headers=self.headers, name="GET /api/admin/dashboard/stats")

    @task
    def done(self):
        self.interrupt()


class OrderingUser(HttpUser):
    """Locust user running ordering journeys."""

    wait_time = between(1, 3)
    tasks = {OrderFullLifecycleJourney: 3, OrderCancellationJourney: 2, AdminReportingJourney: 1}
