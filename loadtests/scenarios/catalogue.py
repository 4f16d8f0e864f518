"""Catalogue load test scenarios.

An admin building out listings, and shoppers browsing and reviewing them.
Steps in the admin journey execute in order; each depends on the previous
step succeeding.
"""

import random

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import (
    CATEGORIES,
    admin_headers,
    customer_headers,
    product_data,
    product_update_data,
    review_data,
)
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import ProductState


class ProductListingJourney(SequentialTaskSet):
    """Create Product -> Update Details -> Deactivate -> Delete.

    Models an admin maintaining a listing from launch to removal.
    """

    def on_start(self):
        self.state = ProductState()
        self.headers = admin_headers()

    @task
    def create_product(self):
        with self.client.post(
            "/api/admin/products",
            json=product_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /api/admin/products",
        ) as resp:
            if resp.status_code == 201:
                self.state.product_id = resp.json()["product_id"]
            else:
                resp.failure(f"Create product failed: {resp.status_code} — {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def update_details(self):
        with self.client.put(
            f"/api/admin/products/{self.state.product_id}",
            json=product_update_data(),
            headers=self.headers,
            catch_response=True,
            name="PUT /api/admin/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Update product failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def deactivate(self):
        with self.client.put(
            f"/api/admin/products/{self.state.product_id}",
            json={"status": "inactive"},
            headers=self.headers,
            catch_response=True,
            name="PUT /api/admin/products/{id}",
        ) as resp:
            if resp.status_code == 200:
                self.state.current_status = "inactive"
            else:
                resp.failure(f"Deactivate failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def delete(self):
        with self.client.delete(
            f"/api/admin/products/{self.state.product_id}",
            headers=self.headers,
            catch_response=True,
            name="DELETE /api/admin/products/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Delete failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperBrowsingJourney(SequentialTaskSet):
    """Showcase -> Browse a category -> View a product and related -> Read reviews -> Leave a review."""

    def on_start(self):
        self.state = ProductState()
        self.headers = customer_headers()

    @task
    def landing_page(self):
        self.client.get("/api/categories/featured", name="GET /api/categories/featured")
        self.client.get("/api/products/featured", name="GET /api/products/featured")
        self.client.get("/api/products/bestsellers", name="GET /api/products/bestsellers")
        self.client.get("/api/products/brands", name="GET /api/products/brands")
        self.client.get("/api/products/price-range", name="GET /api/products/price-range")

    @task
    def browse_category(self):
        with self.client.get(
            f"/api/products/category/{random.choice(CATEGORIES)}",
            catch_response=True,
            name="GET /api/products/category/{category}",
        ) as resp:
            products = resp.json().get("products", []) if resp.status_code == 200 else []
            if not products:
                # Fall back to the full listing when the category is empty
                products = self.client.get("/api/products", name="GET /api/products").json().get("products", [])
            if not products:
                self.interrupt()
            self.state.product_id = random.choice(products)["product_id"]

    @task
    def view_product(self):
        self.client.get(f"/api/products/{self.state.product_id}", name="GET /api/products/{id}")
        self.client.get(f"/api/products/{self.state.product_id}/related", name="GET /api/products/{id}/related")

    @task
    def read_reviews(self):
        self.client.get(f"/api/products/{self.state.product_id}/reviews", name="GET /api/products/{id}/reviews")

    @task
    def leave_review(self):
        with self.client.post(
            f"/api/products/{self.state.product_id}/reviews",
            json=review_data(),
            headers=self.headers,
            catch_response=True,
            name="POST /api/products/{id}/reviews",
        ) as resp:
            if resp.status_code == 200:
                self.state.review_count += 1
            else:
                resp.failure(f"Review failed: {resp.status_code} — {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class CatalogueUser(HttpUser):
    """Locust user running catalogue journeys."""

    wait_time = between(1, 3)
    tasks = {ShopperBrowsingJourney: 4, ProductListingJourney: 1}
