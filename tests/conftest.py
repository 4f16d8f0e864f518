import json
import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize the storefront domain once; each test pushes its own domain context.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.domain import storefront

    storefront.init()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    from storefront.domain import storefront

    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context before each test, cleanup after."""
    ctx = _storefront_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain
    from storefront.notifications.channel import reset_channels
    from storefront.payments.gateway import reset_gateway

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    reset_gateway()
    reset_channels()
    ctx.pop()


# ---------------------------------------------------------------------------
# Shared builders
# ---------------------------------------------------------------------------
SHIPPING_ADDRESS = {
    "full_name": "Ada Lovelace",
    "phone": "+1-555-0100",
    "address": "12 Analytical Way",
    "city": "Springfield",
    "state": "IL",
    "zip_code": "62701",
    "country": "United States",
}


@pytest.fixture()
def shipping_address():
    return dict(SHIPPING_ADDRESS)


@pytest.fixture()
def create_product():
    """Create a product through the CreateProduct command and return its id."""
    from protean import current_domain
    from storefront.catalogue.management import CreateProduct

    def _create(**overrides):
        data = {
            "name": "Pixel 9 Pro",
            "description": "Flagship Android phone",
            "price": 100.0,
            "category": "smartphones",
            "subcategory": "android",
            "brand": "Google",
            "stock": 5,
            "images": json.dumps([{"url": "https://cdn.example.com/p9p.jpg", "alt_text": "front"}]),
        }
        data.update(overrides)
        return current_domain.process(CreateProduct(**data), asynchronous=False)

    return _create


@pytest.fixture()
def place_order():
    """Place an order through the PlaceOrder command and return its id."""
    from protean import current_domain
    from storefront.ordering.placement import PlaceOrder

    def _place(items, customer_id="cust-001", **overrides):
        data = {
            "customer_id": customer_id,
            "customer_email": "ada@example.com",
            "customer_name": "Ada Lovelace",
            "items": json.dumps(items),
            "shipping_address": json.dumps(SHIPPING_ADDRESS),
            "payment_info": json.dumps({"method": "card", "status": "pending"}),
            "tax_price": 0.0,
            "shipping_price": 0.0,
            "discount_amount": 0.0,
        }
        data.update(overrides)
        return current_domain.process(PlaceOrder(**data), asynchronous=False)

    return _place


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
CUSTOMER_HEADERS = {
    "X-User-Id": "cust-001",
    "X-User-Email": "ada@example.com",
    "X-User-Name": "Ada Lovelace",
}
ADMIN_HEADERS = {"X-User-Id": "admin-001", "X-User-Role": "admin", "X-User-Email": "ops@electrostore.example"}


@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from storefront.catalogue.api import (
        admin_category_router,
        admin_product_router,
        category_router,
        product_router,
    )
    from storefront.ordering.api import admin_order_router, order_router
    from storefront.shared.error_handlers import register_error_handlers

    app = FastAPI()
    app.include_router(product_router)
    app.include_router(admin_product_router)
    app.include_router(category_router)
    app.include_router(admin_category_router)
    app.include_router(order_router)
    app.include_router(admin_order_router)
    register_error_handlers(app)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def customer_headers():
    return dict(CUSTOMER_HEADERS)


@pytest.fixture()
def admin_headers():
    return dict(ADMIN_HEADERS)
