"""Ordering API package."""

from storefront.ordering.api.routes import admin_order_router, order_router

__all__ = ["order_router", "admin_order_router"]
