"""Catalogue API package."""

from storefront.catalogue.api.routes import (
    admin_category_router,
    admin_product_router,
    category_router,
    product_router,
)

__all__ = ["product_router", "admin_product_router", "category_router", "admin_category_router"]
