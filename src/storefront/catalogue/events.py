"""Domain events for the Product and Category aggregates."""

from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    """A product was added to the catalogue by an admin."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String(required=True)
    category = String(required=True)
    price = Float(required=True)
    stock = Integer(required=True)
    created_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """An admin changed product details, pricing or stock settings."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    price = Float(required=True)
    discount_price = Float()
    stock = Integer(required=True)
    status = String(required=True)
    updated_at = DateTime(required=True)


@storefront.event(part_of="Product")
class ReviewSubmitted:
    """A customer added or revised their review of a product."""

    __version__ = 1

    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    rating = Integer(required=True)
    is_update = Boolean(default=False)
    new_rating = Float(required=True)
    num_of_reviews = Integer(required=True)


@storefront.event(part_of="Product")
class StockWithdrawn:
    """Stock was taken from a product for an order."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    withdrawn_at = DateTime(required=True)


@storefront.event(part_of="Product")
class StockRestored:
    """Stock was returned to a product after an order was cancelled."""

    __version__ = 1

    product_id = Identifier(required=True)
    quantity = Integer(required=True)
    previous_stock = Integer(required=True)
    new_stock = Integer(required=True)
    restored_at = DateTime(required=True)


@storefront.event(part_of="Product")
class LowStockDetected:
    """A product's stock fell to or below its low-stock threshold."""

    __version__ = 1

    product_id = Identifier(required=True)
    name = String(required=True)
    sku = String()
    current_stock = Integer(required=True)
    threshold = Integer(required=True)
    detected_at = DateTime(required=True)


@storefront.event(part_of="Category")
class CategoryCreated:
    """A new product category was added to the storefront navigation."""

    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    slug = String(required=True)


@storefront.event(part_of="Category")
class CategoryDetailsUpdated:
    """A category's display details or visibility were changed."""

    __version__ = 1

    category_id = Identifier(required=True)
    name = String(required=True)
    featured = Boolean(required=True)
    is_active = Boolean(required=True)
    sort_order = Integer(required=True)

