"""Domain events for the Order aggregate.

Events carry enough of the order (number, customer contact, line items) for
notification handlers to act without reloading the aggregate.
"""

from protean.fields import Boolean, DateTime, Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A customer placed an order and stock was withdrawn for every line item."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    customer_name = String()
    items = Text(required=True)  # JSON: list of {product_id, name, price, quantity}
    items_price = Float(required=True)
    tax_price = Float()
    shipping_price = Float()
    discount_amount = Float()
    total_price = Float(required=True)
    payment_method = String()
    payment_status = String()
    placed_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderCancelled:
    """The customer cancelled the order before it shipped."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    customer_name = String()
    items = Text(required=True)  # JSON: list of {product_id, name, quantity}
    reason = String()
    total_price = Float()
    cancelled_at = DateTime(required=True)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    """An admin moved the order to another status."""

    __version__ = 1

    order_id = Identifier(required=True)
    order_number = String(required=True)
    customer_id = Identifier(required=True)
    customer_email = String()
    customer_name = String()
    previous_status = String(required=True)
    new_status = String(required=True)
    is_regression = Boolean(default=False)
    tracking_number = String()
    estimated_delivery = DateTime()
    changed_at = DateTime(required=True)
