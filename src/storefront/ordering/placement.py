"""Order placement: check stock, capture prices, withdraw stock, record the order.

Every line item is validated before any product is touched. The stock
withdrawals and the order insert then run in the handler's unit of work, so
a failure anywhere leaves all stock levels as they were.
"""

import json
from collections import Counter

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.shared.exceptions import InsufficientStockError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=100)
    items = Text(required=True)  # JSON: list of {product_id, quantity}
    shipping_address = Text(required=True)  # JSON: address dict
    payment_info = Text(required=True)  # JSON: {method, status, transaction_id, payment_intent}
    tax_price = Float(default=0.0)
    shipping_price = Float(default=0.0)
    discount_amount = Float(default=0.0)
    order_notes = Text()


def _requested_quantities(items_data):
    """Sum quantities per product, keeping the order products first appear in."""
    if not items_data:
        raise ValidationError({"items": ["No order items"]})

    quantities = Counter()
    for line in items_data:
        product_id = line.get("product_id")
        quantity = line.get("quantity")
        if not product_id:
            raise ValidationError({"items": ["Every item needs a product_id"]})
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
            raise ValidationError({"quantity": [f"Quantity for product {product_id} must be a whole number of at least 1"]})
        quantities[str(product_id)] += quantity
    return quantities


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_address = (
            json.loads(command.shipping_address)
            if isinstance(command.shipping_address, str)
            else command.shipping_address
        )
        payment_info = (
            json.loads(command.payment_info) if isinstance(command.payment_info, str) else command.payment_info
        )

        quantities = _requested_quantities(items_data)
        product_repo = current_domain.repository_for(Product)

        # Validate everything before mutating anything
        products = {}
        for product_id, quantity in quantities.items():
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                raise ObjectNotFoundError({"product": [f"Product not found: {product_id}"]}) from None
            if quantity > product.stock:
                raise InsufficientStockError(
                    {"stock": [f"Insufficient stock for {product.name}. Available: {product.stock}, requested: {quantity}"]}
                )
            products[product_id] = product

        lines = []
        for line in items_data:
            product = products[str(line["product_id"])]
            lines.append(
                {
                    "product_id": str(product.id),
                    "name": product.name,
                    "image": product.primary_image,
                    "price": product.final_price,
                    "quantity": line["quantity"],
                }
            )

        order = Order.place(
            customer_id=command.customer_id,
            customer_email=command.customer_email,
            customer_name=command.customer_name,
            items=lines,
            shipping_address=shipping_address,
            payment_info=payment_info,
            tax_price=command.tax_price,
            shipping_price=command.shipping_price,
            discount_amount=command.discount_amount,
            order_notes=command.order_notes,
        )

        for product_id, quantity in quantities.items():
            product = products[product_id]
            product.withdraw_stock(quantity)
            product_repo.add(product)

        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            customer_id=str(command.customer_id),
            total_items=order.total_items,
            total_price=order.pricing.total_price,
            stock_withdrawn=dict(quantities),
        )
        return str(order.id)
