"""Customer cancellation: cancel the order and put its stock back."""

from collections import Counter

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.shared.exceptions import ForbiddenError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    reason = String(max_length=500)


@storefront.command_handler(part_of=Order)
class CancelOrderHandler:
    @handle(CancelOrder)
    def cancel_order(self, command):
        order_repo = current_domain.repository_for(Order)
        order = order_repo.get(command.order_id)

        if str(order.customer_id) != str(command.requested_by):
            raise ForbiddenError({"order": ["Not authorized to cancel this order"]})

        order.cancel(reason=command.reason)

        quantities = Counter()
        for item in order.items:
            quantities[str(item.product_id)] += item.quantity

        product_repo = current_domain.repository_for(Product)
        for product_id, quantity in quantities.items():
            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                logger.warning(
                    "Skipping restock for deleted product",
                    order_id=str(order.id),
                    product_id=product_id,
                    quantity=quantity,
                )
                continue
            product.restock(quantity)
            product_repo.add(product)

        order_repo.add(order)

        logger.info(
            "Order cancelled",
            order_id=str(order.id),
            reason=order.cancellation_reason,
            stock_restored=dict(quantities),
        )
        return str(order.id)
