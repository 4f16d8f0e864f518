"""Admin status updates. Any status may be set; regressions are logged."""

from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)
    tracking_number = String(max_length=255)
    estimated_delivery = DateTime()


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        previous_status = order.status

        is_regression = order.update_status(
            command.status,
            tracking_number=command.tracking_number,
            estimated_delivery=command.estimated_delivery,
        )
        repo.add(order)

        if is_regression:
            logger.warning(
                "Order status moved backwards",
                order_id=str(order.id),
                previous_status=previous_status,
                new_status=order.status,
            )
        else:
            logger.info(
                "Order status updated",
                order_id=str(order.id),
                previous_status=previous_status,
                new_status=order.status,
            )
        return order.status
