"""Customer emails triggered by order events."""

import json

from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.notifications.dispatch import send_email
from storefront.ordering.events import OrderCancelled, OrderPlaced, OrderStatusChanged
from storefront.ordering.order import Order, OrderStatus


@storefront.event_handler(part_of=Order)
class OrderEmailHandler:
    """Sends confirmation, cancellation and shipping emails."""

    @handle(OrderPlaced)
    def on_order_placed(self, event: OrderPlaced) -> None:
        send_email(
            "order_confirmation",
            event.customer_email,
            {
                "order_number": event.order_number,
                "customer_name": event.customer_name,
                "items": json.loads(event.items),
                "total_price": event.total_price,
            },
        )

    @handle(OrderCancelled)
    def on_order_cancelled(self, event: OrderCancelled) -> None:
        send_email(
            "order_cancellation",
            event.customer_email,
            {"order_number": event.order_number, "reason": event.reason},
        )

    @handle(OrderStatusChanged)
    def on_status_changed(self, event: OrderStatusChanged) -> None:
        if event.new_status != OrderStatus.SHIPPED.value:
            return
        send_email(
            "shipping_update",
            event.customer_email,
            {
                "order_number": event.order_number,
                "tracking_number": event.tracking_number,
                "estimated_delivery": event.estimated_delivery.date().isoformat() if event.estimated_delivery else None,
            },
        )
