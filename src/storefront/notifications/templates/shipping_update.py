"""Shipping update template: sent when an order is marked as shipped."""


class ShippingUpdateTemplate:
    notification_type = "shipping_update"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        tracking_number = context.get("tracking_number") or "N/A"
        estimated_delivery = context.get("estimated_delivery") or "soon"
        return {
            "subject": "Your Order Has Shipped!",
            "body": (
                f"Great news! Your order {order_number} has shipped.\n\n"
                f"Tracking Number: {tracking_number}\n"
                f"Estimated Delivery: {estimated_delivery}\n\n"
                "You can track your package using the tracking number above."
            ),
        }
