"""Order cancellation template: sent when a customer cancels an order."""


class OrderCancellationTemplate:
    notification_type = "order_cancellation"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        reason = context.get("reason") or "No reason provided"
        support_email = context.get("support_email", "support@electrostore.example")
        return {
            "subject": f"Order {order_number} Cancelled",
            "body": (
                f"Your order {order_number} has been cancelled.\n\n"
                f"Reason: {reason}\n\n"
                "If you paid for this order, a refund will be issued to your original payment method.\n\n"
                f"Questions? Contact us at {support_email}."
            ),
        }
