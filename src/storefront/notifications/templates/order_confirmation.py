"""Order confirmation template: sent when an order is placed."""


class OrderConfirmationTemplate:
    notification_type = "order_confirmation"

    @staticmethod
    def render(context: dict) -> dict:
        order_number = context.get("order_number", "N/A")
        customer_name = context.get("customer_name") or "there"
        store_name = context.get("store_name", "ElectroStore")
        currency = context.get("currency", "usd").upper()
        lines = "\n".join(
            f"- {item['name']} x {item['quantity']} @ {currency} {item['price']:.2f}" for item in context.get("items", [])
        )
        return {
            "subject": f"Order Confirmation - {order_number}",
            "body": (
                f"Hi {customer_name},\n\n"
                f"Thank you for your order {order_number}.\n\n"
                f"{lines}\n\n"
                f"Order Total: {currency} {context.get('total_price', 0.0):.2f}\n\n"
                "We'll notify you once your order ships.\n\n"
                f"Thank you for shopping with {store_name}!"
            ),
        }
