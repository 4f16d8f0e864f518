"""Order aggregate: line items, shipping, payment and pricing captured at checkout.

Status flow (admin driven, not enforced):
    processing -> confirmed -> shipped -> delivered
    side states: cancelled, refunded, returned

Customers may cancel only while the order is ``processing`` or ``confirmed``.
Admins may set any status; moving backwards is allowed but flagged as a
regression on the emitted ``OrderStatusChanged`` event.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import InvalidStateError, ValidationError
from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.ordering.events import OrderCancelled, OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "processing"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"
    RETURNED = "returned"


class PaymentMethod(Enum):
    CARD = "card"
    PAYPAL = "paypal"
    STRIPE = "stripe"
    CASH_ON_DELIVERY = "cash_on_delivery"


class PaymentStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


_CANCELLABLE_STATES = {OrderStatus.PROCESSING, OrderStatus.CONFIRMED}

# Position of each status along the fulfilment path. Moving to a lower
# stage is a regression.
_STAGE = {
    OrderStatus.PROCESSING: 0,
    OrderStatus.CONFIRMED: 1,
    OrderStatus.SHIPPED: 2,
    OrderStatus.DELIVERED: 3,
    OrderStatus.RETURNED: 4,
    OrderStatus.REFUNDED: 5,
    OrderStatus.CANCELLED: 5,
}


def _money(amount):
    return round(amount or 0.0, 2)


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class ShippingAddress:
    """Where the order ships. Captured at checkout and never changed afterwards."""

    full_name = String(required=True, max_length=100)
    phone = String(required=True, max_length=30)
    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="United States")


@storefront.value_object(part_of="Order")
class PaymentInfo:
    method = String(required=True, choices=PaymentMethod)
    status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    transaction_id = String(max_length=255)
    payment_intent = String(max_length=255)


@storefront.value_object(part_of="Order")
class OrderPricing:
    """Price components of an order. Locked at checkout.

    ``total_price`` is always derived from the other components.
    """

    items_price = Float(default=0.0, min_value=0.0)
    tax_price = Float(default=0.0, min_value=0.0)
    shipping_price = Float(default=0.0, min_value=0.0)
    discount_amount = Float(default=0.0, min_value=0.0)
    total_price = Float(default=0.0, min_value=0.0)

    @classmethod
    def derive(cls, items_price, tax_price=0.0, shipping_price=0.0, discount_amount=0.0):
        total = _money(items_price + tax_price + shipping_price - discount_amount)
        if total < 0:
            raise ValidationError({"discount_amount": ["Discount cannot exceed the order amount"]})
        return cls(
            items_price=_money(items_price),
            tax_price=_money(tax_price),
            shipping_price=_money(shipping_price),
            discount_amount=_money(discount_amount),
            total_price=total,
        )

    @invariant.post
    def total_must_match_components(self):
        expected = _money(self.items_price + self.tax_price + self.shipping_price - self.discount_amount)
        if _money(self.total_price) != expected:
            raise ValidationError({"total_price": [f"Total price {self.total_price} does not match components ({expected})"]})


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    """A product line with the name, image and price captured when ordered."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    image = String(max_length=500)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)

    @property
    def subtotal(self):
        return _money(self.price * self.quantity)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    customer_id = Identifier(required=True)
    customer_email = String(max_length=255)
    customer_name = String(max_length=100)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(ShippingAddress, required=True)
    payment_info = ValueObject(PaymentInfo, required=True)
    pricing = ValueObject(OrderPricing, required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    order_notes = Text()
    tracking_number = String(max_length=255)
    estimated_delivery = DateTime()
    cancellation_reason = String(max_length=500)
    paid_at = DateTime()
    shipped_at = DateTime()
    delivered_at = DateTime()
    cancelled_at = DateTime()
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def items_price_must_match_line_items(self):
        if self.pricing is None:
            return
        expected = _money(sum(item.price * item.quantity for item in self.items))
        if _money(self.pricing.items_price) != expected:
            raise ValidationError({"items_price": [f"Items price {self.pricing.items_price} does not match line items ({expected})"]})

    @property
    def order_number(self):
        return f"ORD-{str(self.id)[-8:].upper()}"

    @property
    def total_items(self):
        return sum(item.quantity for item in self.items)

    @property
    def can_be_cancelled(self):
        return OrderStatus(self.status) in _CANCELLABLE_STATES

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        customer_id,
        items,
        shipping_address,
        payment_info,
        tax_price=0.0,
        shipping_price=0.0,
        discount_amount=0.0,
        customer_email=None,
        customer_name=None,
        order_notes=None,
    ):
        """Create an order from line items that already carry their price snapshot.

        Args:
            items: List of dicts with product_id, name, image, price, quantity.
            shipping_address: Dict with full_name, phone, address, city, state,
                zip_code and optionally country.
            payment_info: Dict with method and optionally status,
                transaction_id, payment_intent.
        """
        if not items:
            raise ValidationError({"items": ["No order items"]})

        now = datetime.now(UTC)
        order_items = [
            OrderItem(
                product_id=item["product_id"],
                name=item["name"],
                image=item.get("image"),
                price=item["price"],
                quantity=item["quantity"],
            )
            for item in items
        ]
        pricing = OrderPricing.derive(
            items_price=sum(item.price * item.quantity for item in order_items),
            tax_price=tax_price or 0.0,
            shipping_price=shipping_price or 0.0,
            discount_amount=discount_amount or 0.0,
        )
        payment = PaymentInfo(**payment_info)

        order = cls(
            customer_id=customer_id,
            customer_email=customer_email,
            customer_name=customer_name,
            items=order_items,
            shipping_address=ShippingAddress(**shipping_address),
            payment_info=payment,
            pricing=pricing,
            status=OrderStatus.PROCESSING.value,
            order_notes=order_notes,
            paid_at=now if payment.status == PaymentStatus.COMPLETED.value else None,
            created_at=now,
            updated_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                order_number=order.order_number,
                customer_id=str(customer_id),
                customer_email=customer_email,
                customer_name=customer_name,
                items=json.dumps(
                    [
                        {
                            "product_id": str(i.product_id),
                            "name": i.name,
                            "price": i.price,
                            "quantity": i.quantity,
                        }
                        for i in order.items
                    ]
                ),
                items_price=pricing.items_price,
                tax_price=pricing.tax_price,
                shipping_price=pricing.shipping_price,
                discount_amount=pricing.discount_amount,
                total_price=pricing.total_price,
                payment_method=payment.method,
                payment_status=payment.status,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    def cancel(self, reason=None):
        """Cancel on the customer's behalf. Restocking is the caller's job."""
        if not self.can_be_cancelled:
            raise InvalidStateError({"status": [f"Cannot cancel order with status: {self.status}"]})

        now = datetime.now(UTC)
        self.status = OrderStatus.CANCELLED.value
        self.cancelled_at = now
        self.cancellation_reason = reason or "Cancelled by customer"
        self.updated_at = now

        self.raise_(
            OrderCancelled(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_id=str(self.customer_id),
                customer_email=self.customer_email,
                customer_name=self.customer_name,
                items=json.dumps(
                    [{"product_id": str(i.product_id), "name": i.name, "quantity": i.quantity} for i in self.items]
                ),
                reason=self.cancellation_reason,
                total_price=self.pricing.total_price,
                cancelled_at=now,
            )
        )

    def update_status(self, new_status, tracking_number=None, estimated_delivery=None):
        """Move the order to any status. Returns True when this is a regression."""
        try:
            target = OrderStatus(new_status)
        except ValueError:
            raise ValidationError(
                {"status": [f"Invalid status '{new_status}'. Valid: {', '.join(s.value for s in OrderStatus)}"]}
            ) from None

        current = OrderStatus(self.status)
        is_regression = _STAGE[target] < _STAGE[current]

        now = datetime.now(UTC)
        self.status = target.value
        if tracking_number:
            self.tracking_number = tracking_number
        if estimated_delivery:
            self.estimated_delivery = estimated_delivery
        if target == OrderStatus.SHIPPED:
            self.shipped_at = now
        elif target == OrderStatus.DELIVERED:
            self.delivered_at = now
        self.updated_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                order_number=self.order_number,
                customer_id=str(self.customer_id),
                customer_email=self.customer_email,
                customer_name=self.customer_name,
                previous_status=current.value,
                new_status=target.value,
                is_regression=is_regression,
                tracking_number=self.tracking_number,
                estimated_delivery=self.estimated_delivery,
                changed_at=now,
            )
        )
        return is_regression
