"""Pydantic request/response schemas for the Ordering API.

These are external contracts, kept separate from the internal Protean
commands.
"""

from datetime import datetime

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class ShippingAddressSchema(BaseModel):
    full_name: str = Field(..., max_length=100)
    phone: str = Field(..., max_length=30)
    address: str = Field(..., max_length=255)
    city: str = Field(..., max_length=100)
    state: str = Field(..., max_length=100)
    zip_code: str = Field(..., max_length=20)
    country: str = "United States"


class PaymentInfoSchema(BaseModel):
    method: str
    status: str = "pending"
    transaction_id: str | None = None
    payment_intent: str | None = None


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [{"product_id": "prod-001", "quantity": 2}],
                    "shipping_address": {
                        "full_name": "Ada Lovelace",
                        "phone": "+1-555-0100",
                        "address": "12 Analytical Way",
                        "city": "Springfield",
                        "state": "IL",
                        "zip_code": "62701",
                        "country": "United States",
                    },
                    "payment_info": {"method": "card", "status": "completed", "transaction_id": "txn_123"},
                    "tax_price": 8.0,
                    "shipping_price": 5.0,
                    "discount_amount": 0.0,
                }
            ]
        }
    }

    items: list[OrderLineRequest] = Field(..., min_length=1)
    shipping_address: ShippingAddressSchema
    payment_info: PaymentInfoSchema
    tax_price: float = Field(0.0, ge=0)
    shipping_price: float = Field(0.0, ge=0)
    discount_amount: float = Field(0.0, ge=0)
    order_notes: str | None = Field(None, max_length=500)


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "status": "shipped",
                    "tracking_number": "1Z999AA10123456784",
                    "estimated_delivery": "2026-11-02T00:00:00Z",
                }
            ]
        }
    }

    status: str
    tracking_number: str | None = None
    estimated_delivery: datetime | None = None


class CreatePaymentIntentRequest(BaseModel):
    amount: float
    currency: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ConfirmPaymentRequest(BaseModel):
    payment_intent_id: str


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderIdResponse(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"order_id": "ord-abc123"}]}}

    order_id: str


class OrderItemResponse(BaseModel):
    item_id: str
    product_id: str
    name: str
    image: str | None = None
    price: float
    quantity: int
    subtotal: float


class OrderResponse(BaseModel):
    order_id: str
    order_number: str
    customer_id: str
    customer_email: str | None = None
    customer_name: str | None = None
    items: list[OrderItemResponse]
    shipping_address: ShippingAddressSchema
    payment_info: PaymentInfoSchema
    items_price: float
    tax_price: float
    shipping_price: float
    discount_amount: float
    total_price: float
    total_items: int
    status: str
    order_notes: str | None = None
    tracking_number: str | None = None
    estimated_delivery: datetime | None = None
    cancellation_reason: str | None = None
    paid_at: datetime | None = None
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    cancelled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    total_orders: int
    current_page: int
    total_pages: int


class AdminOrderListResponse(OrderListResponse):
    total_amount: float


class StatusBucket(BaseModel):
    status: str
    count: int
    total_amount: float


class OrderStatsResponse(BaseModel):
    orders_by_status: list[StatusBucket]
    total_orders: int
    total_spent: float


class MonthlyRevenue(BaseModel):
    year: int
    month: int
    revenue: float
    orders: int


class TopProduct(BaseModel):
    product_id: str
    name: str | None = None
    image: str | None = None
    total_sold: int
    revenue: float


class DashboardStatsResponse(BaseModel):
    total_products: int
    total_orders: int
    total_customers: int
    total_revenue: float
    average_order_value: float
    monthly_revenue: list[MonthlyRevenue]
    top_products: list[TopProduct]


class PaymentIntentResponse(BaseModel):
    client_secret: str
    payment_intent_id: str


class PaymentStatusResponse(BaseModel):
    payment_status: str
    payment_intent_id: str
    amount: int
    currency: str
