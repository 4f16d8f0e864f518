"""FastAPI routes for Ordering: customer orders, payments and admin order management."""

import json
import math

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.ordering.api.schemas import (
    AdminOrderListResponse,
    CancelOrderRequest,
    ConfirmPaymentRequest,
    CreatePaymentIntentRequest,
    DashboardStatsResponse,
    OrderItemResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatsResponse,
    PaymentInfoSchema,
    PaymentIntentResponse,
    PaymentStatusResponse,
    PlaceOrderRequest,
    ShippingAddressSchema,
    UpdateOrderStatusRequest,
)
from storefront.ordering.cancellation import CancelOrder
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.stats import customer_order_stats, dashboard_stats
from storefront.ordering.status import UpdateOrderStatus
from storefront.payments.intents import create_payment_intent, retrieve_payment_intent
from storefront.shared.exceptions import ForbiddenError
from storefront.shared.principal import Principal, get_principal, require_admin
from storefront.shared.settings import MAX_PAGE_SIZE, store_setting

order_router = APIRouter(prefix="/api/orders", tags=["orders"])
admin_order_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def order_response(order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.id),
        order_number=order.order_number,
        customer_id=str(order.customer_id),
        customer_email=order.customer_email,
        customer_name=order.customer_name,
        items=[
            OrderItemResponse(
                item_id=str(item.id),
                product_id=str(item.product_id),
                name=item.name,
                image=item.image,
                price=item.price,
                quantity=item.quantity,
                subtotal=item.subtotal,
            )
            for item in order.items
        ],
        shipping_address=ShippingAddressSchema(
            full_name=order.shipping_address.full_name,
            phone=order.shipping_address.phone,
            address=order.shipping_address.address,
            city=order.shipping_address.city,
            state=order.shipping_address.state,
            zip_code=order.shipping_address.zip_code,
            country=order.shipping_address.country,
        ),
        payment_info=PaymentInfoSchema(
            method=order.payment_info.method,
            status=order.payment_info.status,
            transaction_id=order.payment_info.transaction_id,
            payment_intent=order.payment_info.payment_intent,
        ),
        items_price=order.pricing.items_price,
        tax_price=order.pricing.tax_price,
        shipping_price=order.pricing.shipping_price,
        discount_amount=order.pricing.discount_amount,
        total_price=order.pricing.total_price,
        total_items=order.total_items,
        status=order.status,
        order_notes=order.order_notes,
        tracking_number=order.tracking_number,
        estimated_delivery=order.estimated_delivery,
        cancellation_reason=order.cancellation_reason,
        paid_at=order.paid_at,
        shipped_at=order.shipped_at,
        delivered_at=order.delivered_at,
        cancelled_at=order.cancelled_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _page_size(limit: int | None) -> int:
    return limit or store_setting("ORDERS_PER_PAGE")


# ---------------------------------------------------------------------------
# Customer orders
# ---------------------------------------------------------------------------
@order_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, principal: Principal = Depends(get_principal)) -> OrderResponse:
    """Place an order. Prices are taken from the catalogue, never from the request."""
    command = PlaceOrder(
        customer_id=principal.id,
        customer_email=principal.email,
        customer_name=principal.name,
        items=json.dumps([line.model_dump() for line in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_info=json.dumps(body.payment_info.model_dump(exclude_none=True)),
        tax_price=body.tax_price,
        shipping_price=body.shipping_price,
        discount_amount=body.discount_amount,
        order_notes=body.order_notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return order_response(current_domain.repository_for(Order).get(order_id))


@order_router.get("/me", response_model=OrderListResponse)
async def my_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
    principal: Principal = Depends(get_principal),
) -> OrderListResponse:
    limit = _page_size(limit)
    result = current_domain.repository_for(Order).page(customer_id=principal.id, status=status, page=page, limit=limit)
    return OrderListResponse(
        orders=[order_response(o) for o in result.items],
        total_orders=result.total,
        current_page=page,
        total_pages=math.ceil(result.total / limit),
    )


@order_router.get("/me/stats", response_model=OrderStatsResponse)
async def my_order_stats(principal: Principal = Depends(get_principal)) -> OrderStatsResponse:
    return OrderStatsResponse(**customer_order_stats(principal.id))


# ---------------------------------------------------------------------------
# Payments (declared before /{order_id} so the paths are not shadowed)
# ---------------------------------------------------------------------------
@order_router.post("/payment/create-intent", response_model=PaymentIntentResponse)
async def create_intent(
    body: CreatePaymentIntentRequest,
    principal: Principal = Depends(get_principal),
) -> PaymentIntentResponse:
    result = create_payment_intent(
        amount=body.amount,
        user_id=principal.id,
        currency=body.currency,
        metadata=body.metadata,
    )
    return PaymentIntentResponse(**result)


@order_router.post(
    "/payment/confirm",
    response_model=PaymentStatusResponse,
    dependencies=[Depends(get_principal)],
)
async def confirm_payment(body: ConfirmPaymentRequest) -> PaymentStatusResponse:
    return PaymentStatusResponse(**retrieve_payment_intent(body.payment_intent_id))


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(get_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.customer_id) != principal.id and not principal.is_admin:
        raise ForbiddenError({"order": ["Not authorized to access this order"]})
    return order_response(order)


@order_router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    principal: Principal = Depends(get_principal),
) -> OrderResponse:
    command = CancelOrder(
        order_id=order_id,
        requested_by=principal.id,
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return order_response(current_domain.repository_for(Order).get(order_id))


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
@admin_order_router.get("/orders", response_model=AdminOrderListResponse)
async def list_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=MAX_PAGE_SIZE),
) -> AdminOrderListResponse:
    limit = _page_size(limit)
    repo = current_domain.repository_for(Order)
    result = repo.page(status=status, page=page, limit=limit)
    total_amount = sum(o.pricing.total_price for o in repo.iter_orders(status=status))
    return AdminOrderListResponse(
        orders=[order_response(o) for o in result.items],
        total_orders=result.total,
        current_page=page,
        total_pages=math.ceil(result.total / limit),
        total_amount=round(total_amount, 2),
    )


@admin_order_router.put("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OrderResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        status=body.status,
        tracking_number=body.tracking_number,
        estimated_delivery=body.estimated_delivery,
    )
    current_domain.process(command, asynchronous=False)
    return order_response(current_domain.repository_for(Order).get(order_id))


@admin_order_router.get("/dashboard/stats", response_model=DashboardStatsResponse)
async def get_dashboard_stats() -> DashboardStatsResponse:
    return DashboardStatsResponse(**dashboard_stats())
