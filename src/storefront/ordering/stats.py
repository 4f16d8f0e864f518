"""Order statistics for customers and the admin dashboard."""

from collections import defaultdict
from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.ordering.order import Order, OrderStatus

REVENUE_STATUSES = (OrderStatus.SHIPPED.value, OrderStatus.DELIVERED.value)
TOP_PRODUCTS_LIMIT = 10


def _aware(moment):
    if moment is not None and moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment


def customer_order_stats(customer_id) -> dict:
    """Per-status count and amount of a customer's orders, plus overall totals."""
    by_status = defaultdict(lambda: {"count": 0, "total_amount": 0.0})
    total_orders = 0
    total_spent = 0.0

    for order in current_domain.repository_for(Order).iter_orders(customer_id=customer_id):
        bucket = by_status[order.status]
        bucket["count"] += 1
        bucket["total_amount"] = round(bucket["total_amount"] + order.pricing.total_price, 2)
        total_orders += 1
        total_spent += order.pricing.total_price

    return {
        "orders_by_status": [{"status": status, **values} for status, values in by_status.items()],
        "total_orders": total_orders,
        "total_spent": round(total_spent, 2),
    }


def dashboard_stats(now=None) -> dict:
    """Store-wide totals, revenue over shipped/delivered orders and best sellers."""
    now = now or datetime.now(UTC)
    year_ago = now - timedelta(days=365)

    order_repo = current_domain.repository_for(Order)
    product_repo = current_domain.repository_for(Product)

    customers = set()
    revenue_total = 0.0
    revenue_orders = 0
    monthly = defaultdict(lambda: {"revenue": 0.0, "orders": 0})
    sold = defaultdict(lambda: {"name": None, "image": None, "total_sold": 0, "revenue": 0.0})

    for order in order_repo.iter_orders():
        customers.add(str(order.customer_id))

        for item in order.items:
            entry = sold[str(item.product_id)]
            entry["name"] = entry["name"] or item.name
            entry["image"] = entry["image"] or item.image
            entry["total_sold"] += item.quantity
            entry["revenue"] += item.price * item.quantity

        if order.status not in REVENUE_STATUSES:
            continue

        revenue_total += order.pricing.total_price
        revenue_orders += 1

        created_at = _aware(order.created_at)
        if created_at and created_at >= year_ago:
            bucket = monthly[(created_at.year, created_at.month)]
            bucket["revenue"] += order.pricing.total_price
            bucket["orders"] += 1

    top_products = []
    for product_id, entry in sorted(sold.items(), key=lambda kv: kv[1]["total_sold"], reverse=True)[
        :TOP_PRODUCTS_LIMIT
    ]:
        # Prefer the live catalogue name and image, fall back to the order snapshot
        product = product_repo._dao.query.filter(id=product_id).limit(1).all().first
        top_products.append(
            {
                "product_id": product_id,
                "name": product.name if product else entry["name"],
                "image": (product.primary_image if product else None) or entry["image"],
                "total_sold": entry["total_sold"],
                "revenue": round(entry["revenue"], 2),
            }
        )

    return {
        "total_products": product_repo.count(),
        "total_orders": order_repo.count(),
        "total_customers": len(customers),
        "total_revenue": round(revenue_total, 2),
        "average_order_value": round(revenue_total / revenue_orders, 2) if revenue_orders else 0.0,
        "monthly_revenue": [
            {"year": year, "month": month, "revenue": round(values["revenue"], 2), "orders": values["orders"]}
            for (year, month), values in sorted(monthly.items())
        ],
        "top_products": top_products,
    }
