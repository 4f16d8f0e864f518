"""Customer order statistics and the admin dashboard aggregates."""

from datetime import UTC, datetime, timedelta

from protean import current_domain
from storefront.catalogue.management import DeleteProduct
from storefront.ordering.order import Order
from storefront.ordering.stats import customer_order_stats, dashboard_stats
from storefront.ordering.status import UpdateOrderStatus


def _ship(order_id, status="shipped"):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)


class TestCustomerOrderStats:
    def test_no_orders(self):
        assert customer_order_stats("cust-001") == {"orders_by_status": [], "total_orders": 0, "total_spent": 0.0}

    def test_grouped_by_status(self, create_product, place_order):
        product_id = create_product(price=100.0, stock=20)
        first = place_order([{"product_id": product_id, "quantity": 1}])
        place_order([{"product_id": product_id, "quantity": 2}])
        place_order([{"product_id": product_id, "quantity": 1}], customer_id="cust-002")
        _ship(first)

        stats = customer_order_stats("cust-001")

        buckets = {b["status"]: b for b in stats["orders_by_status"]}
        assert buckets["shipped"] == {"status": "shipped", "count": 1, "total_amount": 100.0}
        assert buckets["processing"] == {"status": "processing", "count": 1, "total_amount": 200.0}
        assert stats["total_orders"] == 2
        assert stats["total_spent"] == 300.0


class TestDashboardStats:
    def test_empty_store(self):
        stats = dashboard_stats()
        assert stats["total_products"] == 0
        assert stats["total_orders"] == 0
        assert stats["total_customers"] == 0
        assert stats["total_revenue"] == 0.0
        assert stats["average_order_value"] == 0.0
        assert stats["monthly_revenue"] == []
        assert stats["top_products"] == []

    def test_revenue_counts_only_shipped_and_delivered(self, create_product, place_order):
        product_id = create_product(price=100.0, stock=20)
        shipped = place_order([{"product_id": product_id, "quantity": 1}])
        delivered = place_order([{"product_id": product_id, "quantity": 3}], customer_id="cust-002")
        place_order([{"product_id": product_id, "quantity": 2}], customer_id="cust-003")
        _ship(shipped)
        _ship(delivered, "delivered")

        stats = dashboard_stats()

        assert stats["total_products"] == 1
        assert stats["total_orders"] == 3
        assert stats["total_customers"] == 3
        assert stats["total_revenue"] == 400.0
        assert stats["average_order_value"] == 200.0

    def test_monthly_revenue_bucket(self, create_product, place_order):
        product_id = create_product(price=50.0, stock=20)
        order_id = place_order([{"product_id": product_id, "quantity": 2}])
        _ship(order_id)
        created_at = current_domain.repository_for(Order).get(order_id).created_at

        stats = dashboard_stats(now=datetime.now(UTC))

        assert stats["monthly_revenue"] == [
            {"year": created_at.year, "month": created_at.month, "revenue": 100.0, "orders": 1}
        ]

    def test_monthly_revenue_skips_orders_older_than_a_year(self, create_product, place_order):
        product_id = create_product(price=50.0, stock=20)
        _ship(place_order([{"product_id": product_id, "quantity": 2}]))

        stats = dashboard_stats(now=datetime.now(UTC) + timedelta(days=400))

        assert stats["monthly_revenue"] == []
        assert stats["total_revenue"] == 100.0

    def test_top_products_ranked_by_quantity(self, create_product, place_order):
        phone = create_product(name="Phone", price=100.0, stock=20)
        case = create_product(name="Case", category="accessories", price=10.0, stock=20)
        place_order([{"product_id": phone, "quantity": 1}, {"product_id": case, "quantity": 4}])
        place_order([{"product_id": case, "quantity": 1}])

        top = dashboard_stats()["top_products"]

        assert [p["name"] for p in top] == ["Case", "Phone"]
        assert top[0]["total_sold"] == 5
        assert top[0]["revenue"] == 50.0

    def test_top_products_fall_back_to_snapshot_for_deleted_product(self, create_product, place_order):
        product_id = create_product(name="Retired Phone", stock=5)
        place_order([{"product_id": product_id, "quantity": 2}])
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        top = dashboard_stats()["top_products"]

        assert top[0]["name"] == "Retired Phone"
        assert top[0]["image"] == "https://cdn.example.com/p9p.jpg"
