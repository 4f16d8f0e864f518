"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.ordering.order import Order

_BATCH_SIZE = 100


@storefront.repository(part_of=Order)
class OrderRepository:
    def _filtered(self, customer_id=None, status=None, statuses=None):
        query = self._dao.query
        if customer_id:
            query = query.filter(customer_id=str(customer_id))
        if status:
            query = query.filter(status=status)
        if statuses:
            query = query.filter(status__in=list(statuses))
        return query

    def page(self, customer_id=None, status=None, page: int = 1, limit: int = 10):
        """One page of orders, newest first."""
        query = self._filtered(customer_id=customer_id, status=status)
        return query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def iter_orders(self, customer_id=None, status=None, statuses=None):
        """Yield every matching order, fetching in batches."""
        query = self._filtered(customer_id=customer_id, status=status, statuses=statuses).order_by("created_at")
        offset = 0
        while True:
            result = query.offset(offset).limit(_BATCH_SIZE).all()
            yield from result.items
            offset += _BATCH_SIZE
            if offset >= result.total:
                break

    def count(self) -> int:
        return self._dao.query.all().total
