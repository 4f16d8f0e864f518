"""Repositories for the Product and Category aggregates."""

from protean.utils.query import Q

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product, ProductStatus
from storefront.domain import storefront

_SHOWCASE_FLAGS = ("featured", "trending", "best_seller")


@storefront.repository(part_of=Product)
class ProductRepository:
    def _active(self):
        return self._dao.query.filter(status=ProductStatus.ACTIVE.value, availability=True)

    def find_by_sku(self, sku: str) -> Product | None:
        return self._dao.query.filter(sku=sku).limit(1).all().first

    def list_active(self, category: str | None = None, page: int = 1, limit: int = 12):
        """Active, available products, newest first, one page at a time."""
        query = self._active()
        if category:
            query = query.filter(category=category)
        return query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def showcase(self, flag: str, limit: int = 8) -> list[Product]:
        """Active products flagged ``featured``, ``trending`` or ``best_seller``."""
        if flag not in _SHOWCASE_FLAGS:
            raise ValueError(f"Unknown showcase flag: {flag}")
        return self._active().filter(**{flag: True}).order_by("-created_at").limit(limit).all().items

    def related(self, product: Product, limit: int = 8) -> list[Product]:
        """Other active products sharing the product's category or brand."""
        return (
            self._active()
            .filter(Q(category=product.category) | Q(brand=product.brand))
            .exclude(id=product.id)
            .order_by("-rating")
            .limit(limit)
            .all()
            .items
        )

    def brands(self) -> list[str]:
        return sorted({product.brand for product in self._active().limit(None).all().items})

    def price_range(self) -> tuple[float, float]:
        """Lowest and highest regular price among active products; ``(0, 0)`` when there are none."""
        cheapest = self._active().order_by("price").limit(1).all().first
        dearest = self._active().order_by("-price").limit(1).all().first
        if cheapest is None:
            return 0.0, 0.0
        return cheapest.price, dearest.price

    def count(self, category: str | None = None) -> int:
        query = self._dao.query
        if category:
            query = query.filter(category=category)
        return query.all().total


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug: str) -> Category | None:
        return self._dao.query.filter(slug=slug).limit(1).all().first

    def list_active(self, featured_only: bool = False, limit: int | None = None) -> list[Category]:
        """Active categories in display order, then by name."""
        query = self._dao.query.filter(is_active=True)
        if featured_only:
            query = query.filter(featured=True)
        return query.order_by(["sort_order", "name"]).limit(limit).all().items
