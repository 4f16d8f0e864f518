"""Product aggregate root with embedded Review and ProductImage entities.

Stock lives on the product itself. It is only ever changed through
``withdraw_stock`` (order placement) and ``restock`` (order cancellation),
so every change is recorded as a domain event and goes through the
aggregate's version check on commit.
"""

from datetime import UTC, datetime
from enum import Enum
from uuid import uuid4

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
)

from storefront.catalogue.events import (
    LowStockDetected,
    ProductCreated,
    ProductDetailsUpdated,
    ReviewSubmitted,
    StockRestored,
    StockWithdrawn,
)
from storefront.domain import storefront
from storefront.shared.exceptions import InsufficientStockError


class ProductCategory(Enum):
    SMARTPHONES = "smartphones"
    LAPTOPS = "laptops"
    TABLETS = "tablets"
    SMARTWATCHES = "smartwatches"
    HEADPHONES = "headphones"
    SPEAKERS = "speakers"
    CAMERAS = "cameras"
    GAMING = "gaming"
    ACCESSORIES = "accessories"
    HOME_APPLIANCES = "home-appliances"


class ProductStatus(Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DISCONTINUED = "discontinued"


class StockStatus(Enum):
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


def generate_sku(brand, category):
    """Build a ``BRA-CAT-XXXX`` code from the brand, the category and a random suffix."""
    return f"{brand[:3]}-{category[:3]}-{uuid4().hex[:4]}".upper()


@storefront.entity(part_of="Product")
class ProductImage:
    url = String(required=True, max_length=500)
    alt_text = String(max_length=255)


@storefront.entity(part_of="Product")
class Review:
    """A customer's rating and comment. One review per user per product."""

    user_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = String(required=True, max_length=500)
    helpful = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()


@storefront.aggregate
class Product:
    name = String(required=True, max_length=100)
    description = Text(required=True)
    short_description = String(max_length=200)
    price = Float(required=True, min_value=0.01)
    discount_price = Float(min_value=0.0)
    category = String(required=True, choices=ProductCategory)
    subcategory = String(required=True, max_length=100)
    brand = String(required=True, max_length=100)
    model_number = String(max_length=100)
    sku = String(required=True, max_length=50)
    images = HasMany(ProductImage)
    stock = Integer(required=True, min_value=0, default=0)
    low_stock_threshold = Integer(min_value=0, default=10)
    availability = Boolean(default=True)
    status = String(choices=ProductStatus, default=ProductStatus.ACTIVE.value)
    featured = Boolean(default=False)
    trending = Boolean(default=False)
    best_seller = Boolean(default=False)
    rating = Float(default=0.0)
    num_of_reviews = Integer(default=0)
    reviews = HasMany(Review)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def discount_price_must_be_below_price(self):
        if self.discount_price is not None and self.discount_price >= self.price:
            raise ValidationError({"discount_price": ["Discount price must be less than regular price"]})

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    @property
    def final_price(self):
        return self.discount_price or self.price

    @property
    def discount_percentage(self):
        if self.discount_price and self.price:
            return round((self.price - self.discount_price) / self.price * 100)
        return 0

    @property
    def stock_status(self):
        if self.stock == 0:
            return StockStatus.OUT_OF_STOCK.value
        if self.stock <= self.low_stock_threshold:
            return StockStatus.LOW_STOCK.value
        return StockStatus.IN_STOCK.value

    @property
    def primary_image(self):
        return self.images[0].url if self.images else None

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        category,
        subcategory,
        brand,
        stock=0,
        discount_price=None,
        short_description=None,
        model_number=None,
        sku=None,
        images=None,
        low_stock_threshold=10,
        availability=True,
        featured=False,
        trending=False,
        best_seller=False,
    ):
        """Add a product to the catalogue.

        Args:
            images: List of dicts with ``url`` and optional ``alt_text``.
            sku: Generated from brand and category when not supplied.
        """
        now = datetime.now(UTC)
        product = cls(
            name=name,
            description=description,
            short_description=short_description,
            price=price,
            discount_price=discount_price,
            category=category,
            subcategory=subcategory,
            brand=brand,
            model_number=model_number,
            sku=sku or generate_sku(brand, category),
            images=[ProductImage(url=img["url"], alt_text=img.get("alt_text")) for img in images or []],
            stock=stock,
            low_stock_threshold=low_stock_threshold,
            availability=availability,
            featured=featured,
            trending=trending,
            best_seller=best_seller,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                name=product.name,
                sku=product.sku,
                category=product.category,
                price=product.price,
                stock=product.stock,
                created_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Admin maintenance
    # -------------------------------------------------------------------
    def update_details(
        self,
        name=None,
        description=None,
        short_description=None,
        price=None,
        discount_price=None,
        remove_discount=False,
        category=None,
        subcategory=None,
        brand=None,
        model_number=None,
        low_stock_threshold=None,
        availability=None,
        status=None,
        featured=None,
        trending=None,
        best_seller=None,
    ):
        """Apply the supplied changes; ``None`` leaves a field as it is.

        Price and discount are judged together once all changes are in,
        so lowering the price and the discount in one call is allowed.
        """
        changes = {
            "name": name,
            "description": description,
            "short_description": short_description,
            "price": price,
            "discount_price": discount_price,
            "category": category,
            "subcategory": subcategory,
            "brand": brand,
            "model_number": model_number,
            "low_stock_threshold": low_stock_threshold,
            "availability": availability,
            "status": status,
            "featured": featured,
            "trending": trending,
            "best_seller": best_seller,
        }

        with atomic_change(self):
            for field_name, value in changes.items():
                if value is not None:
                    setattr(self, field_name, value)
            if remove_discount:
                self.discount_price = None
            self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductDetailsUpdated(
                product_id=self.id,
                name=self.name,
                price=self.price,
                discount_price=self.discount_price,
                stock=self.stock,
                status=self.status,
                updated_at=self.updated_at,
            )
        )

    # -------------------------------------------------------------------
    # Stock
    # -------------------------------------------------------------------
    def withdraw_stock(self, quantity):
        """Take ``quantity`` units out of stock for an order."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if quantity > self.stock:
            raise InsufficientStockError(
                {"stock": [f"Insufficient stock for {self.name}. Available: {self.stock}, requested: {quantity}"]}
            )

        previous_stock = self.stock
        self.stock = previous_stock - quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockWithdrawn(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                withdrawn_at=now,
            )
        )

        if self.stock <= self.low_stock_threshold:
            self.raise_(
                LowStockDetected(
                    product_id=self.id,
                    name=self.name,
                    sku=self.sku,
                    current_stock=self.stock,
                    threshold=self.low_stock_threshold,
                    detected_at=now,
                )
            )

    def restock(self, quantity):
        """Return ``quantity`` units to stock after a cancellation."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        previous_stock = self.stock
        self.stock = previous_stock + quantity
        now = datetime.now(UTC)
        self.updated_at = now

        self.raise_(
            StockRestored(
                product_id=self.id,
                quantity=quantity,
                previous_stock=previous_stock,
                new_stock=self.stock,
                restored_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Reviews
    # -------------------------------------------------------------------
    def submit_review(self, user_id, name, rating, comment):
        """Add the user's review, or revise it if they already reviewed this product."""
        if rating is None or not comment or not str(comment).strip():
            raise ValidationError({"review": ["Please provide rating and comment"]})
        if not 1 <= int(rating) <= 5:
            raise ValidationError({"rating": ["Rating must be between 1 and 5"]})

        now = datetime.now(UTC)
        comment = str(comment).strip()
        existing = next((r for r in self.reviews if str(r.user_id) == str(user_id)), None)

        if existing:
            existing.rating = int(rating)
            existing.comment = comment
            existing.updated_at = now
            # Re-adding an existing child marks it as updated for persistence
            self.add_reviews(existing)
        else:
            self.add_reviews(
                Review(
                    user_id=user_id,
                    name=name,
                    rating=int(rating),
                    comment=comment,
                    created_at=now,
                    updated_at=now,
                )
            )

        self._update_rating()
        self.updated_at = now

        self.raise_(
            ReviewSubmitted(
                product_id=self.id,
                user_id=user_id,
                rating=int(rating),
                is_update=existing is not None,
                new_rating=self.rating,
                num_of_reviews=self.num_of_reviews,
            )
        )

    def _update_rating(self):
        """Recompute the average rating (one decimal) and the review count."""
        ratings = [review.rating for review in self.reviews]
        self.num_of_reviews = len(ratings)
        self.rating = round(sum(ratings) / len(ratings), 1) if ratings else 0.0
