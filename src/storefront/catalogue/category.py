"""Category aggregate: the product groupings shown in the storefront navigation."""

import re
from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.catalogue.events import CategoryCreated, CategoryDetailsUpdated
from storefront.domain import storefront


def slugify(name):
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


@storefront.aggregate
class Category:
    """A named grouping of products.

    Products refer to a category by its ``slug`` (``"smartphones"``), so the
    slug is fixed at creation and only the display details can change.
    """

    name = String(required=True, max_length=50)
    slug = String(required=True, max_length=60)
    description = Text()
    image_url = String(max_length=500)
    featured = Boolean(default=False)
    is_active = Boolean(default=True)
    sort_order = Integer(default=0)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, name, description=None, image_url=None, featured=False, sort_order=0):
        now = datetime.now(UTC)
        category = cls(
            name=name.strip(),
            slug=slugify(name),
            description=description,
            image_url=image_url,
            featured=featured,
            sort_order=sort_order,
            created_at=now,
            updated_at=now,
        )
        category.raise_(CategoryCreated(category_id=category.id, name=category.name, slug=category.slug))
        return category

    def update_details(
        self, name=None, description=None, image_url=None, featured=None, is_active=None, sort_order=None
    ):
        changes = {
            "name": name.strip() if name else None,
            "description": description,
            "image_url": image_url,
            "featured": featured,
            "is_active": is_active,
            "sort_order": sort_order,
        }
        for field_name, value in changes.items():
            if value is not None:
                setattr(self, field_name, value)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            CategoryDetailsUpdated(
                category_id=self.id,
                name=self.name,
                featured=self.featured,
                is_active=self.is_active,
                sort_order=self.sort_order,
            )
        )
