"""Admin category maintenance: create, update and delete categories."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category, slugify
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=50)
    description = Text()
    image_url = String(max_length=500)
    featured = Boolean(default=False)
    sort_order = Integer(default=0)


@storefront.command(part_of="Category")
class UpdateCategory:
    category_id = Identifier(required=True)
    name = String(max_length=50)
    description = Text()
    image_url = String(max_length=500)
    featured = Boolean()
    is_active = Boolean()
    sort_order = Integer()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        slug = slugify(command.name)
        if not slug:
            raise ValidationError({"name": ["Category name must contain letters or digits"]})
        if repo.find_by_slug(slug):
            raise ValidationError({"name": [f"Category {command.name} already exists"]})

        category = Category.create(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            featured=command.featured,
            sort_order=command.sort_order,
        )
        repo.add(category)

        logger.info("Category created", category_id=str(category.id), slug=category.slug)
        return str(category.id)

    @handle(UpdateCategory)
    def update_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        category.update_details(
            name=command.name,
            description=command.description,
            image_url=command.image_url,
            featured=command.featured,
            is_active=command.is_active,
            sort_order=command.sort_order,
        )
        repo.add(category)
        return str(category.id)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)

        if current_domain.repository_for(Product).count(category=category.slug):
            raise ValidationError({"category": ["Cannot delete category with existing products"]})

        repo._dao.delete(category)
        logger.info("Category deleted", category_id=str(category.id), slug=category.slug)
