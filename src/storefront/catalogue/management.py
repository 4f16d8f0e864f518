"""Admin catalogue maintenance: create, update and delete products."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product, generate_sku
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_SKU_ATTEMPTS = 5


def _unused_sku(repo, brand, category):
    """Generate SKUs until one is not taken by another product."""
    for _ in range(_SKU_ATTEMPTS):
        sku = generate_sku(brand, category)
        if not repo.find_by_sku(sku):
            return sku
        logger.warning("Generated SKU already in use", sku=sku)
    raise ValidationError({"sku": ["Could not generate a unique SKU, please supply one"]})


@storefront.command(part_of="Product")
class CreateProduct:
    name = String(required=True, max_length=100)
    description = Text(required=True)
    short_description = String(max_length=200)
    price = Float(required=True)
    discount_price = Float()
    category = String(required=True, max_length=50)
    subcategory = String(required=True, max_length=100)
    brand = String(required=True, max_length=100)
    model_number = String(max_length=100)
    sku = String(max_length=50)
    images = Text()  # JSON list of {"url", "alt_text"}
    stock = Integer(default=0)
    low_stock_threshold = Integer(default=10)
    availability = Boolean(default=True)
    featured = Boolean(default=False)
    trending = Boolean(default=False)
    best_seller = Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    short_description = String(max_length=200)
    price = Float()
    discount_price = Float()
    remove_discount = Boolean(default=False)
    category = String(max_length=50)
    subcategory = String(max_length=100)
    brand = String(max_length=100)
    model_number = String(max_length=100)
    low_stock_threshold = Integer()
    availability = Boolean()
    status = String(max_length=20)
    featured = Boolean()
    trending = Boolean()
    best_seller = Boolean()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        repo = current_domain.repository_for(Product)
        if command.sku:
            sku = command.sku.upper()
            if repo.find_by_sku(sku):
                raise ValidationError({"sku": [f"SKU {sku} is already in use"]})
        else:
            sku = _unused_sku(repo, command.brand, command.category)

        product = Product.create(
            name=command.name,
            description=command.description,
            short_description=command.short_description,
            price=command.price,
            discount_price=command.discount_price,
            category=command.category,
            subcategory=command.subcategory,
            brand=command.brand,
            model_number=command.model_number,
            sku=sku,
            images=json.loads(command.images) if command.images else [],
            stock=command.stock,
            low_stock_threshold=command.low_stock_threshold,
            availability=command.availability,
            featured=command.featured,
            trending=command.trending,
            best_seller=command.best_seller,
        )
        repo.add(product)

        logger.info("Product created", product_id=str(product.id), sku=product.sku, stock=product.stock)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.update_details(
            name=command.name,
            description=command.description,
            short_description=command.short_description,
            price=command.price,
            discount_price=command.discount_price,
            remove_discount=command.remove_discount,
            category=command.category,
            subcategory=command.subcategory,
            brand=command.brand,
            model_number=command.model_number,
            low_stock_threshold=command.low_stock_threshold,
            availability=command.availability,
            status=command.status,
            featured=command.featured,
            trending=command.trending,
            best_seller=command.best_seller,
        )
        repo.add(product)

        logger.info("Product details updated", product_id=str(product.id))
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        repo._dao.delete(product)

        logger.info("Product deleted", product_id=str(command.product_id))
