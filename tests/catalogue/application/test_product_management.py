"""Application tests for the admin product commands."""

from unittest.mock import patch

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.catalogue.management import DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product


class TestCreateProduct:
    def test_create_persists(self, create_product):
        product_id = create_product(name="MacBook Air", category="laptops", brand="Apple", stock=7)
        product = current_domain.repository_for(Product).get(product_id)

        assert product.name == "MacBook Air"
        assert product.stock == 7
        assert product.sku.startswith("APP-LAP-")
        assert product.images[0].url == "https://cdn.example.com/p9p.jpg"

    def test_supplied_sku_is_upper_cased(self, create_product):
        product_id = create_product(sku="pix-9-pro")
        assert current_domain.repository_for(Product).get(product_id).sku == "PIX-9-PRO"

    def test_duplicate_sku_rejected(self, create_product):
        create_product(sku="PIX-9-PRO")
        with pytest.raises(ValidationError) as exc:
            create_product(sku="pix-9-pro")
        assert "sku" in exc.value.messages

    def test_discount_not_below_price_rejected(self, create_product):
        with pytest.raises(ValidationError):
            create_product(price=100.0, discount_price=120.0)

    def test_generated_sku_regenerated_on_collision(self, create_product):
        create_product(sku="GOO-SMA-AAAA")

        with patch(
            "storefront.catalogue.management.generate_sku", side_effect=["GOO-SMA-AAAA", "GOO-SMA-BBBB"]
        ) as generator:
            product_id = create_product()

        assert generator.call_count == 2
        assert current_domain.repository_for(Product).get(product_id).sku == "GOO-SMA-BBBB"

    def test_gives_up_when_every_generated_sku_is_taken(self, create_product):
        create_product(sku="GOO-SMA-AAAA")

        with patch("storefront.catalogue.management.generate_sku", return_value="GOO-SMA-AAAA"):
            with pytest.raises(ValidationError) as exc:
                create_product()

        assert "sku" in exc.value.messages
        assert current_domain.repository_for(Product).count() == 1

    def test_showcase_flags_persist(self, create_product):
        product_id = create_product(trending=True, best_seller=True)
        product = current_domain.repository_for(Product).get(product_id)

        assert product.trending is True
        assert product.best_seller is True
        assert product.featured is False


class TestUpdateProduct:
    def test_update_persists(self, create_product):
        product_id = create_product()
        current_domain.process(
            UpdateProduct(product_id=product_id, price=90.0, discount_price=80.0, featured=True),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 90.0
        assert product.final_price == 80.0
        assert product.featured is True

    def test_update_does_not_touch_stock(self, create_product):
        product_id = create_product(stock=5)
        current_domain.process(UpdateProduct(product_id=product_id, name="Renamed"), asynchronous=False)
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_update_missing_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id="missing", name="X"), asynchronous=False)


class TestDeleteProduct:
    def test_delete_removes_product(self, create_product):
        product_id = create_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_delete_missing_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteProduct(product_id="missing"), asynchronous=False)
