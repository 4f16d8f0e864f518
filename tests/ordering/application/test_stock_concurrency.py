"""Application tests for optimistic concurrency on Product stock.

A Product read before a competing order commits carries an old version;
writing it back must be rejected rather than overwrite the newer stock.
"""

import pytest
from protean import UnitOfWork, current_domain
from protean.exceptions import ExpectedVersionError
from storefront.catalogue.product import Product
from storefront.ordering.order import Order


class TestStaleProductWrite:
    def test_stale_copy_rejected_after_competing_order(self, create_product, place_order):
        product_id = create_product(stock=3)
        repo = current_domain.repository_for(Product)
        stale = repo.get(product_id)

        place_order([{"product_id": product_id, "quantity": 1}])

        stale.withdraw_stock(3)
        with pytest.raises(ExpectedVersionError):
            with UnitOfWork():
                repo.add(stale)

        assert repo.get(product_id).stock == 2
        assert current_domain.repository_for(Order).count() == 1

    def test_fresh_copy_commits(self, create_product, place_order):
        product_id = create_product(stock=3)
        place_order([{"product_id": product_id, "quantity": 1}])

        repo = current_domain.repository_for(Product)
        fresh = repo.get(product_id)
        fresh.withdraw_stock(2)
        with UnitOfWork():
            repo.add(fresh)

        assert repo.get(product_id).stock == 0

    def test_second_writer_of_same_version_rejected(self, create_product):
        product_id = create_product(stock=2)
        repo = current_domain.repository_for(Product)
        first, second = repo.get(product_id), repo.get(product_id)

        first.withdraw_stock(2)
        with UnitOfWork():
            repo.add(first)

        second.withdraw_stock(2)
        with pytest.raises(ExpectedVersionError):
            with UnitOfWork():
                repo.add(second)

        assert repo.get(product_id).stock == 0
