"""SubmitReview: create or revise the caller's review of a product."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class SubmitReview:
    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    rating = Integer(required=True)
    comment = String(required=True, max_length=500)


@storefront.command_handler(part_of=Product)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        product.submit_review(
            user_id=command.user_id,
            name=command.name,
            rating=command.rating,
            comment=command.comment,
        )
        repo.add(product)

        logger.info(
            "Review submitted",
            product_id=str(product.id),
            user_id=str(command.user_id),
            rating=command.rating,
            new_rating=product.rating,
        )
        return product.rating
