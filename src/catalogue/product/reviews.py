"""Product reviews: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from catalogue.domain import catalogue
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class SubmitReview:
    """Create the user's review of a product, or overwrite their existing one."""

    product_id = Identifier(required=True)
    user_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    rating = Integer(required=True, min_value=1, max_value=5)
    comment = Text(required=True)


@catalogue.command(part_of="Product")
class DeleteReview:
    product_id = Identifier(required=True)
    review_id = Identifier(required=True)


@catalogue.command_handler(part_of=Product)
class ManageReviewsHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        review = product.add_or_update_review(
            user_id=command.user_id,
            name=command.name,
            rating=command.rating,
            comment=command.comment,
        )
        repo.add(product)
        return str(review.id)

    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.delete_review(command.review_id)
        repo.add(product)
