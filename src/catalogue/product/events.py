"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductCreated:
    """A seller listed a new product."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)
    created_at: DateTime(required=True)


@catalogue.event(part_of="Product")
class ProductUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    stock: Integer(required=True)


@catalogue.event(part_of="Product")
class ProductImagesReplaced:
    """The product's pictures were swapped; the retired keys are comma-separated."""

    __version__ = 1

    product_id: Identifier(required=True)
    image_count: Integer(required=True)
    retired_keys: String()


@catalogue.event(part_of="Product")
class ReviewSubmitted:
    """A user reviewed the product for the first time."""

    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True)
    ratings: Float(required=True)
    num_of_reviews: Integer(required=True)


@catalogue.event(part_of="Product")
class ReviewRevised:
    """A user overwrote their earlier review of the product."""

    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    user_id: Identifier(required=True)
    rating: Integer(required=True)
    ratings: Float(required=True)
    num_of_reviews: Integer(required=True)


@catalogue.event(part_of="Product")
class ReviewDeleted:
    __version__ = 1

    product_id: Identifier(required=True)
    review_id: Identifier(required=True)
    ratings: Float(required=True)
    num_of_reviews: Integer(required=True)


@catalogue.event(part_of="Product")
class StockReleased:
    """Units left the shelf because an order moved out of Processing."""

    __version__ = 1

    product_id: Identifier(required=True)
    order_id: Identifier()
    quantity: Integer(required=True)
    remaining: Integer(required=True)
    shortfall: Integer(default=0)
