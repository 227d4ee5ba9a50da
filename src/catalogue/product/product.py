"""Product aggregate root with ProductImage and Review entities.

The review list and the two figures derived from it (``ratings`` and
``num_of_reviews``) live on the same aggregate so they always change in a
single write: every review mutation recomputes both before the aggregate is
persisted.
"""

from datetime import datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text

from catalogue.domain import catalogue
from shared.errors import NotFound

MAX_IMAGES = 5


class Category(Enum):
    """Closed set of catalogue categories."""

    ELECTRONICS = "Electronics"
    CAMERAS = "Cameras"
    LAPTOPS = "Laptops"
    ACCESSORIES = "Accessories"
    HEADPHONES = "Headphones"
    FOOD = "Food"
    BOOKS = "Books"
    CLOTHES_SHOES = "Clothes/Shoes"
    BEAUTY_HEALTH = "Beauty/Health"
    SPORTS = "Sports"
    OUTDOOR = "Outdoor"
    HOME = "Home"


@catalogue.entity(part_of="Product")
class ProductImage:
    """An uploaded product picture and the object-store key it lives under."""

    url: String(required=True, max_length=500)
    key: String(required=True, max_length=255)


@catalogue.entity(part_of="Product")
class Review:
    """One user's rating and comment; a user holds at most one per product."""

    user_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    rating: Integer(required=True, min_value=1, max_value=5)
    comment: Text(required=True)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)


@catalogue.aggregate
class Product:
    """A listed item offered by a seller."""

    name: String(required=True, max_length=100)
    description: String(required=True, max_length=2000)
    price: Float(required=True, min_value=0.0)
    stock: Integer(default=0, min_value=0)
    category: String(required=True, choices=Category)
    seller_id: Identifier(required=True)
    images: HasMany(ProductImage)
    reviews: HasMany(Review)
    ratings: Float(default=0.0)
    num_of_reviews: Integer(default=0)
    created_at: DateTime(default=datetime.now)
    updated_at: DateTime(default=datetime.now)

    @invariant.post
    def images_cannot_exceed_maximum(self):
        if len(self.images) > MAX_IMAGES:
            raise ValidationError({"images": [f"Cannot have more than {MAX_IMAGES} images"]})

    @invariant.post
    def review_count_matches_reviews(self):
        if self.num_of_reviews != len(self.reviews):
            raise ValidationError({"num_of_reviews": ["Review count is out of step with the reviews"]})

    @classmethod
    def create(cls, name, description, price, category, seller_id, stock=0, images=()):
        from catalogue.product.events import ProductCreated

        if not images:
            raise ValidationError({"images": ["Please provide at least one product image"]})

        now = datetime.now()
        product = cls(
            name=name,
            description=description,
            price=price,
            category=category,
            seller_id=seller_id,
            stock=stock,
            images=[ProductImage(url=image["url"], key=image["key"]) for image in images],
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=product.id,
                seller_id=seller_id,
                name=name,
                category=category,
                price=price,
                stock=stock,
                created_at=now,
            )
        )
        return product

    def update_details(self, name=None, description=None, price=None, category=None, stock=None):
        from catalogue.product.events import ProductUpdated

        if name is not None:
            self.name = name
        if description is not None:
            self.description = description
        if price is not None:
            self.price = price
        if category is not None:
            self.category = category
        if stock is not None:
            self.stock = stock

        self.updated_at = datetime.now()

        self.raise_(
            ProductUpdated(
                product_id=self.id,
                name=self.name,
                category=self.category,
                price=self.price,
                stock=self.stock,
            )
        )

    def image_keys(self):
        return [image.key for image in self.images]

    def replace_images(self, images):
        """Swap the whole image list; returns the storage keys that were dropped."""
        from catalogue.product.events import ProductImagesReplaced

        if not images:
            raise ValidationError({"images": ["Please provide at least one product image"]})

        retired = self.image_keys()
        with atomic_change(self):
            for image in list(self.images):
                self.remove_images(image)
            for image in images:
                self.add_images(ProductImage(url=image["url"], key=image["key"]))

        self.updated_at = datetime.now()
        self.raise_(
            ProductImagesReplaced(
                product_id=self.id,
                image_count=len(self.images),
                retired_keys=", ".join(retired),
            )
        )
        return retired

    # ------------------------------------------------------------------
    # Reviews
    # ------------------------------------------------------------------
    def review_by(self, user_id):
        return next((r for r in self.reviews if str(r.user_id) == str(user_id)), None)

    def find_review(self, review_id):
        review = next((r for r in self.reviews if str(r.id) == str(review_id)), None)
        if review is None:
            raise NotFound("Review not found")
        return review

    def _recalculate_rating(self):
        count = len(self.reviews)
        self.num_of_reviews = count
        self.ratings = sum(r.rating for r in self.reviews) / count if count else 0.0

    def add_or_update_review(self, user_id, name, rating, comment):
        """Record ``user_id``'s review, overwriting their earlier one if present."""
        from catalogue.product.events import ReviewRevised, ReviewSubmitted

        now = datetime.now()
        existing = self.review_by(user_id)

        with atomic_change(self):
            if existing is not None:
                existing.rating = rating
                existing.comment = comment
                existing.updated_at = now
                review = existing
            else:
                review = Review(
                    user_id=user_id,
                    name=name,
                    rating=rating,
                    comment=comment,
                    created_at=now,
                    updated_at=now,
                )
                self.add_reviews(review)
            self._recalculate_rating()

        event_cls = ReviewRevised if existing is not None else ReviewSubmitted
        self.raise_(
            event_cls(
                product_id=self.id,
                review_id=review.id,
                user_id=user_id,
                rating=rating,
                ratings=self.ratings,
                num_of_reviews=self.num_of_reviews,
            )
        )
        return review

    def delete_review(self, review_id):
        from catalogue.product.events import ReviewDeleted

        review = self.find_review(review_id)

        with atomic_change(self):
            self.remove_reviews(review)
            self._recalculate_rating()

        self.raise_(
            ReviewDeleted(
                product_id=self.id,
                review_id=review_id,
                ratings=self.ratings,
                num_of_reviews=self.num_of_reviews,
            )
        )

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------
    def release_stock(self, quantity, order_id=None):
        """Take ``quantity`` units off the shelf, never going below zero.

        Returns the shortfall: how many of the requested units were not in
        stock (0 unless the product was oversold).
        """
        from catalogue.product.events import StockReleased

        shortfall = max(0, quantity - self.stock)
        self.stock = max(0, self.stock - quantity)
        self.updated_at = datetime.now()

        self.raise_(
            StockReleased(
                product_id=self.id,
                order_id=order_id,
                quantity=quantity,
                remaining=self.stock,
                shortfall=shortfall,
            )
        )
        return shortfall
