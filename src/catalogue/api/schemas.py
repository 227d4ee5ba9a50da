"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from catalogue.product.product import Category
from catalogue.product.repository import DEFAULT_PAGE_SIZE
from shared.validation import NonEmptyStr, bounded_text

ProductName = bounded_text(100)
LongText = bounded_text(2000)
ImageUrl = bounded_text(500)
StorageKey = bounded_text(255)

# --- Request Schemas ---


class ImageRequest(BaseModel):
    url: ImageUrl
    key: StorageKey


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Noise-cancelling headphones",
                    "description": "Over-ear, 30 hour battery",
                    "price": 199.99,
                    "category": "Headphones",
                    "stock": 25,
                    "images": [{"url": "https://cdn.example.com/p/1.jpg", "key": "products/1.jpg"}],
                }
            ]
        }
    }

    name: ProductName
    description: LongText
    price: float = Field(..., ge=0)
    category: Category
    stock: int = Field(0, ge=0)
    images: list[ImageRequest] = Field(..., min_length=1, max_length=5)


class UpdateProductRequest(BaseModel):
    name: ProductName | None = None
    description: LongText | None = None
    price: float | None = Field(None, ge=0)
    category: Category | None = None
    stock: int | None = Field(None, ge=0)
    images: list[ImageRequest] | None = Field(None, min_length=1, max_length=5)


class ProductFilters(BaseModel):
    keyword: str | None = Field(None, max_length=100)
    category: Category | None = None
    min_price: float | None = Field(None, ge=0)
    max_price: float | None = Field(None, ge=0)
    rating: float | None = Field(None, ge=0, le=5)
    page: int = Field(1, ge=1)
    limit: int = Field(DEFAULT_PAGE_SIZE, ge=1, le=100)


class ReviewRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"rating": 4, "comment": "Great sound, a bit heavy"}]}}

    rating: int = Field(..., ge=1, le=5)
    comment: LongText


class ReviewQuery(BaseModel):
    model_config = {"populate_by_name": True}

    review_id: NonEmptyStr = Field(..., alias="reviewId")


# --- Response Schemas ---


class ImageResponse(BaseModel):
    url: str
    key: str


class ReviewResponse(BaseModel):
    id: str
    user_id: str
    name: str
    rating: int
    comment: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_review(cls, review) -> ReviewResponse:
        return cls(
            id=str(review.id),
            user_id=str(review.user_id),
            name=review.name,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
            updated_at=review.updated_at,
        )


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    stock: int
    category: str
    seller_id: str
    images: list[ImageResponse]
    ratings: float
    num_of_reviews: int
    reviews: list[ReviewResponse]
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            category=product.category,
            seller_id=str(product.seller_id),
            images=[ImageResponse(url=image.url, key=image.key) for image in product.images],
            ratings=product.ratings,
            num_of_reviews=product.num_of_reviews,
            reviews=[ReviewResponse.from_review(review) for review in product.reviews],
            created_at=product.created_at,
        )


class ProductEnvelope(BaseModel):
    success: bool = True
    product: ProductResponse


class ProductPage(BaseModel):
    success: bool = True
    products: list[ProductResponse]
    page: int
    pages: int
    total: int


class ProductList(BaseModel):
    success: bool = True
    count: int
    products: list[ProductResponse]


class ReviewList(BaseModel):
    success: bool = True
    reviews: list[ReviewResponse]


class StatusResponse(BaseModel):
    success: bool = True
    message: str | None = None
