"""FastAPI endpoints for the Catalogue domain."""

import json
import math

from fastapi import APIRouter, Depends, Request
from protean.utils.globals import current_domain

from catalogue.api.schemas import (
    CreateProductRequest,
    ProductEnvelope,
    ProductFilters,
    ProductList,
    ProductPage,
    ProductResponse,
    ReviewList,
    ReviewQuery,
    ReviewRequest,
    ReviewResponse,
    StatusResponse,
    UpdateProductRequest,
)
from catalogue.images import discard_images
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.product import Product
from catalogue.product.removal import DeleteProduct
from catalogue.product.reviews import DeleteReview, SubmitReview
from shared.access import Permission, Principal, requires
from shared.errors import PermissionDenied
from shared.validation import read_payload, require_valid

product_router = APIRouter(prefix="/products", tags=["products"])


def _require_control(principal: Principal, product, message: str) -> None:
    """Admins may manage any product, sellers only their own."""
    if principal.can(Permission.MANAGE_ALL_PRODUCTS):
        return
    if principal.can(Permission.MANAGE_OWN_PRODUCTS) and principal.owns(product.seller_id):
        return
    raise PermissionDenied(message)


def _images_json(images):
    return json.dumps([image.model_dump() for image in images])


# --- Listing endpoints ---


@product_router.get("", response_model=ProductPage)
async def list_products(request: Request) -> ProductPage:
    filters = require_valid(ProductFilters, dict(request.query_params))
    results = current_domain.repository_for(Product).search(
        keyword=filters.keyword,
        category=filters.category.value if filters.category else None,
        min_price=filters.min_price,
        max_price=filters.max_price,
        min_rating=filters.rating,
        page=filters.page,
        limit=filters.limit,
    )
    return ProductPage(
        products=[ProductResponse.from_product(product) for product in results.items],
        page=filters.page,
        pages=math.ceil(results.total / filters.limit),
        total=results.total,
    )


@product_router.get("/seller/products", response_model=ProductList)
async def seller_products(
    principal: Principal = Depends(requires(Permission.MANAGE_OWN_PRODUCTS)),
) -> ProductList:
    products = current_domain.repository_for(Product).by_seller(principal.user_id)
    return ProductList(
        count=len(products),
        products=[ProductResponse.from_product(product) for product in products],
    )


@product_router.get("/reviews/{product_id}", response_model=ReviewList)
async def list_reviews(product_id: str) -> ReviewList:
    product = current_domain.repository_for(Product).get(product_id)
    return ReviewList(reviews=[ReviewResponse.from_review(review) for review in product.reviews])


@product_router.get("/{product_id}", response_model=ProductEnvelope)
async def get_product(product_id: str) -> ProductEnvelope:
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(product=ProductResponse.from_product(product))


# --- Management endpoints ---


@product_router.post("/new", status_code=201, response_model=ProductEnvelope)
async def create_product(
    request: Request, principal: Principal = Depends(requires(Permission.MANAGE_OWN_PRODUCTS))
) -> ProductEnvelope:
    body = require_valid(CreateProductRequest, await read_payload(request))
    command = CreateProduct(
        seller_id=principal.user_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category.value,
        stock=body.stock,
        images=_images_json(body.images),
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(product=ProductResponse.from_product(product))


@product_router.put("/{product_id}", response_model=ProductEnvelope)
async def update_product(
    product_id: str, request: Request, principal: Principal = Depends(requires(Permission.MANAGE_OWN_PRODUCTS))
) -> ProductEnvelope:
    body = require_valid(UpdateProductRequest, await read_payload(request))
    repo = current_domain.repository_for(Product)
    _require_control(principal, repo.get(product_id), "You can only update your own products")

    command = UpdateProduct(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category.value if body.category else None,
        stock=body.stock,
        images=_images_json(body.images) if body.images else None,
    )
    retired = current_domain.process(command, asynchronous=False)
    discard_images(retired or [])
    return ProductEnvelope(product=ProductResponse.from_product(repo.get(product_id)))


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(
    product_id: str, principal: Principal = Depends(requires(Permission.MANAGE_OWN_PRODUCTS))
) -> StatusResponse:
    product = current_domain.repository_for(Product).get(product_id)
    _require_control(principal, product, "You can only delete your own products")

    image_keys = current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    discard_images(image_keys or [])
    return StatusResponse(message="Product deleted")


# --- Review endpoints ---


@product_router.put("/review/{product_id}", response_model=ProductEnvelope)
async def review_product(
    product_id: str, request: Request, principal: Principal = Depends(requires(Permission.WRITE_REVIEWS))
) -> ProductEnvelope:
    body = require_valid(ReviewRequest, await read_payload(request))
    command = SubmitReview(
        product_id=product_id,
        user_id=principal.user_id,
        name=principal.name,
        rating=body.rating,
        comment=body.comment,
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return ProductEnvelope(product=ProductResponse.from_product(product))


@product_router.delete("/reviews/{product_id}", response_model=ProductEnvelope)
async def delete_review(
    product_id: str, request: Request, principal: Principal = Depends(requires(Permission.WRITE_REVIEWS))
) -> ProductEnvelope:
    query = require_valid(ReviewQuery, dict(request.query_params))
    repo = current_domain.repository_for(Product)
    review = repo.get(product_id).find_review(query.review_id)
    principal.require_owner_or(
        review.user_id, Permission.MODERATE_REVIEWS, "You can only delete your own reviews"
    )

    current_domain.process(DeleteReview(product_id=product_id, review_id=query.review_id), asynchronous=False)
    return ProductEnvelope(product=ProductResponse.from_product(repo.get(product_id)))
