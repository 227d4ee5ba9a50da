"""Application tests for creating, editing and deleting products."""

import json

import pytest
from catalogue.product.creation import CreateProduct
from catalogue.product.details import UpdateProduct
from catalogue.product.product import Product
from catalogue.product.removal import DeleteProduct
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _create(seller_id="seller-1", name="Mirrorless Camera", images=None, **overrides):
    images = images or [{"url": "https://cdn.example.com/cam-1.jpg", "key": "cam-1.jpg"}]
    fields = {
        "seller_id": seller_id,
        "name": name,
        "description": "24MP body",
        "price": 899.0,
        "category": "Cameras",
        "stock": 5,
        "images": json.dumps(images),
    }
    fields.update(overrides)
    return current_domain.process(CreateProduct(**fields), asynchronous=False)


class TestCreateProduct:
    def test_create_persists_product(self):
        product_id = _create()
        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Mirrorless Camera"
        assert product.seller_id == "seller-1"
        assert product.image_keys() == ["cam-1.jpg"]

    def test_create_without_images_fails(self):
        with pytest.raises(ValidationError):
            current_domain.process(
                CreateProduct(
                    seller_id="seller-1",
                    name="No Pictures",
                    description="Nothing to see",
                    price=1.0,
                    category="Books",
                    images="[]",
                ),
                asynchronous=False,
            )


class TestUpdateProduct:
    def test_partial_update(self):
        product_id = _create()
        current_domain.process(UpdateProduct(product_id=product_id, price=799.0), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 799.0
        assert product.name == "Mirrorless Camera"
        assert product.stock == 5

    def test_replacing_images_returns_retired_keys(self, image_store):
        product_id = _create(
            images=[
                {"url": "https://cdn.example.com/a.jpg", "key": "a.jpg"},
                {"url": "https://cdn.example.com/b.jpg", "key": "b.jpg"},
            ]
        )
        retired = current_domain.process(
            UpdateProduct(
                product_id=product_id,
                images=json.dumps([{"url": "https://cdn.example.com/c.jpg", "key": "c.jpg"}]),
            ),
            asynchronous=False,
        )

        product = current_domain.repository_for(Product).get(product_id)
        assert product.image_keys() == ["c.jpg"]
        assert retired == ["a.jpg", "b.jpg"]
        assert image_store.deleted_keys == []

    def test_update_without_images_keeps_them(self, image_store):
        product_id = _create()
        retired = current_domain.process(UpdateProduct(product_id=product_id, stock=0), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert product.image_keys() == ["cam-1.jpg"]
        assert product.stock == 0
        assert retired == []

    def test_update_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(UpdateProduct(product_id="missing", price=1.0), asynchronous=False)


class TestDeleteProduct:
    def test_delete_removes_product_and_returns_image_keys(self, image_store):
        product_id = _create()
        image_keys = current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)
        assert image_keys == ["cam-1.jpg"]
        assert image_store.deleted_keys == []
