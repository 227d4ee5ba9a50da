"""Application tests for the ReleaseStock command."""

import json

from catalogue.product.creation import CreateProduct
from catalogue.product.product import Product
from catalogue.product.stock import ReleaseStock
from protean import current_domain


def _create(stock):
    return current_domain.process(
        CreateProduct(
            seller_id="seller-1",
            name="Running Shoes",
            description="Road shoes",
            price=120.0,
            category="Clothes/Shoes",
            stock=stock,
            images=json.dumps([{"url": "https://cdn.example.com/shoe.jpg", "key": "shoe.jpg"}]),
        ),
        asynchronous=False,
    )


class TestReleaseStock:
    def test_returns_remaining_stock(self):
        product_id = _create(stock=8)
        remaining = current_domain.process(
            ReleaseStock(product_id=product_id, quantity=3, order_id="order-1"), asynchronous=False
        )
        assert remaining == 5
        assert current_domain.repository_for(Product).get(product_id).stock == 5

    def test_oversold_product_stops_at_zero(self):
        product_id = _create(stock=1)
        remaining = current_domain.process(ReleaseStock(product_id=product_id, quantity=4), asynchronous=False)
        assert remaining == 0
        assert current_domain.repository_for(Product).get(product_id).stock == 0
