"""Shared BDD fixtures and step definitions for the shopping cart."""

import json

import pytest
from ordering.cart.cart import Cart
from ordering.cart.storage import CART_KEY, InMemoryCartStorage
from pytest_bdd import given, parsers, then


@pytest.fixture()
def storage():
    return InMemoryCartStorage()


@pytest.fixture()
def cart(storage):
    return Cart(storage)


@pytest.fixture()
def catalogue_products():
    """Products by id, as the cart would have seen them in the catalogue."""
    return {}


@pytest.fixture()
def outcome():
    """Holds the return value of the last cart operation and the stored document before it."""
    return {}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{product_id}" priced {price:g} with {stock:d} in stock'))
def catalogue_product(catalogue_products, product_id, price, stock):
    catalogue_products[product_id] = {
        "product_id": product_id,
        "name": f"Product {product_id}",
        "price": float(price),
        "stock": stock,
    }


@given("an empty cart")
def empty_cart(cart):
    assert cart.lines == ()


@given(parsers.cfparse('the cart holds {quantity:d} of "{product_id}"'))
def cart_holds(cart, catalogue_products, product_id, quantity):
    assert cart.add_item(catalogue_products[product_id], quantity)


@given(parsers.cfparse("the stored cart is {document}"))
def stored_cart(storage, document):
    storage.save(document)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:g}"))
def cart_total(cart, total):
    assert cart.total() == pytest.approx(total)


@then(parsers.cfparse('the cart holds {quantity:d} of "{product_id}" now'))
def cart_holds_now(cart, product_id, quantity):
    assert cart.item_quantity(product_id) == quantity


@then(parsers.cfparse('"{product_id}" is not in the cart'))
def not_in_cart(cart, product_id):
    assert not cart.is_in_cart(product_id)


@then("the cart is empty")
def cart_is_empty(cart):
    assert cart.lines == ()


@then("the cart reports no change")
def no_change(outcome):
    assert outcome["changed"] is False


@then("the stored cart is unchanged")
def storage_unchanged(storage, outcome):
    assert storage.values.get(CART_KEY) == outcome["stored_before"]


@then(parsers.cfparse("the checkout payload has {count:d} lines"))
def checkout_payload(cart, count):
    items = cart.checkout_items()
    assert len(items) == count
    assert json.loads(json.dumps(items)) == items
