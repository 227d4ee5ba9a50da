"""Tests for the client-side shopping cart."""

import json

import pytest
from ordering.cart.cart import Cart, CartLine
from ordering.cart.storage import CART_KEY, InMemoryCartStorage
from ordering.catalogue.port import ProductSnapshot

PRODUCT_A = {"product_id": "A", "name": "Mug", "price": 10.0, "stock": 5}
PRODUCT_B = {"product_id": "B", "name": "Coaster", "price": 5.0, "stock": 3}


@pytest.fixture()
def storage():
    return InMemoryCartStorage()


@pytest.fixture()
def cart(storage):
    return Cart(storage)


class TestAddingItems:
    def test_totals(self, cart):
        cart.add_item(PRODUCT_A, 2)
        cart.add_item(PRODUCT_B, 1)
        assert cart.total() == 25.0
        assert cart.count() == 3

        cart.remove_item("A")
        assert cart.total() == 5.0

    def test_add_records_product_snapshot(self, cart):
        assert cart.add_item(PRODUCT_A, 2) is True
        line = cart.lines[0]
        assert line == CartLine(product_id="A", name="Mug", price=10.0, quantity=2, stock=5)

    def test_add_accepts_objects_with_attributes(self, cart):
        snapshot = ProductSnapshot(product_id="C", name="Kettle", price=30.0, stock=2, seller_id="seller-1")
        cart.add_item(snapshot)
        assert cart.is_in_cart("C")
        assert cart.lines[0].seller_id == "seller-1"

    def test_adding_again_increases_quantity(self, cart):
        cart.add_item(PRODUCT_A, 2)
        cart.add_item(PRODUCT_A, 1)
        assert cart.item_quantity("A") == 3
        assert len(cart.lines) == 1

    def test_adding_past_recorded_stock_is_dropped(self, cart):
        cart.add_item(PRODUCT_A, 4)
        assert cart.add_item(PRODUCT_A, 2) is False
        assert cart.item_quantity("A") == 4

    @pytest.mark.parametrize("quantity", [0, -1])
    def test_non_positive_quantity_changes_nothing(self, cart, storage, quantity):
        assert cart.add_item(PRODUCT_A, quantity) is False
        assert cart.lines == ()
        assert CART_KEY not in storage.values


class TestUpdatingQuantities:
    def test_update_quantity(self, cart):
        cart.add_item(PRODUCT_A, 1)
        assert cart.update_quantity("A", 4) is True
        assert cart.item_quantity("A") == 4

    def test_update_to_zero_removes_line(self, cart):
        cart.add_item(PRODUCT_A, 1)
        assert cart.update_quantity("A", 0) is True
        assert not cart.is_in_cart("A")

    def test_update_above_stock_leaves_storage_untouched(self, cart, storage):
        cart.add_item(PRODUCT_A, 2)
        before = storage.values[CART_KEY]

        assert cart.update_quantity("A", 6) is False

        assert storage.values[CART_KEY] == before
        assert cart.item_quantity("A") == 2

    def test_update_unknown_product(self, cart):
        assert cart.update_quantity("missing", 1) is False

    def test_remove_unknown_product(self, cart):
        assert cart.remove_item("missing") is False


class TestPersistence:
    def test_every_change_is_written_through(self, cart, storage):
        cart.add_item(PRODUCT_A, 2)
        stored = json.loads(storage.values[CART_KEY])
        assert stored[0]["product_id"] == "A"
        assert stored[0]["quantity"] == 2

    def test_cart_reloads_from_storage(self, cart, storage):
        cart.add_item(PRODUCT_A, 2)
        cart.add_item(PRODUCT_B, 1)

        reloaded = Cart(storage)
        assert reloaded.lines == cart.lines
        assert reloaded.total() == 25.0

    @pytest.mark.parametrize(
        "document",
        [
            "{not json",
            json.dumps({"product_id": "A"}),
            json.dumps([{"product_id": "A", "name": "Mug"}]),
            json.dumps([{"product_id": "A", "name": "Mug", "price": "ten", "quantity": 1, "stock": 5}]),
            json.dumps([{"product_id": "A", "name": "Mug", "price": 10.0, "quantity": 0, "stock": 5}]),
        ],
    )
    def test_malformed_storage_is_discarded(self, document):
        storage = InMemoryCartStorage({CART_KEY: document})
        cart = Cart(storage)
        assert cart.lines == ()
        assert CART_KEY not in storage.values

    def test_clear_empties_cart(self, cart, storage):
        cart.add_item(PRODUCT_A, 1)
        assert cart.clear() is True
        assert cart.lines == ()
        assert json.loads(storage.values[CART_KEY]) == []


class TestCheckout:
    def test_checkout_items(self, cart):
        cart.add_item(PRODUCT_A, 2)
        cart.add_item(PRODUCT_B, 1)
        assert cart.checkout_items() == [
            {"product": "A", "quantity": 2},
            {"product": "B", "quantity": 1},
        ]
