"""Order placement: pricing against the catalogue, then the PlaceOrder command.

Prices always come from the catalogue at the moment of checkout; whatever
price a client remembers for a cart line is ignored. Pricing happens before
the command is processed so the catalogue is read outside the ordering unit
of work.
"""

import json

from protean import handle
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from ordering.catalogue import get_catalogue
from ordering.domain import logger, ordering
from ordering.order.order import Order
from shared.errors import NotFound


@ordering.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of priced item dicts
    shipping_info = Text(required=True)  # JSON: shipping dict
    payment_info = Text()  # JSON: payment dict


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        items = json.loads(command.items) if isinstance(command.items, str) else command.items
        shipping_info = (
            json.loads(command.shipping_info) if isinstance(command.shipping_info, str) else command.shipping_info
        )
        payment_info = (
            json.loads(command.payment_info) if isinstance(command.payment_info, str) else command.payment_info
        )

        order = Order.place(
            user_id=command.user_id,
            priced_items=items,
            shipping_info=shipping_info,
            payment_info=payment_info,
        )
        current_domain.repository_for(Order).add(order)
        return str(order.id)


def price_items(requested_items, catalogue=None):
    """Attach current catalogue name and price to each ``{product_id, quantity}``.

    Raises ``NotFound`` if any product id does not resolve; nothing is
    priced partially.
    """
    catalogue = catalogue or get_catalogue()
    products = catalogue.find_products([item["product_id"] for item in requested_items])

    priced = []
    for item in requested_items:
        product = products.get(str(item["product_id"]))
        if product is None:
            raise NotFound(f"Product not found: {item['product_id']}")
        priced.append(
            {
                "product_id": product.product_id,
                "name": product.name,
                "quantity": item["quantity"],
                "unit_price": product.price,
                "image_url": product.image_url,
            }
        )
    return priced


def place_order(user_id, items, shipping_info, payment_info=None, catalogue=None):
    """Price ``items`` and record the order; returns the new order's id."""
    priced = price_items(items, catalogue)
    order_id = current_domain.process(
        PlaceOrder(
            user_id=user_id,
            items=json.dumps(priced),
            shipping_info=json.dumps(shipping_info),
            payment_info=json.dumps(payment_info) if payment_info else None,
        ),
        asynchronous=False,
    )
    logger.info("order_placed", order_id=order_id, user_id=str(user_id), item_count=len(priced))
    return order_id
