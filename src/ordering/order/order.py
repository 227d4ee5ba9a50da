"""Order aggregate (CQRS): a placed checkout and its fulfilment status.

Items and prices are fixed when the order is placed; afterwards only the
status moves, forward only:

    PROCESSING → SHIPPED → DELIVERED
    PROCESSING → DELIVERED

DELIVERED is terminal.
"""

from datetime import datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, ValueObject

from ordering.domain import ordering
from shared.errors import Conflict


class OrderStatus(Enum):
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"


# State machine transition map
_VALID_TRANSITIONS = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.DELIVERED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),  # Terminal
}


class OrderAlreadyDelivered(Conflict):
    default_message = "You have already delivered this order"


@ordering.value_object(part_of="Order")
class ShippingInfo:
    """Where the order goes and how to reach the recipient."""

    address = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    phone_number = String(required=True, max_length=20)
    postal_code = String(required=True, max_length=20)
    country = String(required=True, max_length=100)

    @invariant.post
    def fields_must_not_be_blank(self):
        blank = [
            name
            for name in ("address", "city", "phone_number", "postal_code", "country")
            if not (getattr(self, name) or "").strip()
        ]
        if blank:
            raise ValidationError({name: ["must not be empty"] for name in blank})


@ordering.value_object(part_of="Order")
class PaymentInfo:
    """Payment descriptor submitted by the client, stored as given."""

    transaction_id = String(max_length=255)
    status = String(max_length=50)
    method = String(max_length=50)


@ordering.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    quantity = Integer(required=True, min_value=1)
    unit_price = Float(required=True, min_value=0.0)
    image_url = String(max_length=500)


@ordering.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_info = ValueObject(ShippingInfo, required=True)
    payment_info = ValueObject(PaymentInfo)
    total_amount = Float(required=True, min_value=0.0)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    created_at = DateTime()
    delivered_at = DateTime()

    @invariant.post
    def order_must_have_items(self):
        if not self.items:
            raise ValidationError({"items": ["An order needs at least one item"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, priced_items, shipping_info, payment_info=None):
        """Create an order from items already priced against the catalogue.

        Args:
            user_id: The user checking out.
            priced_items: List of dicts with product_id, name, quantity,
                          unit_price and optionally image_url.
            shipping_info: Dict with address, city, phone_number,
                           postal_code, country.
            payment_info: Dict with transaction_id, status and optionally method.
        """
        from ordering.order.events import OrderPlaced

        now = datetime.now()
        items = [OrderItem(**item) for item in priced_items]
        order = cls(
            user_id=user_id,
            items=items,
            shipping_info=ShippingInfo(**shipping_info),
            payment_info=PaymentInfo(**payment_info) if payment_info else None,
            total_amount=cls.total_of(items),
            status=OrderStatus.PROCESSING.value,
            created_at=now,
        )
        order.raise_(
            OrderPlaced(
                order_id=order.id,
                user_id=user_id,
                item_count=len(items),
                total_amount=order.total_amount,
                placed_at=now,
            )
        )
        return order

    @staticmethod
    def total_of(items):
        return round(sum(item.unit_price * item.quantity for item in items), 2)

    # -------------------------------------------------------------------
    # Status
    # -------------------------------------------------------------------
    def _assert_can_transition(self, target_status):
        current = OrderStatus(self.status)
        if current == OrderStatus.DELIVERED:
            raise OrderAlreadyDelivered()
        if target_status not in _VALID_TRANSITIONS.get(current, set()):
            raise ValidationError({"status": [f"Cannot transition from {current.value} to {target_status.value}"]})

    def update_status(self, status):
        """Move the order forward; returns True when it just left Processing."""
        from ordering.order.events import OrderStatusChanged

        target = OrderStatus(status)
        self._assert_can_transition(target)

        previous = OrderStatus(self.status)
        now = datetime.now()
        self.status = target.value
        if target == OrderStatus.DELIVERED:
            self.delivered_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.id,
                previous_status=previous.value,
                status=target.value,
                changed_at=now,
            )
        )
        return previous == OrderStatus.PROCESSING

