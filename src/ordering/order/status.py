"""Order status updates: command, handler and the stock release that follows.

The first transition out of Processing takes the ordered units off the
catalogue's shelves. That is a second write, made after the order's own
write has committed, and it is not rolled back if it fails.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from ordering.catalogue import get_catalogue
from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(required=True, max_length=20)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        """Returns the ``(product_id, quantity)`` lines whose stock is now due."""
        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        left_processing = order.update_status(command.status)
        repo.add(order)

        if not left_processing:
            return []
        return [(str(item.product_id), item.quantity) for item in order.items]


def change_status(order_id, status, catalogue=None):
    """Apply a status update, then release stock if it is due."""
    due = current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
    if not due:
        return

    catalogue = catalogue or get_catalogue()
    for product_id, quantity in due:
        try:
            catalogue.release_stock(product_id, quantity, order_id=order_id)
        except ObjectNotFoundError:
            logger.warning("stock_release_skipped", order_id=str(order_id), product_id=product_id)
    logger.info("order_stock_released", order_id=str(order_id), lines=len(due))
