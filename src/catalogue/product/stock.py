"""Stock release after fulfilment: command and handler.

Stock is not reserved when an order is placed. It is taken off the shelf
once, when the order first moves out of Processing, and the write is separate
from the order's own.
"""

from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from catalogue.domain import catalogue, logger
from catalogue.product.product import Product


@catalogue.command(part_of="Product")
class ReleaseStock:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    order_id = Identifier()


@catalogue.command_handler(part_of=Product)
class ReleaseStockHandler:
    @handle(ReleaseStock)
    def release_stock(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        shortfall = product.release_stock(command.quantity, order_id=command.order_id)
        repo.add(product)

        if shortfall:
            logger.warning(
                "stock_oversold",
                product_id=str(command.product_id),
                order_id=str(command.order_id),
                requested=command.quantity,
                shortfall=shortfall,
            )
        return product.stock
