"""Read-side summaries of orders for administrators and sellers."""

from dataclasses import dataclass

from protean.utils.globals import current_domain

from ordering.catalogue import get_catalogue
from ordering.order.order import Order

RECENT_ORDERS_LIMIT = 10


@dataclass(frozen=True)
class SellerStats:
    total_products: int
    total_orders: int
    total_revenue: float
    total_customers: int


def all_orders():
    """Every order, newest first, and the sum of their totals."""
    orders = current_domain.repository_for(Order).newest_first()
    return orders, round(sum(order.total_amount for order in orders), 2)


def seller_stats(seller_id, catalogue=None) -> SellerStats:
    """Sales figures for one seller's products.

    Each order line for one of the seller's products counts as an order;
    revenue is valued at the product's current price.
    """
    products = (catalogue or get_catalogue()).seller_products(seller_id)

    total_orders = 0
    revenue = 0.0
    customers = set()
    for order in current_domain.repository_for(Order).newest_first():
        for item in order.items:
            product = products.get(str(item.product_id))
            if product is None:
                continue
            total_orders += 1
            revenue += product.price * item.quantity
            customers.add(str(order.user_id))

    return SellerStats(
        total_products=len(products),
        total_orders=total_orders,
        total_revenue=round(revenue, 2),
        total_customers=len(customers),
    )


def seller_recent_orders(seller_id, catalogue=None, limit=RECENT_ORDERS_LIMIT):
    """Latest orders containing the seller's products, with only those lines.

    Returns a list of ``(order, lines)`` pairs.
    """
    product_ids = set((catalogue or get_catalogue()).seller_products(seller_id))

    recent = []
    for order in current_domain.repository_for(Order).newest_first():
        lines = [item for item in order.items if str(item.product_id) in product_ids]
        if lines:
            recent.append((order, lines))
        if len(recent) == limit:
            break
    return recent
