"""Repository for the Order aggregate with the reporting queries."""

from ordering.domain import ordering
from ordering.order.order import Order
from shared.db import fetch_all

NEWEST_FIRST = ["-created_at", "id"]


@ordering.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        return fetch_all(self._dao.query.filter(user_id=str(user_id)).order_by(NEWEST_FIRST))

    def newest_first(self) -> list[Order]:
        return fetch_all(self._dao.query.order_by(NEWEST_FIRST))
