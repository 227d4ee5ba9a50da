"""Repository for the Product aggregate with the catalogue's listing queries."""

from protean.utils.query import Q

from catalogue.domain import catalogue
from catalogue.product.product import Product
from shared.db import fetch_all

DEFAULT_PAGE_SIZE = 12


@catalogue.repository(part_of=Product)
class ProductRepository:
    def search(
        self,
        keyword=None,
        category=None,
        min_price=None,
        max_price=None,
        min_rating=None,
        page=1,
        limit=DEFAULT_PAGE_SIZE,
    ):
        """One page of products matching every given filter, newest first.

        ``keyword`` matches name or description, case-insensitively.
        Returns the Protean ResultSet, whose ``total`` counts every match.
        """
        query = self._dao.query
        if keyword:
            query = query.filter(Q(name__icontains=keyword) | Q(description__icontains=keyword))

        filters = {}
        if category:
            filters["category"] = category
        if min_price is not None:
            filters["price__gte"] = min_price
        if max_price is not None:
            filters["price__lte"] = max_price
        if min_rating is not None:
            filters["ratings__gte"] = min_rating
        if filters:
            query = query.filter(**filters)

        return query.order_by("-created_at").offset((page - 1) * limit).limit(limit).all()

    def by_seller(self, seller_id) -> list[Product]:
        return fetch_all(self._dao.query.filter(seller_id=str(seller_id)).order_by(["-created_at", "id"]))

    def remove(self, product: Product) -> None:
        self._dao.delete(product)
