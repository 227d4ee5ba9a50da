"""Catalogue port: what ordering needs to know about products.

Ordering never reads catalogue aggregates directly. Adapters translate
catalogue records into ``ProductSnapshot`` values and carry stock releases
back to the catalogue.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductSnapshot:
    """A product as ordering sees it at one point in time."""

    product_id: str
    name: str
    price: float
    stock: int
    seller_id: str
    image_url: str | None = None


class CataloguePort(ABC):
    """Abstract interface for catalogue adapters."""

    @abstractmethod
    def find_products(self, product_ids) -> dict[str, ProductSnapshot]:
        """Look up products by id.

        Returns:
            dict keyed by product id; ids that do not resolve are absent.
        """
        ...

    @abstractmethod
    def seller_products(self, seller_id) -> dict[str, ProductSnapshot]:
        """All products listed by ``seller_id``, keyed by product id."""
        ...

    @abstractmethod
    def release_stock(self, product_id, quantity: int, order_id=None) -> int:
        """Take ``quantity`` units of a product off the shelf.

        Returns:
            the remaining stock, never below zero.
        """
        ...
