"""Fake catalogue: an in-memory product table for tests and development."""

from dataclasses import replace

from ordering.catalogue.port import CataloguePort, ProductSnapshot


class FakeCatalogue(CataloguePort):
    def __init__(self):
        self.products: dict[str, ProductSnapshot] = {}
        self.releases: list[tuple[str, int, str | None]] = []

    def stock(self, product_id, name, price, stock=10, seller_id="seller-1", image_url=None) -> ProductSnapshot:
        """Add or replace a product in the fake catalogue."""
        snapshot = ProductSnapshot(
            product_id=str(product_id),
            name=name,
            price=price,
            stock=stock,
            seller_id=str(seller_id),
            image_url=image_url,
        )
        self.products[snapshot.product_id] = snapshot
        return snapshot

    def find_products(self, product_ids) -> dict[str, ProductSnapshot]:
        return {str(pid): self.products[str(pid)] for pid in product_ids if str(pid) in self.products}

    def seller_products(self, seller_id) -> dict[str, ProductSnapshot]:
        return {pid: p for pid, p in self.products.items() if p.seller_id == str(seller_id)}

    def release_stock(self, product_id, quantity: int, order_id=None) -> int:
        self.releases.append((str(product_id), quantity, order_id))
        product = self.products.get(str(product_id))
        if product is None:
            return 0
        remaining = max(0, product.stock - quantity)
        self.products[product.product_id] = replace(product, stock=remaining)
        return remaining
