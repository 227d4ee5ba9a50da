"""Catalogue adapter backed by the in-process catalogue domain.

Each call runs inside the catalogue's own domain context, so it must be made
outside any ordering unit of work.
"""

from protean.exceptions import ObjectNotFoundError

from ordering.catalogue.port import CataloguePort, ProductSnapshot


def _snapshot(product) -> ProductSnapshot:
    return ProductSnapshot(
        product_id=str(product.id),
        name=product.name,
        price=product.price,
        stock=product.stock,
        seller_id=str(product.seller_id),
        image_url=product.images[0].url if product.images else None,
    )


class DomainCatalogue(CataloguePort):
    def __init__(self, domain=None):
        if domain is None:
            from catalogue.domain import catalogue as domain
        self.domain = domain

    def find_products(self, product_ids) -> dict[str, ProductSnapshot]:
        from catalogue.product.product import Product

        found = {}
        with self.domain.domain_context():
            repo = self.domain.repository_for(Product)
            for product_id in dict.fromkeys(str(pid) for pid in product_ids):
                try:
                    found[product_id] = _snapshot(repo.get(product_id))
                except ObjectNotFoundError:
                    continue
        return found

    def seller_products(self, seller_id) -> dict[str, ProductSnapshot]:
        from catalogue.product.product import Product

        with self.domain.domain_context():
            products = self.domain.repository_for(Product).by_seller(seller_id)
            return {str(product.id): _snapshot(product) for product in products}

    def release_stock(self, product_id, quantity: int, order_id=None) -> int:
        from catalogue.product.stock import ReleaseStock

        with self.domain.domain_context():
            return self.domain.process(
                ReleaseStock(product_id=str(product_id), quantity=quantity, order_id=order_id),
                asynchronous=False,
            )
