"""Client-side shopping cart.

The cart is a list of lines kept in a ``CartStorage``. It reloads from the
storage when constructed and writes the whole line list back after every
change. Nothing here talks to the server; ``checkout_items`` produces the
payload that is submitted when the order is placed.

Rules:
    - Adding a non-positive quantity changes nothing.
    - A product's first addition is trusted as given and records the
      product's current stock on the line.
    - Later additions and quantity updates may not take a line above that
      recorded stock; such a change is dropped and the cart stays as it was.
    - Updating a quantity to zero or less removes the line.

Mutating methods return True when the cart changed and False otherwise.
"""

import json
from collections.abc import Mapping
from dataclasses import asdict, dataclass, replace

import structlog

from ordering.cart.storage import CartStorage, InMemoryCartStorage

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CartLine:
    product_id: str
    name: str
    price: float
    quantity: int
    stock: int
    seller_id: str | None = None
    image_url: str | None = None

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


class MalformedCart(ValueError):
    """The stored cart document could not be read back into lines."""


def _line_from_document(entry) -> CartLine:
    if not isinstance(entry, dict):
        raise MalformedCart(f"cart line must be an object, got {type(entry).__name__}")
    try:
        line = CartLine(
            product_id=str(entry["product_id"]),
            name=str(entry["name"]),
            price=float(entry["price"]),
            quantity=int(entry["quantity"]),
            stock=int(entry["stock"]),
            seller_id=entry.get("seller_id"),
            image_url=entry.get("image_url"),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedCart(f"unreadable cart line: {exc}") from exc
    if line.quantity < 1:
        raise MalformedCart("cart line quantity must be positive")
    return line


def _field(product, *names, default=None):
    for name in names:
        if isinstance(product, Mapping):
            if name in product:
                return product[name]
        elif hasattr(product, name):
            return getattr(product, name)
    return default


class Cart:
    """A shopping cart over an injectable storage."""

    def __init__(self, storage: CartStorage | None = None):
        self.storage = storage if storage is not None else InMemoryCartStorage()
        self._lines: list[CartLine] = self._restore()

    # -------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------
    def _restore(self) -> list[CartLine]:
        document = self.storage.load()
        if document is None:
            return []
        try:
            entries = json.loads(document)
            if not isinstance(entries, list):
                raise MalformedCart("cart document must be a list of lines")
            return [_line_from_document(entry) for entry in entries]
        except (ValueError, TypeError) as exc:
            logger.warning("cart_discarded", reason=str(exc))
            self.storage.clear()
            return []

    def _persist(self) -> None:
        self.storage.save(json.dumps([asdict(line) for line in self._lines]))

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def lines(self) -> tuple[CartLine, ...]:
        return tuple(self._lines)

    def _find(self, product_id):
        return next((line for line in self._lines if line.product_id == str(product_id)), None)

    def is_in_cart(self, product_id) -> bool:
        return self._find(product_id) is not None

    def item_quantity(self, product_id) -> int:
        line = self._find(product_id)
        return line.quantity if line else 0

    def total(self) -> float:
        return sum(line.subtotal for line in self._lines)

    def count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def checkout_items(self) -> list[dict]:
        """The ``[{product, quantity}]`` list submitted when placing an order."""
        return [{"product": line.product_id, "quantity": line.quantity} for line in self._lines]

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def _replace_line(self, product_id, new_line) -> None:
        self._lines = [new_line if line.product_id == str(product_id) else line for line in self._lines]

    def add_item(self, product, quantity: int = 1) -> bool:
        """Add ``quantity`` units of ``product`` (a mapping or an object with attributes)."""
        if quantity <= 0:
            return False

        product_id = str(_field(product, "product_id", "id"))
        existing = self._find(product_id)
        if existing is not None:
            new_quantity = existing.quantity + quantity
            if new_quantity > existing.stock:
                logger.info("cart_add_over_stock", product_id=product_id, requested=new_quantity)
                return False
            self._replace_line(product_id, replace(existing, quantity=new_quantity))
        else:
            self._lines.append(
                CartLine(
                    product_id=product_id,
                    name=_field(product, "name"),
                    price=float(_field(product, "price")),
                    quantity=quantity,
                    stock=int(_field(product, "stock", default=0)),
                    seller_id=_field(product, "seller_id", "seller"),
                    image_url=_field(product, "image_url", "image"),
                )
            )

        self._persist()
        return True

    def update_quantity(self, product_id, new_quantity: int) -> bool:
        if new_quantity <= 0:
            return self.remove_item(product_id)

        line = self._find(product_id)
        if line is None or new_quantity > line.stock:
            return False
        if new_quantity == line.quantity:
            return False

        self._replace_line(product_id, replace(line, quantity=new_quantity))
        self._persist()
        return True

    def remove_item(self, product_id) -> bool:
        if not self.is_in_cart(product_id):
            return False
        self._lines = [line for line in self._lines if line.product_id != str(product_id)]
        self._persist()
        return True

    def clear(self) -> bool:
        had_lines = bool(self._lines)
        self._lines = []
        self._persist()
        return had_lines
