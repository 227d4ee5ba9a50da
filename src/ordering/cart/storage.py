"""Cart storage port and adapters.

A storage holds one serialized document under a well-known key, the way a
browser's local storage would. The cart decides what the document means;
storages only keep it.
"""

import json
from abc import ABC, abstractmethod
from pathlib import Path

CART_KEY = "cart"


class CartStorage(ABC):
    """Abstract interface for cart storage adapters."""

    @abstractmethod
    def load(self) -> str | None:
        """Return the stored cart document, or None if nothing is stored."""
        ...

    @abstractmethod
    def save(self, document: str) -> None:
        """Replace the stored cart document."""
        ...

    @abstractmethod
    def clear(self) -> None:
        """Forget the stored cart document."""
        ...


class InMemoryCartStorage(CartStorage):
    def __init__(self, initial: dict | None = None):
        self.values = dict(initial or {})

    def load(self) -> str | None:
        return self.values.get(CART_KEY)

    def save(self, document: str) -> None:
        self.values[CART_KEY] = document

    def clear(self) -> None:
        self.values.pop(CART_KEY, None)


class JsonFileCartStorage(CartStorage):
    """Keeps the cart document under the ``cart`` key of a JSON file.

    Other keys in the file are left untouched.
    """

    def __init__(self, path):
        self.path = Path(path)

    def _read_all(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            values = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError:
            return {}
        return values if isinstance(values, dict) else {}

    def _write_all(self, values: dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(values), encoding="utf-8")

    def load(self) -> str | None:
        document = self._read_all().get(CART_KEY)
        return document if isinstance(document, str) else None

    def save(self, document: str) -> None:
        values = self._read_all()
        values[CART_KEY] = document
        self._write_all(values)

    def clear(self) -> None:
        values = self._read_all()
        if values.pop(CART_KEY, None) is not None:
            self._write_all(values)
