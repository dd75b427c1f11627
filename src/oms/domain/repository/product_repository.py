"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Concrete implementations (SQL, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from oms.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int, for_update: bool = False) -> Product | None:
        """Return a product by its ID, or None if not found.

        ``for_update`` asks the store to lock the row for the rest of the
        current transaction where it supports row locks.
        """

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> Product:
        """Persist a new product and assign its ID."""

    @abstractmethod
    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        """Atomically take *quantity* units out of stock.

        Must succeed only if the stock seen at the moment of the write is
        at least *quantity*.  Returns False (and changes nothing) otherwise.
        """
