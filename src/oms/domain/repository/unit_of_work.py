"""Abstract unit of work: one datastore transaction.

Every use case that writes runs inside ``with uow:`` and ends with
``uow.commit()``.  Leaving the block without committing (for example
because an exception escaped) rolls back every write made through the
repositories, so callers never observe a half-applied operation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from oms.domain.repository.cart_repository import CartRepository
from oms.domain.repository.order_history_repository import OrderHistoryRepository
from oms.domain.repository.order_repository import OrderRepository
from oms.domain.repository.product_repository import ProductRepository
from oms.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    products: ProductRepository
    users: UserRepository
    carts: CartRepository
    orders: OrderRepository
    history: OrderHistoryRepository

    def __enter__(self) -> UnitOfWork:
        self._begin()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        finally:
            self._end()

    @abstractmethod
    def commit(self) -> None:
        """Make every write since the block started durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes.  A no-op after ``commit()``."""

    @abstractmethod
    def _begin(self) -> None:
        """Open the transaction and bind the repositories to it."""

    def _end(self) -> None:
        """Release resources held for the block."""
