"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from oms.domain.model.order import Order


@dataclass(frozen=True)
class OrderFilter:
    """Optional search criteria, combined with AND.

    An absent field adds no condition.  Bounds are inclusive.
    """

    email: str | None = None
    min_total: Decimal | None = None
    max_total: Decimal | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> Order:
        """Persist a new order with its items and assign its ID."""

    @abstractmethod
    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def save_status(self, order: Order) -> None:
        """Persist the status (and ``updated_at``) of an existing order.

        Everything else on an order is immutable after creation.
        """

    @abstractmethod
    def list_for_user(self, user_id: int) -> list[Order]:
        """Return a user's orders, newest first."""

    @abstractmethod
    def search(
        self, criteria: OrderFilter, offset: int, limit: int
    ) -> tuple[list[Order], int]:
        """Return one page of matching orders (newest first) and the total.

        Both values must describe the same snapshot of the store.
        """
