"""Abstract repository for the order status audit trail.

Append-only by contract: there is no update or delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from oms.domain.model.order import OrderHistoryEntry


class OrderHistoryRepository(ABC):

    @abstractmethod
    def append(self, entry: OrderHistoryEntry) -> OrderHistoryEntry:
        """Store a new entry and return it with its ID assigned."""

    @abstractmethod
    def list_for_order(self, order_id: int) -> list[OrderHistoryEntry]:
        """Return the entries of one order, newest first."""
