"""Order aggregate, the core of the domain.

An Order is created once, at checkout, from a cart.  After that only its
status moves, and every move leaves an OrderHistoryEntry behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from oms.domain.exceptions import (
    InvalidTransitionError,
    NoOpTransitionError,
    ValidationError,
)
from oms.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PLACED = "PLACED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus(raw.strip().upper())
        except (AttributeError, ValueError) as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Unknown order status {raw!r} (expected one of {allowed})"
            ) from exc


# DELIVERED and CANCELLED are terminal.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PLACED: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


@dataclass(frozen=True)
class OrderItem:
    """Captures the price of a product at checkout time.

    Never mutated after creation; later catalog price changes do not
    reach it.
    """

    product_id: int
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at checkout

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class OrderHistoryEntry:
    """One status transition.  Append-only."""

    order_id: int
    from_status: OrderStatus
    to_status: OrderStatus
    changed_by_id: int
    changed_at: datetime
    id: int | None = None
    changed_by_email: str | None = None


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.place()`` factory for new orders.  Repositories call
    ``__init__`` directly to reconstitute persisted orders without
    re-validating them.
    """

    id: int | None
    user_id: int
    items: list[OrderItem]
    total: Money
    status: OrderStatus = OrderStatus.PLACED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_email: str | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(user_id: int, items: list[OrderItem]) -> Order:
        """Create a new order; the total is frozen from the item prices."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        now = datetime.now(timezone.utc)
        return Order(
            id=None,
            user_id=user_id,
            items=list(items),
            total=total,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in ALLOWED_TRANSITIONS[self.status]

    def transition_to(
        self,
        new_status: OrderStatus,
        changed_by_id: int,
        at: datetime | None = None,
    ) -> OrderHistoryEntry:
        """Move to *new_status* and return the history entry to persist.

        The caller must store the updated order and the returned entry in
        the same transaction.
        """
        if self.id is None:
            raise ValidationError("Cannot change the status of an unsaved order")
        if new_status == self.status:
            raise NoOpTransitionError(
                f"Order #{self.id} already has status {self.status.value}"
            )
        if not self.can_transition_to(new_status):
            raise InvalidTransitionError(
                f"Cannot move order #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )

        changed_at = at or datetime.now(timezone.utc)
        entry = OrderHistoryEntry(
            order_id=self.id,
            from_status=self.status,
            to_status=new_status,
            changed_by_id=changed_by_id,
            changed_at=changed_at,
        )
        self.status = new_status
        self.updated_at = changed_at
        return entry

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        """Sum of line totals; always equals ``total`` for a valid order."""
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
