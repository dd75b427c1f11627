"""SQLAlchemy implementations of OrderRepository and OrderHistoryRepository."""

from __future__ import annotations

import dataclasses

from sqlalchemy import ColumnElement, Select, func, select, true
from sqlalchemy.orm import Session, selectinload

from oms.domain.model.order import Order, OrderHistoryEntry, OrderItem, OrderStatus
from oms.domain.model.value_objects import Money, Quantity
from oms.domain.repository.order_history_repository import OrderHistoryRepository
from oms.domain.repository.order_repository import OrderFilter, OrderRepository
from oms.infrastructure.persistence.tables import (
    OrderHistoryRow,
    OrderItemRow,
    OrderRow,
    UserRow,
    from_db_time,
    to_db_time,
)


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> Order:
        row = OrderRow(
            user_id=order.user_id,
            status=order.status.value,
            total=order.total.amount,
            created_at=to_db_time(order.created_at),
            updated_at=to_db_time(order.updated_at),
            items=[
                OrderItemRow(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                )
                for item in order.items
            ],
        )
        self._session.add(row)
        self._session.flush()
        order.id = row.id
        user = self._session.get(UserRow, order.user_id)
        order.customer_email = user.email if user is not None else None
        return order

    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        stmt = self._select_orders().where(OrderRow.id == order_id)
        if for_update:
            stmt = stmt.with_for_update(of=OrderRow)
        row = self._session.scalars(stmt).one_or_none()
        return self._to_domain(row) if row is not None else None

    def save_status(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is None:
            raise LookupError(f"Order #{order.id} is not persisted")
        row.status = order.status.value
        row.updated_at = to_db_time(order.updated_at)
        self._session.flush()

    def list_for_user(self, user_id: int) -> list[Order]:
        rows = self._session.scalars(
            self._select_orders()
            .where(OrderRow.user_id == user_id)
            .order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )
        return [self._to_domain(row) for row in rows]

    def search(
        self, criteria: OrderFilter, offset: int, limit: int
    ) -> tuple[list[Order], int]:
        matching = (
            select(OrderRow.id, OrderRow.created_at)
            .outerjoin(UserRow, UserRow.id == OrderRow.user_id)
            .where(*_build_conditions(criteria))
            .cte("matching")
        )
        counts = (
            select(func.count().label("total_count"))
            .select_from(matching)
            .subquery("counts")
        )
        page = (
            select(matching.c.id, matching.c.created_at)
            .order_by(matching.c.created_at.desc(), matching.c.id.desc())
            .offset(offset)
            .limit(limit)
            .subquery("page")
        )

        # The one-row count is outer-joined to the page, so the total comes
        # back from the same statement even when the page itself is empty.
        stmt = (
            select(counts.c.total_count, OrderRow)
            .select_from(
                counts.outerjoin(page, true()).outerjoin(
                    OrderRow.__table__, OrderRow.id == page.c.id
                )
            )
            .options(selectinload(OrderRow.items), selectinload(OrderRow.user))
            .order_by(page.c.created_at.desc(), page.c.id.desc())
        )
        rows = self._session.execute(stmt).all()
        total = rows[0].total_count if rows else 0
        return [self._to_domain(row) for _, row in rows if row is not None], total

    # --- Helpers --------------------------------------------------------------

    @staticmethod
    def _select_orders() -> Select:
        return (
            select(OrderRow)
            .options(selectinload(OrderRow.items), selectinload(OrderRow.user))
            .execution_options(populate_existing=True)
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        return Order(
            id=row.id,
            user_id=row.user_id,
            items=[
                OrderItem(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=Quantity(item.quantity),
                    unit_price=Money(item.unit_price),
                )
                for item in row.items
            ],
            total=Money(row.total),
            status=OrderStatus(row.status),
            created_at=from_db_time(row.created_at),
            updated_at=from_db_time(row.updated_at),
            customer_email=row.user.email if row.user is not None else None,
        )


def _build_conditions(criteria: OrderFilter) -> list[ColumnElement[bool]]:
    """One clause per present field, combined with AND by the caller."""
    conditions: list[ColumnElement[bool]] = []
    if criteria.email:
        conditions.append(
            func.lower(UserRow.email).contains(criteria.email.lower(), autoescape=True)
        )
    if criteria.min_total is not None:
        conditions.append(OrderRow.total >= criteria.min_total)
    if criteria.max_total is not None:
        conditions.append(OrderRow.total <= criteria.max_total)
    if criteria.created_from is not None:
        conditions.append(OrderRow.created_at >= to_db_time(criteria.created_from))
    if criteria.created_to is not None:
        conditions.append(OrderRow.created_at <= to_db_time(criteria.created_to))
    return conditions


class SqlOrderHistoryRepository(OrderHistoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def append(self, entry: OrderHistoryEntry) -> OrderHistoryEntry:
        row = OrderHistoryRow(
            order_id=entry.order_id,
            from_status=entry.from_status.value,
            to_status=entry.to_status.value,
            changed_by_id=entry.changed_by_id,
            changed_at=to_db_time(entry.changed_at),
        )
        self._session.add(row)
        self._session.flush()
        return dataclasses.replace(entry, id=row.id)

    def list_for_order(self, order_id: int) -> list[OrderHistoryEntry]:
        rows = self._session.scalars(
            select(OrderHistoryRow)
            .where(OrderHistoryRow.order_id == order_id)
            .options(selectinload(OrderHistoryRow.changed_by))
            .order_by(OrderHistoryRow.changed_at.desc(), OrderHistoryRow.id.desc())
        )
        return [
            OrderHistoryEntry(
                id=row.id,
                order_id=row.order_id,
                from_status=OrderStatus(row.from_status),
                to_status=OrderStatus(row.to_status),
                changed_by_id=row.changed_by_id,
                changed_by_email=row.changed_by.email if row.changed_by else None,
                changed_at=from_db_time(row.changed_at),
            )
            for row in rows
        ]
