"""Integration tests for the order status and history use cases."""

import pytest

from oms.application.list_my_orders import ListMyOrdersHandler
from oms.application.show_order import ShowOrderHandler
from oms.application.show_order_history import ShowOrderHistoryHandler
from oms.application.update_order_status import UpdateOrderStatusHandler
from oms.domain.exceptions import (
    EntityNotFoundError,
    InvalidTransitionError,
    NoOpTransitionError,
    ValidationError,
)
from oms.domain.model.order import Order, OrderItem, OrderStatus
from oms.domain.model.user import Role, User
from oms.domain.model.value_objects import Money, Quantity
from tests.fakes import FakeUnitOfWork

ADMIN_ID = 1
CUSTOMER_ID = 2


def _setup() -> tuple[FakeUnitOfWork, int]:
    """Build a unit of work with an admin, a customer and one placed order."""
    uow = FakeUnitOfWork()
    uow.users.add(User(id=None, email="admin@example.com", role=Role.ADMIN))
    uow.users.add(User(id=None, email="user@example.com"))
    order = uow.orders.add(
        Order.place(
            CUSTOMER_ID,
            [OrderItem(1, "Widget", Quantity(2), Money.of("10.99"))],
        )
    )
    return uow, order.id


class TestUpdateOrderStatus:

    def test_ships_order_and_records_history(self):
        uow, order_id = _setup()
        dto = UpdateOrderStatusHandler(uow).handle(order_id, "SHIPPED", ADMIN_ID)

        assert dto.status == "SHIPPED"
        assert uow.store.orders[order_id].status == OrderStatus.SHIPPED
        [entry] = uow.store.history
        assert entry.from_status == OrderStatus.PLACED
        assert entry.to_status == OrderStatus.SHIPPED
        assert entry.changed_by_id == ADMIN_ID

    def test_accepts_lowercase_status(self):
        uow, order_id = _setup()
        dto = UpdateOrderStatusHandler(uow).handle(order_id, "cancelled", ADMIN_ID)
        assert dto.status == "CANCELLED"

    def test_accepts_enum(self):
        uow, order_id = _setup()
        dto = UpdateOrderStatusHandler(uow).handle(order_id, OrderStatus.SHIPPED, ADMIN_ID)
        assert dto.status == "SHIPPED"

    def test_full_lifecycle(self):
        uow, order_id = _setup()
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order_id, "SHIPPED", ADMIN_ID)
        handler.handle(order_id, "DELIVERED", ADMIN_ID)
        assert len(uow.store.history) == 2

    def test_no_op_writes_nothing(self):
        uow, order_id = _setup()
        with pytest.raises(NoOpTransitionError):
            UpdateOrderStatusHandler(uow).handle(order_id, "PLACED", ADMIN_ID)
        assert uow.store.history == []

    def test_terminal_status_rejected(self):
        uow, order_id = _setup()
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order_id, "CANCELLED", ADMIN_ID)
        with pytest.raises(InvalidTransitionError):
            handler.handle(order_id, "SHIPPED", ADMIN_ID)
        assert uow.store.orders[order_id].status == OrderStatus.CANCELLED
        assert len(uow.store.history) == 1

    def test_unknown_status(self):
        uow, order_id = _setup()
        with pytest.raises(ValidationError, match="Unknown order status"):
            UpdateOrderStatusHandler(uow).handle(order_id, "LOST", ADMIN_ID)

    def test_missing_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            UpdateOrderStatusHandler(uow).handle(999, "SHIPPED", ADMIN_ID)

    def test_cancel_does_not_restock(self):
        uow, order_id = _setup()
        UpdateOrderStatusHandler(uow).handle(order_id, "CANCELLED", ADMIN_ID)
        assert uow.store.products == {}

    def test_history_write_failure_rolls_back_status(self):
        uow, order_id = _setup()

        def fail(entry):
            raise RuntimeError("disk full")

        uow.history.append = fail
        with pytest.raises(RuntimeError):
            UpdateOrderStatusHandler(uow).handle(order_id, "SHIPPED", ADMIN_ID)
        assert uow.store.orders[order_id].status == OrderStatus.PLACED


class TestShowOrderHistory:

    def test_newest_first_with_actor_email(self):
        uow, order_id = _setup()
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order_id, "SHIPPED", ADMIN_ID)
        handler.handle(order_id, "DELIVERED", ADMIN_ID)

        entries = ShowOrderHistoryHandler(uow).handle(order_id)
        assert [e.to_status for e in entries] == ["DELIVERED", "SHIPPED"]
        assert entries[0].from_status == "SHIPPED"
        assert entries[0].changed_by_email == "admin@example.com"

    def test_unchanged_order_has_empty_history(self):
        uow, order_id = _setup()
        assert ShowOrderHistoryHandler(uow).handle(order_id) == []

    def test_missing_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowOrderHistoryHandler(uow).handle(999)


class TestOrderQueries:

    def test_show_order_includes_customer_email(self):
        uow, order_id = _setup()
        dto = ShowOrderHandler(uow).handle(order_id)
        assert dto.customer_email == "user@example.com"
        assert str(dto.total) == "21.98"

    def test_show_missing_order(self):
        uow, _ = _setup()
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow).handle(999)

    def test_list_my_orders_only_returns_own(self):
        uow, order_id = _setup()
        assert [o.id for o in ListMyOrdersHandler(uow).handle(CUSTOMER_ID)] == [order_id]
        assert ListMyOrdersHandler(uow).handle(ADMIN_ID) == []
