"""Application service: Show Order History use case (query)."""

from __future__ import annotations

from oms.application.dto import OrderHistoryDTO, history_to_dto
from oms.domain.exceptions import EntityNotFoundError
from oms.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHistoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> list[OrderHistoryDTO]:
        """Return the status transitions of an order, newest first."""
        with self._uow:
            if self._uow.orders.get_by_id(order_id) is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")
            entries = self._uow.history.list_for_order(order_id)
        return [history_to_dto(entry) for entry in entries]
