"""Application service: List My Orders use case (self-service query)."""

from __future__ import annotations

from oms.application.dto import OrderDTO, order_to_dto
from oms.domain.repository.unit_of_work import UnitOfWork


class ListMyOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> list[OrderDTO]:
        with self._uow:
            orders = self._uow.orders.list_for_user(user_id)
        return [order_to_dto(order) for order in orders]
