"""Application service: Update Order Status use case.

The status change and its history entry are written in the same unit of
work, so an order never shows a status the audit trail does not explain.
"""

from __future__ import annotations

import structlog

from oms.application.dto import OrderDTO, order_to_dto
from oms.domain.exceptions import EntityNotFoundError, NoOpTransitionError
from oms.domain.model.order import OrderStatus
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int, new_status: str | OrderStatus, acting_user_id: int) -> OrderDTO:
        status = new_status if isinstance(new_status, OrderStatus) else OrderStatus.parse(new_status)

        with self._uow:
            # Locked so a concurrent update cannot slip in between reading
            # the old status and writing the history entry.
            order = self._uow.orders.get_by_id(order_id, for_update=True)
            if order is None:
                raise EntityNotFoundError(f"Order #{order_id} not found")

            previous = order.status
            try:
                entry = order.transition_to(status, changed_by_id=acting_user_id)
            except NoOpTransitionError:
                logger.warning(
                    "Status update rejected",
                    order_id=order_id,
                    status=status.value,
                    reason="no-op",
                )
                raise

            self._uow.orders.save_status(order)
            self._uow.history.append(entry)
            self._uow.commit()

        logger.info(
            "Order status changed",
            order_id=order_id,
            from_status=previous.value,
            to_status=status.value,
            changed_by=acting_user_id,
        )
        return order_to_dto(order)
