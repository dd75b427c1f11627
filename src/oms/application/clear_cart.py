"""Application service: Clear Cart use case.

Idempotent: clearing an empty (or never used) cart succeeds.
"""

from __future__ import annotations

import structlog

from oms.application.cart_lookup import get_or_create_cart
from oms.application.dto import CartDTO, cart_to_dto
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ClearCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> CartDTO:
        with self._uow:
            cart = get_or_create_cart(self._uow, user_id)
            removed = cart.clear()
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info("Cart cleared", user_id=user_id, removed_items=removed)
        return cart_to_dto(cart)
