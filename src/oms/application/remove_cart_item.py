"""Application service: Remove Cart Item use case."""

from __future__ import annotations

import structlog

from oms.application.cart_lookup import get_or_create_cart
from oms.application.dto import CartDTO, cart_to_dto
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class RemoveCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: int) -> CartDTO:
        """Remove one product from the cart.

        Raises EntityNotFoundError when the product is not in the cart.
        """
        with self._uow:
            cart = get_or_create_cart(self._uow, user_id)
            cart.remove_item(product_id)
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info("Cart item removed", user_id=user_id, product_id=product_id)
        return cart_to_dto(cart)
