"""Application service: Update Cart Item use case."""

from __future__ import annotations

import structlog

from oms.application.cart_lookup import get_or_create_cart, require_product
from oms.application.dto import CartItemDTO, cart_item_to_dto
from oms.domain.model.value_objects import Quantity
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: int, quantity: int) -> CartItemDTO:
        """Set (not add to) the quantity of a product already in the cart."""
        Quantity(quantity)  # reject bad input before touching the store

        with self._uow:
            cart = get_or_create_cart(self._uow, user_id)
            product = require_product(self._uow, product_id)
            item = cart.set_item_quantity(product, quantity)
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info(
            "Cart item updated",
            user_id=user_id,
            product_id=product_id,
            quantity=item.quantity.value,
        )
        return cart_item_to_dto(cart, item)
