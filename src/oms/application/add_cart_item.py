"""Application service: Add Cart Item use case."""

from __future__ import annotations

import structlog

from oms.application.cart_lookup import get_or_create_cart, require_product
from oms.application.dto import CartItemDTO, cart_item_to_dto
from oms.domain.exceptions import InsufficientStockError
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddCartItemHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int, product_id: int, quantity: int) -> CartItemDTO:
        """Add *quantity* units of a product to the user's cart.

        Adding a product that is already in the cart increases its
        quantity.  The merged quantity must not exceed the product's
        current stock.
        """
        with self._uow:
            cart = get_or_create_cart(self._uow, user_id)
            product = require_product(self._uow, product_id)

            try:
                item = cart.add_item(product, quantity)
            except InsufficientStockError as exc:
                logger.warning(
                    "Cart add rejected",
                    user_id=user_id,
                    product_id=product_id,
                    requested=exc.requested,
                    available=exc.available,
                )
                raise

            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info(
            "Cart item added",
            user_id=user_id,
            product_id=product_id,
            quantity=item.quantity.value,
        )
        return cart_item_to_dto(cart, item)
