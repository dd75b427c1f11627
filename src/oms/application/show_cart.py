"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from oms.application.cart_lookup import get_or_create_cart
from oms.application.dto import CartDTO, cart_to_dto
from oms.domain.repository.unit_of_work import UnitOfWork


class ShowCartHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> CartDTO:
        """Return the cart with subtotals and total at *current* prices.

        The first call for a user creates the (empty) cart.
        """
        with self._uow:
            cart = get_or_create_cart(self._uow, user_id)
            self._uow.commit()
        return cart_to_dto(cart)
