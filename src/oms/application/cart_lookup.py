"""Shared lookups for the cart use cases."""

from __future__ import annotations

import structlog

from oms.domain.exceptions import EntityNotFoundError
from oms.domain.model.cart import Cart
from oms.domain.model.product import Product
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def get_or_create_cart(uow: UnitOfWork, user_id: int) -> Cart:
    """Return the user's cart, creating an empty one on first access.

    Two first requests may race to create the cart; the repository hands
    the loser the winner's cart.
    """
    cart = uow.carts.get_for_user(user_id)
    if cart is None:
        cart = uow.carts.add(Cart(id=None, user_id=user_id))
        logger.info("Cart created", user_id=user_id, cart_id=cart.id)
    return cart


def require_product(uow: UnitOfWork, product_id: int) -> Product:
    """Load a product inside the current transaction or raise NotFound.

    The row is locked so the stock checked here is the stock in effect
    until the transaction ends.
    """
    product = uow.products.get_by_id(product_id, for_update=True)
    if product is None:
        raise EntityNotFoundError(f"Product #{product_id} not found")
    return product
