"""Application service: Place Order use case (checkout).

Turns the user's cart into an immutable order.  Everything from pricing to
emptying the cart happens in one unit of work: if any step fails, stock,
orders and cart are left exactly as they were.
"""

from __future__ import annotations

import structlog

from oms.application.dto import OrderDTO, order_to_dto
from oms.domain.exceptions import EmptyCartError, InsufficientStockError
from oms.domain.model.order import Order, OrderItem
from oms.domain.repository.unit_of_work import UnitOfWork
from oms.domain.service.inventory_ledger import InventoryLedger, StockLine

logger = structlog.get_logger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: int) -> OrderDTO:
        """Place an order from the user's cart.

        Steps:
        1. Load the cart, its items and their products (rows locked).
        2. Reject an empty or missing cart.
        3. Check every line against stock, then decrement each product.
        4. Price each line at the current product price (snapshot).
        5. Create the order and empty the cart.
        6. Commit and return a DTO.
        """
        with self._uow:
            cart = self._uow.carts.get_for_user(user_id, lock_products=True)
            if cart is None or cart.is_empty:
                raise EmptyCartError("Cart is empty")

            lines = [StockLine(item.product, item.quantity.value) for item in cart.items]
            try:
                InventoryLedger(self._uow.products).reserve_all(lines)
            except InsufficientStockError as exc:
                logger.warning(
                    "Checkout rejected",
                    user_id=user_id,
                    product=exc.product_name,
                    requested=exc.requested,
                    available=exc.available,
                )
                raise

            order = Order.place(
                user_id=user_id,
                items=[
                    OrderItem(
                        product_id=item.product_id,
                        product_name=item.product.name,
                        quantity=item.quantity,
                        unit_price=item.product.price,  # <-- price snapshot
                    )
                    for item in cart.items
                ],
            )
            order = self._uow.orders.add(order)

            cart.clear()
            self._uow.carts.save(cart)
            self._uow.commit()

        logger.info(
            "Order placed",
            order_id=order.id,
            user_id=user_id,
            items=len(order.items),
            total=str(order.total.amount),
        )
        return order_to_dto(order)
