"""SQLAlchemy implementation of CartRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from oms.domain.model.cart import Cart, CartItem
from oms.domain.model.value_objects import Quantity
from oms.domain.repository.cart_repository import CartRepository
from oms.infrastructure.persistence import sql_product_repository
from oms.infrastructure.persistence.tables import (
    CartItemRow,
    CartRow,
    ProductRow,
    from_db_time,
    to_db_time,
)


class SqlCartRepository(CartRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- CartRepository interface ---------------------------------------------

    def get_for_user(self, user_id: int, lock_products: bool = False) -> Cart | None:
        row = self._session.scalars(
            select(CartRow)
            .where(CartRow.user_id == user_id)
            .options(selectinload(CartRow.items).selectinload(CartItemRow.product))
            .execution_options(populate_existing=True)
        ).one_or_none()
        if row is None:
            return None

        products = {item.product_id: item.product for item in row.items}
        if lock_products and products:
            # Always lock in id order so two checkouts cannot deadlock.
            locked = self._session.scalars(
                select(ProductRow)
                .where(ProductRow.id.in_(sorted(products)))
                .order_by(ProductRow.id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            products = {product.id: product for product in locked}

        return Cart(
            id=row.id,
            user_id=row.user_id,
            items=[
                CartItem(
                    product=sql_product_repository.to_domain(products[item.product_id]),
                    quantity=Quantity(item.quantity),
                )
                for item in row.items
            ],
            created_at=from_db_time(row.created_at),
            updated_at=from_db_time(row.updated_at),
        )

    def add(self, cart: Cart) -> Cart:
        row = CartRow(
            user_id=cart.user_id,
            created_at=to_db_time(cart.created_at),
            updated_at=to_db_time(cart.updated_at),
        )
        try:
            with self._session.begin_nested():
                self._session.add(row)
        except IntegrityError:
            # Another transaction created this user's cart first.
            existing = self.get_for_user(cart.user_id)
            if existing is None:
                raise
            return existing
        cart.id = row.id
        return cart

    def save(self, cart: Cart) -> None:
        row = self._session.get(CartRow, cart.id)
        if row is None:
            raise LookupError(f"Cart #{cart.id} is not persisted")

        wanted = {item.product_id: item.quantity.value for item in cart.items}
        for item_row in list(row.items):
            if item_row.product_id not in wanted:
                row.items.remove(item_row)  # delete-orphan removes the row
            else:
                item_row.quantity = wanted.pop(item_row.product_id)
        for product_id, quantity in wanted.items():
            row.items.append(CartItemRow(product_id=product_id, quantity=quantity))

        row.updated_at = to_db_time(cart.updated_at)
        self._session.flush()
