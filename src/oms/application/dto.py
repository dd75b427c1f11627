"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the HTTP/CLI adapters and the application layer
without exposing domain internals to the outside world.  Money is carried
as a Decimal amount; formatting is the adapter's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from oms.domain.model.cart import Cart, CartItem
from oms.domain.model.order import Order, OrderHistoryEntry


@dataclass(frozen=True)
class CartItemDTO:
    """Output: a cart line after an add or update."""

    cart_id: int
    product_id: int
    quantity: int


@dataclass(frozen=True)
class CartLineDTO:
    product_id: int
    product_name: str
    unit_price: Decimal  # live price
    quantity: int
    subtotal: Decimal


@dataclass(frozen=True)
class CartDTO:
    id: int
    user_id: int
    items: list[CartLineDTO]
    total: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal  # price at checkout
    line_total: Decimal


@dataclass(frozen=True)
class OrderDTO:
    id: int
    user_id: int
    customer_email: str | None
    status: str
    items: list[OrderItemDTO]
    total: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderHistoryDTO:
    id: int
    order_id: int
    from_status: str
    to_status: str
    changed_by_id: int
    changed_by_email: str | None
    changed_at: datetime


@dataclass(frozen=True)
class OrderPageDTO:
    data: list[OrderDTO]
    total: int
    page: int
    limit: int
    total_pages: int


# --- Mapping ------------------------------------------------------------------


def cart_item_to_dto(cart: Cart, item: CartItem) -> CartItemDTO:
    return CartItemDTO(
        cart_id=cart.id,  # type: ignore[arg-type]
        product_id=item.product_id,
        quantity=item.quantity.value,
    )


def cart_to_dto(cart: Cart) -> CartDTO:
    return CartDTO(
        id=cart.id,  # type: ignore[arg-type]
        user_id=cart.user_id,
        items=[
            CartLineDTO(
                product_id=item.product_id,
                product_name=item.product.name,
                unit_price=item.product.price.amount,
                quantity=item.quantity.value,
                subtotal=item.subtotal.amount,
            )
            for item in cart.items
        ],
        total=cart.total.amount,
        created_at=cart.created_at,
        updated_at=cart.updated_at,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        user_id=order.user_id,
        customer_email=order.customer_email,
        status=order.status.value,
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=item.unit_price.amount,
                line_total=item.line_total.amount,
            )
            for item in order.items
        ],
        total=order.total.amount,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def history_to_dto(entry: OrderHistoryEntry) -> OrderHistoryDTO:
    return OrderHistoryDTO(
        id=entry.id,  # type: ignore[arg-type]
        order_id=entry.order_id,
        from_status=entry.from_status.value,
        to_status=entry.to_status.value,
        changed_by_id=entry.changed_by_id,
        changed_by_email=entry.changed_by_email,
        changed_at=entry.changed_at,
    )
