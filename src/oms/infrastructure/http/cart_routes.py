"""FastAPI routes for the caller's cart."""

from __future__ import annotations

from fastapi import APIRouter

from oms.application.add_cart_item import AddCartItemHandler
from oms.application.clear_cart import ClearCartHandler
from oms.application.remove_cart_item import RemoveCartItemHandler
from oms.application.show_cart import ShowCartHandler
from oms.application.update_cart_item import UpdateCartItemHandler
from oms.infrastructure.http.auth import CurrentUser, Uow
from oms.infrastructure.http.schemas import (
    CartItemRequest,
    CartItemResponse,
    CartResponse,
)

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
def get_cart(principal: CurrentUser, uow: Uow) -> CartResponse:
    dto = ShowCartHandler(uow).handle(principal.user_id)
    return CartResponse.model_validate(dto)


@cart_router.post("", status_code=201, response_model=CartItemResponse)
def add_cart_item(body: CartItemRequest, principal: CurrentUser, uow: Uow) -> CartItemResponse:
    dto = AddCartItemHandler(uow).handle(principal.user_id, body.product_id, body.quantity)
    return CartItemResponse.model_validate(dto)


@cart_router.patch("", response_model=CartItemResponse)
def update_cart_item(body: CartItemRequest, principal: CurrentUser, uow: Uow) -> CartItemResponse:
    dto = UpdateCartItemHandler(uow).handle(principal.user_id, body.product_id, body.quantity)
    return CartItemResponse.model_validate(dto)


@cart_router.post("/clear", response_model=CartResponse)
def clear_cart(principal: CurrentUser, uow: Uow) -> CartResponse:
    dto = ClearCartHandler(uow).handle(principal.user_id)
    return CartResponse.model_validate(dto)


@cart_router.delete("/{product_id}", response_model=CartResponse)
def remove_cart_item(product_id: int, principal: CurrentUser, uow: Uow) -> CartResponse:
    dto = RemoveCartItemHandler(uow).handle(principal.user_id, product_id)
    return CartResponse.model_validate(dto)
