"""FastAPI routes for checkout, order listings and the admin status workflow."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Query

from oms.application.list_my_orders import ListMyOrdersHandler
from oms.application.list_orders import ListOrdersHandler, PageRequest, build_order_filter
from oms.application.place_order import PlaceOrderHandler
from oms.application.show_order_history import ShowOrderHistoryHandler
from oms.application.update_order_status import UpdateOrderStatusHandler
from oms.infrastructure.http.auth import AdminUser, CurrentUser, Uow
from oms.infrastructure.http.schemas import (
    OrderHistoryResponse,
    OrderPageResponse,
    OrderResponse,
    UpdateStatusRequest,
)

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
def place_order(principal: CurrentUser, uow: Uow) -> OrderResponse:
    dto = PlaceOrderHandler(uow).handle(principal.user_id)
    return OrderResponse.model_validate(dto)


@order_router.get("", response_model=list[OrderResponse])
def list_my_orders(principal: CurrentUser, uow: Uow) -> list[OrderResponse]:
    dtos = ListMyOrdersHandler(uow).handle(principal.user_id)
    return [OrderResponse.model_validate(dto) for dto in dtos]


# GET /orders/admin?page=2&limit=5&email=gmail.com&minTotal=20&dateFrom=2024-01-01
@order_router.get("/admin", response_model=OrderPageResponse)
def list_all_orders(
    _: AdminUser,
    uow: Uow,
    page: str | None = None,
    limit: str | None = None,
    email: str | None = None,
    min_total: Annotated[str | None, Query(alias="minTotal")] = None,
    max_total: Annotated[str | None, Query(alias="maxTotal")] = None,
    date_from: Annotated[str | None, Query(alias="dateFrom")] = None,
    date_to: Annotated[str | None, Query(alias="dateTo")] = None,
) -> OrderPageResponse:
    criteria = build_order_filter(
        email=email,
        min_total=min_total,
        max_total=max_total,
        date_from=date_from,
        date_to=date_to,
    )
    dto = ListOrdersHandler(uow).handle(criteria, PageRequest.parse(page, limit))
    return OrderPageResponse.model_validate(dto)


@order_router.patch("/admin/{order_id}/status", response_model=OrderResponse)
def update_order_status(
    order_id: int, body: UpdateStatusRequest, admin: AdminUser, uow: Uow
) -> OrderResponse:
    dto = UpdateOrderStatusHandler(uow).handle(order_id, body.status, admin.user_id)
    return OrderResponse.model_validate(dto)


@order_router.get("/admin/{order_id}/history", response_model=list[OrderHistoryResponse])
def get_order_history(order_id: int, _: AdminUser, uow: Uow) -> list[OrderHistoryResponse]:
    dtos = ShowOrderHistoryHandler(uow).handle(order_id)
    return [OrderHistoryResponse.model_validate(dto) for dto in dtos]
