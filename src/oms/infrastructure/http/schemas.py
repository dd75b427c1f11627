"""Pydantic request/response schemas for the HTTP API.

These are external contracts, kept separate from the application DTOs.
Field names are camelCase on the wire.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------
class CartItemRequest(ApiModel):
    product_id: int
    quantity: int

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"productId": 1, "quantity": 2}]}
    )


class UpdateStatusRequest(ApiModel):
    status: str


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------
class CartItemResponse(ApiModel):
    cart_id: int
    product_id: int
    quantity: int


class CartLineResponse(ApiModel):
    product_id: int
    product_name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal


class CartResponse(ApiModel):
    id: int
    user_id: int
    items: list[CartLineResponse]
    total: Decimal
    created_at: datetime
    updated_at: datetime


class OrderItemResponse(ApiModel):
    product_id: int
    product_name: str
    quantity: int
    unit_price: Decimal
    line_total: Decimal


class OrderResponse(ApiModel):
    id: int
    user_id: int
    customer_email: str | None = None
    status: str
    items: list[OrderItemResponse]
    total: Decimal
    created_at: datetime
    updated_at: datetime


class OrderPageResponse(ApiModel):
    data: list[OrderResponse]
    total: int
    page: int
    limit: int
    total_pages: int


class OrderHistoryResponse(ApiModel):
    id: int
    order_id: int
    from_status: str
    to_status: str
    changed_by_id: int
    changed_by_email: str | None = None
    changed_at: datetime
