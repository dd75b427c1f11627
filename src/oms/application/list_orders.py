"""Application service: List Orders use case (admin query).

Raw query values arrive as strings from the HTTP and CLI adapters and are
turned into an ``OrderFilter`` here.  Paging values fall back to their
defaults when absent or unusable; a malformed filter value is rejected.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation

from oms.application.dto import OrderPageDTO, order_to_dto
from oms.domain.exceptions import ValidationError
from oms.domain.repository.order_repository import OrderFilter
from oms.domain.repository.unit_of_work import UnitOfWork

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


@dataclass(frozen=True)
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @staticmethod
    def parse(page: str | int | None = None, limit: str | int | None = None) -> PageRequest:
        return PageRequest(
            page=_positive_int_or(page, DEFAULT_PAGE),
            limit=_positive_int_or(limit, DEFAULT_LIMIT),
        )


def build_order_filter(
    email: str | None = None,
    min_total: str | Decimal | None = None,
    max_total: str | Decimal | None = None,
    date_from: str | None = None,
    date_to: str | None = None,
) -> OrderFilter:
    """Validate raw filter values and build the search criteria."""
    email = email.strip() if email else None
    minimum = _parse_amount("minTotal", min_total)
    maximum = _parse_amount("maxTotal", max_total)
    if minimum is not None and maximum is not None and minimum > maximum:
        raise ValidationError("minTotal cannot be greater than maxTotal")

    created_from = _parse_instant("dateFrom", date_from, end_of_day=False)
    created_to = _parse_instant("dateTo", date_to, end_of_day=True)
    if created_from is not None and created_to is not None and created_from > created_to:
        raise ValidationError("dateFrom cannot be later than dateTo")

    return OrderFilter(
        email=email or None,
        min_total=minimum,
        max_total=maximum,
        created_from=created_from,
        created_to=created_to,
    )


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, criteria: OrderFilter, paging: PageRequest) -> OrderPageDTO:
        with self._uow:
            orders, total = self._uow.orders.search(
                criteria, offset=paging.offset, limit=paging.limit
            )
        return OrderPageDTO(
            data=[order_to_dto(order) for order in orders],
            total=total,
            page=paging.page,
            limit=paging.limit,
            total_pages=math.ceil(total / paging.limit),
        )


# --- Parsing helpers ------------------------------------------------------------


def _positive_int_or(raw: str | int | None, default: int) -> int:
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return value if value >= 1 else default


def _parse_amount(name: str, raw: str | Decimal | None) -> Decimal | None:
    if raw is None or str(raw).strip() == "":
        return None
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"{name} must be a number, got {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"{name} must be a finite number, got {raw!r}")
    return value


def _parse_instant(name: str, raw: str | None, end_of_day: bool) -> datetime | None:
    """Parse an ISO-8601 date or datetime into an aware UTC datetime.

    A bare date means the start of that day, or its last instant when it
    is the upper bound, so ``dateTo=2024-01-31`` includes the whole 31st.
    """
    if raw is None or raw.strip() == "":
        return None
    text = raw.strip()
    try:
        if len(text) == 10:
            day = date.fromisoformat(text)
            value = datetime.combine(day, time.max if end_of_day else time.min)
        else:
            value = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise ValidationError(f"{name} must be an ISO-8601 date, got {raw!r}") from exc

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
