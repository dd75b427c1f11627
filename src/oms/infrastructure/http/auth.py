"""Request identity and role checks, expressed as FastAPI dependencies.

Authentication itself happens upstream: the gateway verifies the caller
and forwards ``X-User-Id`` and ``X-User-Role``.  ``authenticate`` turns
those headers into a Principal before any handler runs, and
``require_role`` composes on top of it for role-gated routes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, Request

from oms.domain.exceptions import AuthenticationError, PermissionDeniedError
from oms.domain.model.user import Role
from oms.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: Role


def authenticate(
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> Principal:
    if not x_user_id:
        raise AuthenticationError("Missing X-User-Id header")
    try:
        user_id = int(x_user_id)
    except ValueError as exc:
        raise AuthenticationError(f"Malformed user id: {x_user_id!r}") from exc
    if user_id < 1:
        raise AuthenticationError(f"Malformed user id: {x_user_id!r}")
    if not x_user_role:
        raise AuthenticationError("Missing X-User-Role header")
    return Principal(user_id=user_id, role=Role.parse(x_user_role))


def require_role(*allowed: Role) -> Callable[[Principal], Principal]:
    """Build a dependency that admits only principals with one of *allowed*."""

    def check(principal: Annotated[Principal, Depends(authenticate)]) -> Principal:
        if principal.role not in allowed:
            raise PermissionDeniedError(
                f"Role {principal.role.value} may not access this resource"
            )
        return principal

    return check


def get_uow(request: Request) -> UnitOfWork:
    """A fresh unit of work per request."""
    return request.app.state.uow_factory()


CurrentUser = Annotated[Principal, Depends(authenticate)]
AdminUser = Annotated[Principal, Depends(require_role(Role.ADMIN))]
Uow = Annotated[UnitOfWork, Depends(get_uow)]
