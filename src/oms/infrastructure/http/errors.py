"""Maps domain exceptions to HTTP responses.

Bodies look like ``{"error": "INSUFFICIENT_STOCK", "detail": "..."}`` so
clients can branch on a stable code rather than parse messages.
"""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from oms.domain.exceptions import (
    AuthenticationError,
    DomainException,
    EntityNotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (EntityNotFoundError, 404),
    (AuthenticationError, 401),
    (PermissionDeniedError, 403),
    (ValidationError, 400),
]


def status_code_for(exc: DomainException) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return 400


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    status_code = status_code_for(exc)
    logger.info(
        "Request rejected",
        method=request.method,
        path=request.url.path,
        status=status_code,
        error=exc.code,
    )
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "detail": str(exc)},
    )


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return JSONResponse(
        status_code=400,
        content={"error": ValidationError.code, "detail": problems},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
