"""FastAPI application factory.

Usage:
    oms serve
    uvicorn oms.infrastructure.http.app:create_app --factory
"""

from __future__ import annotations

import uuid

import structlog
from fastapi import FastAPI, Request
from sqlalchemy import Engine

from oms.infrastructure.bootstrap import build_engine, unit_of_work_factory
from oms.infrastructure.config import Settings
from oms.infrastructure.http.cart_routes import cart_router
from oms.infrastructure.http.errors import register_error_handlers
from oms.infrastructure.http.order_routes import order_router
from oms.infrastructure.logging import configure_logging


def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level, json=settings.log_json, sql_echo=settings.sql_echo)
    engine = engine or build_engine(settings)

    app = FastAPI(
        title="OMS API",
        description="Cart, checkout and order lifecycle",
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.uow_factory = unit_of_work_factory(engine)

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next):
        """Tag every log line emitted while serving a request."""
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=uuid.uuid4().hex,
            method=request.method,
            path=request.url.path,
        )
        return await call_next(request)

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    register_error_handlers(app)
    app.include_router(cart_router)
    app.include_router(order_router)
    return app
