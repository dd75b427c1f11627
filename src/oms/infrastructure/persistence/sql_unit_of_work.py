"""SQLAlchemy-backed unit of work: one Session, one transaction."""

from __future__ import annotations

from sqlalchemy.orm import Session, sessionmaker

from oms.domain.repository.unit_of_work import UnitOfWork
from oms.infrastructure.persistence.sql_cart_repository import SqlCartRepository
from oms.infrastructure.persistence.sql_order_repository import (
    SqlOrderHistoryRepository,
    SqlOrderRepository,
)
from oms.infrastructure.persistence.sql_product_repository import SqlProductRepository
from oms.infrastructure.persistence.sql_user_repository import SqlUserRepository


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def _begin(self) -> None:
        if self._session is not None:
            raise RuntimeError("Unit of work is already in progress")
        session = self._session_factory()
        self._session = session
        self.products = SqlProductRepository(session)
        self.users = SqlUserRepository(session)
        self.carts = SqlCartRepository(session)
        self.orders = SqlOrderRepository(session)
        self.history = SqlOrderHistoryRepository(session)

    def commit(self) -> None:
        self._require_session().commit()

    def rollback(self) -> None:
        if self._session is not None:
            self._session.rollback()

    def _end(self) -> None:
        if self._session is not None:
            self._session.close()
            self._session = None

    def _require_session(self) -> Session:
        if self._session is None:
            raise RuntimeError("Unit of work used outside of a 'with' block")
        return self._session
