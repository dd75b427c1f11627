"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from oms.domain.model.user import Role, User
from oms.domain.repository.user_repository import UserRepository
from oms.infrastructure.persistence.tables import UserRow


class SqlUserRepository(UserRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, user_id: int) -> User | None:
        row = self._session.get(UserRow, user_id)
        return self._to_domain(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        row = self._session.scalars(
            select(UserRow).where(func.lower(UserRow.email) == email.strip().lower())
        ).one_or_none()
        return self._to_domain(row) if row is not None else None

    def add(self, user: User) -> User:
        row = UserRow(email=user.email, role=user.role.value)
        self._session.add(row)
        self._session.flush()
        user.id = row.id
        return user

    @staticmethod
    def _to_domain(row: UserRow) -> User:
        return User(id=row.id, email=row.email, role=Role(row.role))
