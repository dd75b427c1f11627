"""Abstract repository for users (read-mostly; accounts live elsewhere)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from oms.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None:
        """Return a user by its ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by exact (case-insensitive) email, or None."""

    @abstractmethod
    def add(self, user: User) -> User:
        """Persist a new user and assign its ID."""
