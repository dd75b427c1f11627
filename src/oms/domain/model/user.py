"""Users as seen by the order core.

Accounts, passwords and sign-in belong to the identity collaborator.  The
core only needs to know who is acting and in which role.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from oms.domain.exceptions import ValidationError


class Role(Enum):
    ADMIN = "ADMIN"
    CUSTOMER = "CUSTOMER"

    @staticmethod
    def parse(raw: str) -> Role:
        """Map a role string to the closed enum, rejecting unknown values."""
        try:
            return Role(raw.strip().upper())
        except (AttributeError, ValueError) as exc:
            raise ValidationError(f"Unknown role: {raw!r}") from exc


@dataclass
class User:
    id: int | None
    email: str
    role: Role = Role.CUSTOMER
