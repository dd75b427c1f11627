"""Product aggregate.

Products are owned by the catalog collaborator; the order core reads them
and, during checkout only, decrements their stock.
"""

from __future__ import annotations

from dataclasses import dataclass

from oms.domain.exceptions import InsufficientStockError, ValidationError
from oms.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    Invariant: ``stock`` is never negative.  Only the inventory ledger
    changes it, through the repository's conditional decrement.
    """

    id: int | None
    name: str
    price: Money
    stock: int = 0
    description: str = ""

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")

    def ensure_available(self, quantity: int) -> None:
        """Raise InsufficientStockError if *quantity* exceeds current stock."""
        if quantity > self.stock:
            raise InsufficientStockError(self.name, quantity, self.stock)
