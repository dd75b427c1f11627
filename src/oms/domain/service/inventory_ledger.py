"""Domain service: Inventory Ledger.

The only writer of ``Product.stock``.  Stock leaves the ledger during
checkout, inside the caller's unit of work, so the decrement commits or
rolls back together with the order and the emptied cart.

The two-phase approach (validate-then-mutate) ensures we never start
decrementing when one line is already known to be short.  The mutate phase
re-checks at the moment of the write because another checkout may have
taken the stock in between.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from oms.domain.exceptions import EntityNotFoundError, InsufficientStockError
from oms.domain.model.product import Product
from oms.domain.repository.product_repository import ProductRepository

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class StockLine:
    product: Product
    quantity: int


class InventoryLedger:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def check(self, lines: list[StockLine]) -> None:
        """Phase 1: fail on the first line that exceeds its product's stock."""
        for line in lines:
            line.product.ensure_available(line.quantity)

    def reserve(self, product_id: int, quantity: int) -> None:
        """Decrement one product's stock, or raise InsufficientStockError."""
        if self._product_repo.decrement_stock(product_id, quantity):
            return

        # The conditional write matched nothing: reload to say why.
        current = self._product_repo.get_by_id(product_id)
        if current is None:
            raise EntityNotFoundError(f"Product #{product_id} not found")
        logger.warning(
            "Stock changed before decrement",
            product_id=product_id,
            requested=quantity,
            available=current.stock,
        )
        raise InsufficientStockError(current.name, quantity, current.stock)

    def reserve_all(self, lines: list[StockLine]) -> None:
        """Validate every line, then decrement each product.

        Phase 2 raising part-way leaves earlier decrements in place; the
        surrounding unit of work is what undoes them.
        """
        self.check(lines)
        for line in lines:
            self.reserve(line.product.id, line.quantity)  # type: ignore[arg-type]
