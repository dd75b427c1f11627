"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from oms.domain.model.product import Product
from oms.domain.model.value_objects import Money
from oms.domain.repository.product_repository import ProductRepository
from oms.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int, for_update: bool = False) -> Product | None:
        stmt = (
            select(ProductRow)
            .where(ProductRow.id == product_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            stmt = stmt.with_for_update()
        row = self._session.scalars(stmt).one_or_none()
        return to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.id))
        return [to_domain(row) for row in rows]

    def add(self, product: Product) -> Product:
        row = ProductRow(
            name=product.name,
            description=product.description,
            price=product.price.amount,
            stock=product.stock,
        )
        self._session.add(row)
        self._session.flush()
        product.id = row.id
        return product

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        # Compare-and-decrement in one statement: the floor check and the
        # write see the same row version.
        result = self._session.execute(
            update(ProductRow)
            .where(ProductRow.id == product_id, ProductRow.stock >= quantity)
            .values(stock=ProductRow.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1


# --- Serialization ----------------------------------------------------------------


def to_domain(row: ProductRow) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description or "",
        price=Money(row.price),
        stock=row.stock,
    )
