"""Cart aggregate, a user's mutable basket.

Carts are never historised.  Subtotals and the cart total are derived from
the *live* product price on every read, unlike a placed order which keeps
the price it was bought at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from oms.domain.exceptions import EntityNotFoundError
from oms.domain.model.product import Product
from oms.domain.model.value_objects import Money, Quantity


@dataclass
class CartItem:
    product: Product
    quantity: Quantity

    @property
    def product_id(self) -> int:
        return self.product.id  # type: ignore[return-value]

    @property
    def subtotal(self) -> Money:
        return self.product.price * self.quantity.value


@dataclass
class Cart:
    """Aggregate root for a shopping cart (one per user).

    Invariants:
    - at most one item per product
    - an item's quantity never exceeds the product's stock at the time
      the item was last changed
    """

    id: int | None
    user_id: int
    items: list[CartItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Mutations ------------------------------------------------------------

    def add_item(self, product: Product, quantity: int) -> CartItem:
        """Add *quantity* of *product*, merging with an existing line."""
        added = Quantity(quantity)
        existing = self.find_item(product.id)
        requested = existing.quantity + added if existing else added

        product.ensure_available(requested.value)

        if existing is not None:
            existing.product = product
            existing.quantity = requested
            item = existing
        else:
            item = CartItem(product=product, quantity=requested)
            self.items.append(item)
        self._touch()
        return item

    def set_item_quantity(self, product: Product, quantity: int) -> CartItem:
        """Replace the quantity of a product already in the cart."""
        requested = Quantity(quantity)
        item = self._require_item(product.id)

        product.ensure_available(requested.value)

        item.product = product
        item.quantity = requested
        self._touch()
        return item

    def remove_item(self, product_id: int) -> CartItem:
        item = self._require_item(product_id)
        self.items.remove(item)
        self._touch()
        return item

    def clear(self) -> int:
        """Drop every item; returns how many lines were removed."""
        removed = len(self.items)
        self.items.clear()
        if removed:
            self._touch()
        return removed

    # --- Queries --------------------------------------------------------------

    def find_item(self, product_id: int | None) -> CartItem | None:
        for item in self.items:
            if item.product_id == product_id:
                return item
        return None

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.subtotal
        return result

    # --- Internal helpers -----------------------------------------------------

    def _require_item(self, product_id: int | None) -> CartItem:
        item = self.find_item(product_id)
        if item is None:
            raise EntityNotFoundError(f"Product #{product_id} is not in the cart")
        return item

    def _touch(self) -> None:
        self.updated_at = datetime.now(timezone.utc)
