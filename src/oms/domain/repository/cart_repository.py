"""Abstract repository for Cart aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from oms.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def get_for_user(self, user_id: int, lock_products: bool = False) -> Cart | None:
        """Return the user's cart with its items and their live products.

        With ``lock_products`` the referenced product rows are locked for
        the rest of the transaction where the store supports it.
        """

    @abstractmethod
    def add(self, cart: Cart) -> Cart:
        """Persist a new, empty cart and assign its ID.

        A user has at most one cart; if one already exists it is returned
        instead.
        """

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Synchronise the stored items with ``cart.items``.

        Items missing from the aggregate are deleted; the cart row itself
        is kept.
        """
