"""In-memory fake repositories and unit of work for testing.

These implement the same abstract interfaces as the SQL repositories but
keep everything in dicts.  Repositories hand out copies, like a real
store would, and ``FakeUnitOfWork`` restores the state it saw on entry
when the block ends without a commit.
"""

from __future__ import annotations

import copy
import dataclasses
from collections.abc import Callable
from dataclasses import dataclass, field

from oms.domain.model.cart import Cart
from oms.domain.model.order import Order, OrderHistoryEntry
from oms.domain.model.product import Product
from oms.domain.model.user import User
from oms.domain.repository.cart_repository import CartRepository
from oms.domain.repository.order_history_repository import OrderHistoryRepository
from oms.domain.repository.order_repository import OrderFilter, OrderRepository
from oms.domain.repository.product_repository import ProductRepository
from oms.domain.repository.unit_of_work import UnitOfWork
from oms.domain.repository.user_repository import UserRepository


@dataclass
class FakeStore:
    products: dict[int, Product] = field(default_factory=dict)
    users: dict[int, User] = field(default_factory=dict)
    carts: dict[int, Cart] = field(default_factory=dict)  # keyed by user_id
    orders: dict[int, Order] = field(default_factory=dict)
    history: list[OrderHistoryEntry] = field(default_factory=list)
    next_ids: dict[str, int] = field(default_factory=dict)

    def next_id(self, kind: str) -> int:
        value = self.next_ids.get(kind, 0) + 1
        self.next_ids[kind] = value
        return value

    def snapshot(self) -> dict:
        return copy.deepcopy(
            {
                "products": self.products,
                "users": self.users,
                "carts": self.carts,
                "orders": self.orders,
                "history": self.history,
            }
        )

    def restore(self, state: dict) -> None:
        self.products = state["products"]
        self.users = state["users"]
        self.carts = state["carts"]
        self.orders = state["orders"]
        self.history = state["history"]


class FakeProductRepository(ProductRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        # Runs just before the conditional write; lets a test simulate a
        # concurrent checkout taking stock in between.
        self.before_decrement: Callable[[int, int], None] | None = None

    def get_by_id(self, product_id: int, for_update: bool = False) -> Product | None:
        product = self._store.products.get(product_id)
        return copy.deepcopy(product)

    def list_all(self) -> list[Product]:
        return [copy.deepcopy(p) for p in self._store.products.values()]

    def add(self, product: Product) -> Product:
        if product.id is None:
            product.id = self._store.next_id("product")
        self._store.products[product.id] = copy.deepcopy(product)
        return product

    def decrement_stock(self, product_id: int, quantity: int) -> bool:
        if self.before_decrement is not None:
            self.before_decrement(product_id, quantity)
        product = self._store.products.get(product_id)
        if product is None or product.stock < quantity:
            return False
        product.stock -= quantity
        return True


class FakeUserRepository(UserRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_id(self, user_id: int) -> User | None:
        return copy.deepcopy(self._store.users.get(user_id))

    def get_by_email(self, email: str) -> User | None:
        for user in self._store.users.values():
            if user.email.lower() == email.strip().lower():
                return copy.deepcopy(user)
        return None

    def add(self, user: User) -> User:
        if user.id is None:
            user.id = self._store.next_id("user")
        self._store.users[user.id] = copy.deepcopy(user)
        return user


class FakeCartRepository(CartRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_for_user(self, user_id: int, lock_products: bool = False) -> Cart | None:
        stored = self._store.carts.get(user_id)
        if stored is None:
            return None
        cart = copy.deepcopy(stored)
        for item in cart.items:
            # Items always see the live product, like a join would.
            item.product = copy.deepcopy(self._store.products[item.product_id])
        return cart

    def add(self, cart: Cart) -> Cart:
        if cart.user_id in self._store.carts:
            return self.get_for_user(cart.user_id)
        cart.id = self._store.next_id("cart")
        self._store.carts[cart.user_id] = copy.deepcopy(cart)
        return cart

    def save(self, cart: Cart) -> None:
        self._store.carts[cart.user_id] = copy.deepcopy(cart)


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def add(self, order: Order) -> Order:
        order.id = self._store.next_id("order")
        self._store.orders[order.id] = copy.deepcopy(order)
        user = self._store.users.get(order.user_id)
        order.customer_email = user.email if user else None
        return order

    def get_by_id(self, order_id: int, for_update: bool = False) -> Order | None:
        order = self._store.orders.get(order_id)
        return self._with_email(order) if order is not None else None

    def save_status(self, order: Order) -> None:
        stored = self._store.orders[order.id]
        stored.status = order.status
        stored.updated_at = order.updated_at

    def list_for_user(self, user_id: int) -> list[Order]:
        orders = [o for o in self._store.orders.values() if o.user_id == user_id]
        return [self._with_email(o) for o in self._newest_first(orders)]

    def search(
        self, criteria: OrderFilter, offset: int, limit: int
    ) -> tuple[list[Order], int]:
        matching = [
            o for o in self._newest_first(self._store.orders.values())
            if self._matches(self._with_email(o), criteria)
        ]
        page = matching[offset:offset + limit]
        return [self._with_email(o) for o in page], len(matching)

    # --- Helpers --------------------------------------------------------------

    def _with_email(self, order: Order) -> Order:
        user = self._store.users.get(order.user_id)
        return dataclasses.replace(
            copy.deepcopy(order), customer_email=user.email if user else None
        )

    @staticmethod
    def _newest_first(orders) -> list[Order]:
        return sorted(orders, key=lambda o: (o.created_at, o.id), reverse=True)

    @staticmethod
    def _matches(order: Order, criteria: OrderFilter) -> bool:
        predicates: list[Callable[[Order], bool]] = []
        if criteria.email:
            predicates.append(
                lambda o: o.customer_email is not None
                and criteria.email.lower() in o.customer_email.lower()
            )
        if criteria.min_total is not None:
            predicates.append(lambda o: o.total.amount >= criteria.min_total)
        if criteria.max_total is not None:
            predicates.append(lambda o: o.total.amount <= criteria.max_total)
        if criteria.created_from is not None:
            predicates.append(lambda o: o.created_at >= criteria.created_from)
        if criteria.created_to is not None:
            predicates.append(lambda o: o.created_at <= criteria.created_to)
        return all(p(order) for p in predicates)


class FakeOrderHistoryRepository(OrderHistoryRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def append(self, entry: OrderHistoryEntry) -> OrderHistoryEntry:
        stored = dataclasses.replace(entry, id=self._store.next_id("history"))
        self._store.history.append(stored)
        return stored

    def list_for_order(self, order_id: int) -> list[OrderHistoryEntry]:
        entries = [e for e in self._store.history if e.order_id == order_id]
        entries.sort(key=lambda e: (e.changed_at, e.id), reverse=True)
        result = []
        for entry in entries:
            user = self._store.users.get(entry.changed_by_id)
            result.append(
                dataclasses.replace(entry, changed_by_email=user.email if user else None)
            )
        return result


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: FakeStore | None = None) -> None:
        self.store = store or FakeStore()
        self.products = FakeProductRepository(self.store)
        self.users = FakeUserRepository(self.store)
        self.carts = FakeCartRepository(self.store)
        self.orders = FakeOrderRepository(self.store)
        self.history = FakeOrderHistoryRepository(self.store)
        self.commits = 0
        self.rollbacks = 0
        self._snapshot: dict | None = None

    def _begin(self) -> None:
        self._snapshot = self.store.snapshot()

    def commit(self) -> None:
        self.commits += 1
        self._snapshot = None

    def rollback(self) -> None:
        if self._snapshot is not None:
            self.rollbacks += 1
            self.store.restore(self._snapshot)
            self._snapshot = None
