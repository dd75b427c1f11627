"""Demo data: two users and three products."""

from __future__ import annotations

import structlog

from oms.domain.model.product import Product
from oms.domain.model.user import Role, User
from oms.domain.model.value_objects import Money
from oms.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)

DEMO_USERS = [
    ("admin@example.com", Role.ADMIN),
    ("user@example.com", Role.CUSTOMER),
]

DEMO_PRODUCTS = [
    ("Gaming Mouse", "RGB mouse with high DPI", "59.99", 100),
    ("Mechanical Keyboard", "Blue switches, RGB lighting", "89.99", 75),
    ("HD Monitor", "24-inch Full HD monitor", "129.99", 50),
]


def seed_demo_data(uow: UnitOfWork) -> tuple[int, int]:
    """Insert the demo users and products; returns how many were created.

    Users are upserted by email.  Products are only added to an empty
    catalog, so running the seed twice does not duplicate them.
    """
    created_users = created_products = 0
    with uow:
        for email, role in DEMO_USERS:
            if uow.users.get_by_email(email) is None:
                uow.users.add(User(id=None, email=email, role=role))
                created_users += 1

        if not uow.products.list_all():
            for name, description, price, stock in DEMO_PRODUCTS:
                uow.products.add(
                    Product(
                        id=None,
                        name=name,
                        description=description,
                        price=Money.of(price),
                        stock=stock,
                    )
                )
                created_products += 1
        uow.commit()

    logger.info("Seeded demo data", users=created_users, products=created_products)
    return created_users, created_products
