"""Shared fixtures for the SQL, HTTP and CLI tests.

Every test gets its own in-memory SQLite database.
"""

import pytest
from fastapi.testclient import TestClient

from oms.domain.model.product import Product
from oms.domain.model.user import Role, User
from oms.domain.model.value_objects import Money
from oms.infrastructure.bootstrap import build_engine, create_schema, unit_of_work_factory
from oms.infrastructure.config import Settings
from oms.infrastructure.http.app import create_app

ADMIN_ID = 1
CUSTOMER_ID = 2
OTHER_CUSTOMER_ID = 3


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", log_level="WARNING")


@pytest.fixture
def engine(settings):
    engine = build_engine(settings)
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def uow_factory(engine):
    return unit_of_work_factory(engine)


@pytest.fixture
def seeded(uow_factory):
    """Three users (admin, two customers) and two products.

    Returns the product ids: Widget costs 10.99 with 5 in stock, Gadget
    costs 25.00 with 2 in stock.
    """
    with uow_factory() as uow:
        uow.users.add(User(id=None, email="admin@example.com", role=Role.ADMIN))
        uow.users.add(User(id=None, email="user@example.com"))
        uow.users.add(User(id=None, email="Other@Shop.test"))
        widget = uow.products.add(
            Product(id=None, name="Widget", price=Money.of("10.99"), stock=5)
        )
        gadget = uow.products.add(
            Product(id=None, name="Gadget", price=Money.of("25.00"), stock=2)
        )
        uow.commit()
    return widget.id, gadget.id


@pytest.fixture
def client(settings, engine):
    with TestClient(create_app(settings, engine=engine)) as test_client:
        yield test_client
