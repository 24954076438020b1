"""
Test Configuration and Fixtures

Every test gets a fresh in-memory SQLite database. Data written through one
session is read back through another, so lazy loads and statement counts
reflect real round trips instead of identity-map hits.
"""

from collections.abc import Generator

import pytest
from sqlalchemy import Engine
from sqlmodel import Session

from ordershop.application.services import ItemService, MemberService, OrderService
from ordershop.core.db import (
    create_db_and_tables,
    create_db_engine,
    drop_db_and_tables,
    init_db,
)
from ordershop.infrastructure.database import SqlModelUnitOfWork, StatementCounter


@pytest.fixture(scope="function")
def engine() -> Generator[Engine, None, None]:
    """Provide an in-memory database with the full schema."""
    engine = create_db_engine("sqlite://", echo=False)
    create_db_and_tables(engine)

    yield engine

    drop_db_and_tables(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return lambda: Session(engine, expire_on_commit=False)


@pytest.fixture
def db_session(engine) -> Generator[Session, None, None]:
    """Provide a session for direct repository tests."""
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded(engine) -> None:
    """Insert the sample members, books and orders, then close the session."""
    with Session(engine) as session:
        init_db(session)


@pytest.fixture
def uow_factory(session_factory):
    return lambda: SqlModelUnitOfWork(session_factory)


@pytest.fixture
def statement_counter(engine) -> StatementCounter:
    """An inactive counter on the test engine; use it as a context manager."""
    return StatementCounter(engine)


@pytest.fixture
def order_service(uow_factory) -> OrderService:
    return OrderService(uow_factory)


@pytest.fixture
def member_service(uow_factory) -> MemberService:
    return MemberService(uow_factory)


@pytest.fixture
def item_service(uow_factory) -> ItemService:
    return ItemService(uow_factory)
