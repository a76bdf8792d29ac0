"""Fixtures for tests that run against a real SQLAlchemy database."""

import pytest
from fastapi.testclient import TestClient

from candystore.infrastructure.api.app import create_app
from candystore.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
    init_database,
)
from candystore.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork
from tests.infrastructure.catalog import seed_catalog

TEST_DATABASE_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db_engine():
    """In-memory SQLite with every table created."""
    engine = create_database_engine(TEST_DATABASE_URL)
    init_database(engine)
    yield engine
    engine.dispose()


@pytest.fixture(scope="function")
def uow_factory(db_engine):
    session_factory = create_session_factory(db_engine)
    return lambda: SqlAlchemyUnitOfWork(session_factory)


@pytest.fixture(scope="function")
def catalog(uow_factory):
    return seed_catalog(uow_factory)


@pytest.fixture(scope="function")
def client(uow_factory):
    # Don't raise server exceptions so error status codes can be asserted
    app = create_app(uow_factory=uow_factory)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def alice_headers() -> dict:
    return {"X-User-Id": "alice"}
