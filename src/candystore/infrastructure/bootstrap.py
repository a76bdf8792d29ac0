"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions. The engine is created
lazily, once per process, from ``get_settings()``, and missing tables
are created on first use.
"""

from __future__ import annotations

from functools import lru_cache

from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from candystore.infrastructure.config import get_settings
from candystore.infrastructure.persistence.database import (
    create_database_engine,
    create_session_factory,
    init_database,
)
from candystore.infrastructure.persistence.sql_unit_of_work import SqlAlchemyUnitOfWork


@lru_cache
def engine() -> Engine:
    settings = get_settings()
    created = create_database_engine(settings.database_url, echo=settings.echo_sql)
    init_database(created)
    return created


@lru_cache
def session_factory() -> sessionmaker:
    return create_session_factory(engine())


def unit_of_work() -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(session_factory())


def init_db() -> None:
    init_database(engine())


def reset() -> None:
    """Drop the cached settings and engine so the next call rereads the environment."""
    if engine.cache_info().currsize:
        engine().dispose()
    session_factory.cache_clear()
    engine.cache_clear()
    get_settings.cache_clear()
