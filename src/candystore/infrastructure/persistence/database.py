"""Database engine creation and schema setup.

SQLite needs two adjustments to behave like the row-locking store the
ledger expects:

- foreign keys are enforced on every connection;
- transactions start with ``BEGIN IMMEDIATE``, taking the write lock up
  front, so two shoppers can never both read a flavor row and then both
  write it. Other writers wait (up to ``timeout`` seconds) instead of
  failing.

Other databases get ``SELECT ... FOR UPDATE`` row locks from the
repositories and need no tweaks here.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from candystore.infrastructure.persistence.orm import Base

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT = 30


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    """Create and configure the engine for *database_url*."""
    logger.info("Creating database engine: %s", database_url)

    if not database_url.startswith("sqlite"):
        return create_engine(database_url, echo=echo, pool_pre_ping=True)

    if ":memory:" in database_url or "mode=memory" in database_url:
        # In-memory databases (tests) must share one connection
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        _ensure_sqlite_directory(database_url)
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        )

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Hand transaction control to the "begin" listener below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Create all tables. Safe to call repeatedly."""
    logger.info("Initializing database tables")
    Base.metadata.create_all(engine)


def _ensure_sqlite_directory(database_url: str) -> None:
    path = database_url.split("///", 1)[-1]
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
