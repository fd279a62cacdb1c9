"""Database infrastructure for the ledger application.

This module exposes concrete helpers to create and reuse the SQLAlchemy
engine connected to the ledger database. It belongs to the infrastructure
layer because it deals with external systems (PostgreSQL in production,
SQLite for local runs and tests).
"""

from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import QueuePool

from src.application.ports.database import DatabaseEnginePort
from src.infrastructure.settings import LedgerSettings


def configure_sqlite_engine(engine: Engine) -> Engine:
    """Make every SQLite transaction take the database write lock up front.

    pysqlite defers BEGIN until the first write, so reads inside a unit of
    work would otherwise run outside any transaction. Following the
    SQLAlchemy pysqlite recipe, the driver's own BEGIN handling is disabled
    and each transaction starts with ``BEGIN IMMEDIATE``. Foreign keys are
    enforced on every new connection.

    Args:
        engine: Engine bound to a SQLite database.

    Returns:
        Engine: The same engine, with listeners attached.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, _connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


def _create_engine(settings: LedgerSettings) -> Engine:
    """Create a configured SQLAlchemy engine for the ledger database.

    Args:
        settings: Connection settings including the database URL.

    Returns:
        Engine: A SQLAlchemy engine with a small connection pool and health
        checks enabled. SQLite URLs keep the dialect's default pool and
        serialize writers through ``configure_sqlite_engine``.
    """
    if make_url(settings.db_url).get_backend_name() == "sqlite":
        return configure_sqlite_engine(
            create_engine(settings.db_url, echo=settings.echo, future=True)
        )
    return create_engine(
        settings.db_url,
        poolclass=QueuePool,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_pre_ping=True,
        echo=settings.echo,
        future=True,
    )


_ledger_engine: Optional[Engine] = None


def get_ledger_engine() -> Engine:
    """Get a singleton SQLAlchemy engine for the ledger database.

    Returns:
        Engine: Lazily initialized engine connected to the ledger backend.
    """
    global _ledger_engine
    if _ledger_engine is None:
        _ledger_engine = _create_engine(LedgerSettings.from_env())
    return _ledger_engine


class SqlAlchemyDatabaseEngineAdapter(DatabaseEnginePort):
    """DatabaseEnginePort implementation backed by a SQLAlchemy engine.

    The adapter hides configuration details (environment variables, pooling)
    behind the port so application use cases can depend only on the protocol.
    """

    def get_ledger_engine(self) -> Engine:
        """Get the engine for the ledger database.

        Returns:
            Engine: SQLAlchemy engine connected to the ledger database.
        """
        return get_ledger_engine()


__all__ = [
    "configure_sqlite_engine",
    "get_ledger_engine",
    "SqlAlchemyDatabaseEngineAdapter",
]
