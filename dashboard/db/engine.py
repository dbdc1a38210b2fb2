# dashboard/db/engine.py

import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from dashboard.config import get_settings
from dashboard.db.schema import metadata

logger = logging.getLogger(__name__)

_engine: Optional[Engine] = None


def make_engine(database_url: str) -> Engine:
    """
    Build an engine for `database_url`.

    SQLite connections get foreign keys switched on so the store enforces
    invoices.customer_id. In-memory SQLite shares a single connection.
    """
    kwargs = {}
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite+pysqlite://"):
            kwargs["poolclass"] = StaticPool

    # echo=True if you want to see SQL printed in the terminal
    engine = create_engine(database_url, future=True, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.info("Database engine created: %s", database_url.split("@")[-1])
    return engine


def get_engine() -> Engine:
    global _engine

    if _engine is None:
        _engine = make_engine(get_settings().database_url)
    return _engine


def init_db(engine: Optional[Engine] = None) -> Engine:
    engine = engine or get_engine()
    metadata.create_all(engine)
    logger.info("Database tables created")
    return engine


def reset_engine() -> None:
    """Dispose of the process-wide engine (used by tests and scripts)."""
    global _engine
    if _engine is not None:
        _engine.dispose()
    _engine = None
