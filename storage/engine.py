"""SQLAlchemy engine construction for the incident store."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from storage.schema import metadata

logger = logging.getLogger(__name__)


def create_store_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for *url*.

    SQLite connections get foreign-key enforcement switched on, since the
    status-post link table relies on the store to reject dangling references.
    """
    kwargs: dict = {"echo": echo, "future": True}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        # Reads run in worker threads (see storage.reader).
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, **kwargs)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    logger.info("Created incident store engine for %s", url.split("@")[-1])
    return engine


def create_schema(engine: Engine) -> None:
    """Create any missing tables."""
    metadata.create_all(engine)
