"""Persistence write path for incident runs and their chat artifacts."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Table, insert
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.config import Settings
from core.exceptions import PersistenceError
from storage import schema
from storage.engine import create_store_engine

logger = logging.getLogger(__name__)


class WriteScope:
    """The three inserts, bound to one open connection.

    Nothing here commits; the owner of the connection decides when.
    """

    def __init__(self, conn: Connection) -> None:
        self._conn = conn
        self.tables: list[str] = []

    def _insert(self, table: Table, values: Mapping[str, Any]) -> None:
        try:
            self._conn.execute(insert(table).values(dict(values)))
            if table.name not in self.tables:
                self.tables.append(table.name)
        except SQLAlchemyError as exc:
            reason = getattr(exc, "orig", None) or exc
            logger.error("Insert into %s failed: %s", table.name, reason)
            raise PersistenceError(table.name, str(reason)) from exc

    def insert_incident_run(self, attributes: Mapping[str, Any]) -> None:
        """Insert *attributes* verbatim as one incident row.

        Required columns are the caller's job; the store's constraints are
        the only validation.
        """
        self._insert(schema.incidents, attributes)

    def insert_post(self, post_id: str, created_at: int) -> None:
        self._insert(schema.posts, {"Id": post_id, "CreateAt": created_at})

    def insert_status_post(self, incident_id: str, post_id: str) -> None:
        """Link a post to an incident. Both rows must already exist."""
        self._insert(schema.status_posts, {"IncidentID": incident_id, "PostID": post_id})


class PersistenceWriter:
    """Records incident runs, posts and status-post links.

    The single-row methods each run in their own transaction with no retry
    and no existence checks. ``transaction()`` groups several writes so they
    are committed or rolled back together.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> PersistenceWriter:
        return cls(create_store_engine(settings.database_url))

    @contextmanager
    def transaction(self) -> Iterator[WriteScope]:
        scope: WriteScope | None = None
        try:
            with self._engine.begin() as conn:
                scope = WriteScope(conn)
                yield scope
        except SQLAlchemyError as exc:
            # Commit-time failures surface here rather than from an insert,
            # so name every table the scope wrote to.
            tables = ", ".join(scope.tables) if scope and scope.tables else "transaction"
            reason = getattr(exc, "orig", None) or exc
            logger.error("Commit to %s failed: %s", tables, reason)
            raise PersistenceError(tables, str(reason)) from exc

    def insert_incident_run(self, attributes: Mapping[str, Any]) -> None:
        with self.transaction() as scope:
            scope.insert_incident_run(attributes)

    def insert_post(self, post_id: str, created_at: int) -> None:
        with self.transaction() as scope:
            scope.insert_post(post_id, created_at)

    def insert_status_post(self, incident_id: str, post_id: str) -> None:
        with self.transaction() as scope:
            scope.insert_status_post(incident_id, post_id)

    def record_status_update(self, incident_id: str, post_id: str, created_at: int) -> None:
        """Insert a status post and its link to an existing incident as a unit."""
        with self.transaction() as scope:
            scope.insert_post(post_id, created_at)
            scope.insert_status_post(incident_id, post_id)

    def record_run(
        self,
        attributes: Mapping[str, Any],
        post_id: str | None = None,
        created_at: int | None = None,
    ) -> None:
        """Insert an incident run and, optionally, its first status post as a unit."""
        with self.transaction() as scope:
            scope.insert_incident_run(attributes)
            if post_id is not None:
                scope.insert_post(post_id, created_at if created_at is not None else attributes.get("CreateAt", 0))
                scope.insert_status_post(attributes["ID"], post_id)
