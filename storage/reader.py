"""Incident queries served straight from the relational store."""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy import String, func, select
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import SQLAlchemyError

from app.config import Settings
from core.exceptions import IncidentNotFoundError, IntegrationError
from core.models import (
    Commander,
    FetchIncidentsParams,
    Incident,
    IncidentDetail,
    IncidentsPage,
    SortColumn,
    SortOrder,
    StatusFilter,
    StatusPost,
)
from integrations.base import IncidentProvider
from storage import schema
from storage.engine import create_schema, create_store_engine

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    # Case-insensitive, like the mock backend.
    SortColumn.NAME: func.lower(schema.incidents.c.Name, type_=String),
    SortColumn.STATUS: schema.incidents.c.IsActive,
    SortColumn.CREATED_AT: schema.incidents.c.CreateAt,
    SortColumn.ENDED_AT: schema.incidents.c.EndAt,
}


def _row_to_incident(row: RowMapping) -> dict:
    return {
        "id": row["ID"],
        "name": row["Name"],
        "description": row["Description"],
        "is_active": row["IsActive"],
        "created_at": row["CreateAt"] // 1000,
        "ended_at": row["EndAt"] // 1000,
        "commander_user_id": row["CommanderUserID"],
        "team_id": row["TeamID"],
        "channel_id": row["ChannelID"],
    }


class SqlIncidentProvider(IncidentProvider):
    """IncidentProvider backed by the IR_* tables the writer fills.

    Queries are blocking, so each one runs in a worker thread.
    """

    provider_key = "incidents"

    def __init__(self, settings: Settings, engine: Engine | None = None) -> None:
        if engine is None:
            # A store of its own starts empty; make sure the tables exist.
            engine = create_store_engine(settings.database_url)
            create_schema(engine)
        self._engine = engine

    async def _run(self, fn, *args):
        try:
            return await asyncio.to_thread(fn, *args)
        except SQLAlchemyError as exc:
            raise IntegrationError(self.provider_key, f"Store query failed: {exc}") from exc

    # ------------------------------------------------------------------
    # Blocking queries
    # ------------------------------------------------------------------

    def _query_page(self, params: FetchIncidentsParams) -> IncidentsPage:
        inc = schema.incidents
        conditions = [inc.c.TeamID == params.team_id, inc.c.DeleteAt == 0]
        if params.search_term:
            name = func.lower(inc.c.Name, type_=String)
            conditions.append(name.contains(params.search_term.lower(), autoescape=True))
        if params.status is StatusFilter.ACTIVE:
            conditions.append(inc.c.IsActive.is_(True))
        elif params.status is StatusFilter.ENDED:
            conditions.append(inc.c.IsActive.is_(False))
        if params.commander_user_id:
            conditions.append(inc.c.CommanderUserID == params.commander_user_id)

        sort_col = _SORT_COLUMNS[params.sort]
        ordering = sort_col.desc() if params.order is SortOrder.DESC else sort_col.asc()
        stmt = (
            select(inc)
            .where(*conditions)
            .order_by(ordering, inc.c.ID.asc())
            .limit(params.per_page)
            .offset(params.page * params.per_page)
        )
        count_stmt = select(func.count()).select_from(inc).where(*conditions)

        with self._engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
            total = conn.execute(count_stmt).scalar_one()

        return IncidentsPage(
            items=[Incident.model_validate(_row_to_incident(row)) for row in rows],
            total_count=total,
        )

    def _query_commanders(self, team_id: str) -> list[Commander]:
        inc = schema.incidents
        stmt = (
            select(inc.c.CommanderUserID)
            .where(inc.c.TeamID == team_id, inc.c.DeleteAt == 0)
            .distinct()
            .order_by(inc.c.CommanderUserID)
        )
        with self._engine.connect() as conn:
            return [Commander(user_id=user_id) for user_id in conn.execute(stmt).scalars()]

    def _query_incident(self, incident_id: str, with_details: bool) -> Incident:
        inc = schema.incidents
        stmt = select(inc).where(inc.c.ID == incident_id, inc.c.DeleteAt == 0)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
            if row is None:
                raise IncidentNotFoundError(self.provider_key, incident_id)
            if not with_details:
                return Incident.model_validate(_row_to_incident(row))

            posts_stmt = (
                select(schema.posts.c.Id, schema.posts.c.CreateAt)
                .join(schema.status_posts, schema.status_posts.c.PostID == schema.posts.c.Id)
                .where(schema.status_posts.c.IncidentID == incident_id)
                .order_by(schema.posts.c.CreateAt)
            )
            status_posts = [
                StatusPost(post_id=post_id, created_at=created_at)
                for post_id, created_at in conn.execute(posts_stmt)
            ]

        return IncidentDetail.model_validate({**_row_to_incident(row), "status_posts": status_posts})

    # ------------------------------------------------------------------
    # IncidentProvider
    # ------------------------------------------------------------------

    async def list_incidents(self, params: FetchIncidentsParams) -> IncidentsPage:
        return await self._run(self._query_page, params)

    async def list_commanders(self, team_id: str) -> list[Commander]:
        return await self._run(self._query_commanders, team_id)

    async def get_incident_detail(self, incident_id: str) -> IncidentDetail:
        return await self._run(self._query_incident, incident_id, True)

    async def get_incident_summary(self, incident_id: str) -> Incident:
        return await self._run(self._query_incident, incident_id, False)
