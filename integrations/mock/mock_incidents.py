"""Mock incident backend: implements IncidentProvider over scenario fixtures."""

from __future__ import annotations

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
)
from integrations.base import IncidentProvider
from integrations.mock.base import MockBase


def _sort_key(column: SortColumn):
    if column is SortColumn.NAME:
        return lambda inc: inc.name.lower()
    if column is SortColumn.STATUS:
        return lambda inc: inc.is_active
    if column is SortColumn.ENDED_AT:
        return lambda inc: inc.ended_at
    return lambda inc: inc.created_at


def query_incidents(incidents: list[Incident], params: FetchIncidentsParams) -> IncidentsPage:
    """Filter, sort and slice *incidents* the way the incident API does."""
    matches = [inc for inc in incidents if inc.team_id == params.team_id]

    if params.search_term:
        term = params.search_term.lower()
        matches = [inc for inc in matches if term in inc.name.lower()]
    if params.status is StatusFilter.ACTIVE:
        matches = [inc for inc in matches if inc.is_active]
    elif params.status is StatusFilter.ENDED:
        matches = [inc for inc in matches if not inc.is_active]
    if params.commander_user_id:
        matches = [inc for inc in matches if inc.commander_user_id == params.commander_user_id]

    # Two stable passes: id as the tie-breaker, then the requested column.
    matches.sort(key=lambda inc: inc.id)
    matches.sort(key=_sort_key(params.sort), reverse=params.order is SortOrder.DESC)

    start = params.page * params.per_page
    return IncidentsPage(
        items=matches[start:start + params.per_page],
        total_count=len(matches),
    )


class MockIncidentService(IncidentProvider, MockBase):
    provider_key = "incidents"

    def __init__(self, settings: Settings) -> None:
        MockBase.__init__(self, settings)
        self._incidents = [Incident.model_validate(raw) for raw in self._data.get("incidents", [])]

    def _find(self, incident_id: str) -> Incident:
        for incident in self._incidents:
            if incident.id == incident_id:
                return incident
        raise IncidentNotFoundError(self.provider_key, incident_id)

    async def list_incidents(self, params: FetchIncidentsParams) -> IncidentsPage:
        await self._simulate_delay()
        return query_incidents(self._incidents, params)

    async def list_commanders(self, team_id: str) -> list[Commander]:
        await self._simulate_delay()
        seen: dict[str, Commander] = {}
        for incident in self._incidents:
            if incident.team_id == team_id and incident.commander_user_id not in seen:
                seen[incident.commander_user_id] = Commander(user_id=incident.commander_user_id)
        return list(seen.values())

    async def get_incident_detail(self, incident_id: str) -> IncidentDetail:
        await self._simulate_delay()
        incident = self._find(incident_id)
        if incident_id in self._data.get("detail_unavailable", []):
            raise IntegrationError(self.provider_key, f"Details for '{incident_id}' are unavailable")
        extra = self._data.get("details", {}).get(incident_id, {})
        return IncidentDetail.model_validate({**incident.model_dump(), **extra})

    async def get_incident_summary(self, incident_id: str) -> Incident:
        await self._simulate_delay()
        return self._find(incident_id).model_copy()
