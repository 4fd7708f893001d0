"""Live incident backend: the incident-response plugin REST API."""

from __future__ import annotations

from pydantic import ValidationError

from core.exceptions import IncidentNotFoundError, IntegrationError
from core.models import (
    Commander,
    FetchIncidentsParams,
    Incident,
    IncidentDetail,
    IncidentsPage,
)
from integrations.base import IncidentProvider
from integrations.rest.base import NotFound, RestBase

API_PREFIX = "/plugins/com.mattermost.plugin-incident-response/api/v0"


class RestIncidentProvider(IncidentProvider, RestBase):
    provider_key = "incidents"

    async def list_incidents(self, params: FetchIncidentsParams) -> IncidentsPage:
        try:
            data = await self._get_json(f"{API_PREFIX}/incidents", params=params.to_query())
        except NotFound as exc:
            raise IntegrationError(self.provider_key, f"Incident list endpoint missing: {exc}") from exc
        try:
            return IncidentsPage(
                items=[Incident.model_validate(raw) for raw in data.get("incidents") or []],
                total_count=data.get("total_count", 0),
            )
        except (AttributeError, ValidationError) as exc:
            raise IntegrationError(self.provider_key, f"Malformed incident list: {exc}") from exc

    async def list_commanders(self, team_id: str) -> list[Commander]:
        try:
            data = await self._get_json(f"{API_PREFIX}/incidents/commanders", params={"team_id": team_id})
        except NotFound:
            return []
        try:
            return [Commander.model_validate(raw) for raw in data]
        except (TypeError, ValidationError) as exc:
            raise IntegrationError(self.provider_key, f"Malformed commander list: {exc}") from exc

    async def get_incident_detail(self, incident_id: str) -> IncidentDetail:
        data = await self._get_incident(f"{API_PREFIX}/incidents/{incident_id}/details", incident_id)
        try:
            return IncidentDetail.model_validate(data)
        except ValidationError as exc:
            raise IntegrationError(self.provider_key, f"Malformed incident detail: {exc}") from exc

    async def get_incident_summary(self, incident_id: str) -> Incident:
        data = await self._get_incident(f"{API_PREFIX}/incidents/{incident_id}", incident_id)
        try:
            return Incident.model_validate(data)
        except ValidationError as exc:
            raise IntegrationError(self.provider_key, f"Malformed incident: {exc}") from exc

    async def _get_incident(self, path: str, incident_id: str):
        try:
            return await self._get_json(path)
        except NotFound as exc:
            raise IncidentNotFoundError(self.provider_key, incident_id) from exc
