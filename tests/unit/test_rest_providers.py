"""Tests for the live REST providers, served by httpx.MockTransport."""

from __future__ import annotations

import httpx
import pytest

from app.config import Settings
from core.exceptions import IncidentNotFoundError, IntegrationError
from core.models import FetchIncidentsParams, IncidentDetail, StatusFilter
from integrations.rest.incidents import API_PREFIX, RestIncidentProvider
from integrations.rest.users import RestUserDirectory

BASE_URL = "http://chat.example.com"

INCIDENT = {
    "id": "inc-01",
    "name": "Checkout latency spike",
    "is_active": False,
    "created_at": 1700003600,
    "ended_at": 1700005400,
    "commander_user_id": "user-1",
    "team_id": "T1",
}


@pytest.fixture
def settings() -> Settings:
    return Settings(backstage_mode="live", api_base_url=BASE_URL + "/", api_token="s3cret")


def _transport(routes: dict[str, httpx.Response], seen: list[httpx.Request] | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return routes.get(request.url.path, httpx.Response(404))

    return httpx.MockTransport(handler)


class TestListIncidents:
    @pytest.mark.asyncio
    async def test_sends_params_and_auth(self, settings):
        seen: list[httpx.Request] = []
        routes = {f"{API_PREFIX}/incidents": httpx.Response(200, json={"incidents": [INCIDENT], "total_count": 7})}
        provider = RestIncidentProvider(settings, transport=_transport(routes, seen))

        page = await provider.list_incidents(
            FetchIncidentsParams(team_id="T1", page=1, search_term="latency", status=StatusFilter.ENDED)
        )

        assert page.total_count == 7
        assert page.items[0].id == "inc-01"
        request = seen[0]
        assert request.headers["Authorization"] == "Bearer s3cret"
        assert request.url.host == "chat.example.com"
        assert dict(request.url.params) == {
            "team_id": "T1",
            "page": "1",
            "per_page": "15",
            "sort": "created_at",
            "order": "desc",
            "search_term": "latency",
            "status": "ended",
        }

    @pytest.mark.asyncio
    async def test_no_auth_header_without_token(self):
        seen: list[httpx.Request] = []
        routes = {f"{API_PREFIX}/incidents": httpx.Response(200, json={"incidents": [], "total_count": 0})}
        provider = RestIncidentProvider(Settings(api_base_url=BASE_URL), transport=_transport(routes, seen))
        await provider.list_incidents(FetchIncidentsParams(team_id="T1"))
        assert "Authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_null_incident_list(self, settings):
        routes = {f"{API_PREFIX}/incidents": httpx.Response(200, json={"incidents": None, "total_count": 0})}
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        page = await provider.list_incidents(FetchIncidentsParams(team_id="T1"))
        assert page.items == []

    @pytest.mark.parametrize("status", [400, 500, 503])
    @pytest.mark.asyncio
    async def test_error_status(self, settings, status):
        routes = {f"{API_PREFIX}/incidents": httpx.Response(status)}
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        with pytest.raises(IntegrationError) as exc_info:
            await provider.list_incidents(FetchIncidentsParams(team_id="T1"))
        assert str(status) in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_json(self, settings):
        routes = {f"{API_PREFIX}/incidents": httpx.Response(200, content=b"<html>")}
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        with pytest.raises(IntegrationError):
            await provider.list_incidents(FetchIncidentsParams(team_id="T1"))

    @pytest.mark.asyncio
    async def test_transport_failure(self, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        provider = RestIncidentProvider(settings, transport=httpx.MockTransport(handler))
        with pytest.raises(IntegrationError) as exc_info:
            await provider.list_incidents(FetchIncidentsParams(team_id="T1"))
        assert exc_info.value.provider == "incidents"


class TestIncidentLookups:
    @pytest.mark.asyncio
    async def test_commanders(self, settings):
        routes = {
            f"{API_PREFIX}/incidents/commanders": httpx.Response(
                200, json=[{"user_id": "user-1", "username": "alice"}]
            )
        }
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        commanders = await provider.list_commanders("T1")
        assert [c.user_id for c in commanders] == ["user-1"]

    @pytest.mark.asyncio
    async def test_detail(self, settings):
        payload = {**INCIDENT, "channel_name": "incident-checkout", "team_name": "payments", "num_members": 4}
        routes = {f"{API_PREFIX}/incidents/inc-01/details": httpx.Response(200, json=payload)}
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        detail = await provider.get_incident_detail("inc-01")
        assert isinstance(detail, IncidentDetail)
        assert detail.channel_name == "incident-checkout"
        assert detail.num_members == 4

    @pytest.mark.asyncio
    async def test_summary(self, settings):
        routes = {f"{API_PREFIX}/incidents/inc-01": httpx.Response(200, json=INCIDENT)}
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        summary = await provider.get_incident_summary("inc-01")
        assert summary.name == "Checkout latency spike"

    @pytest.mark.asyncio
    async def test_not_found(self, settings):
        provider = RestIncidentProvider(settings, transport=_transport({}))
        with pytest.raises(IncidentNotFoundError):
            await provider.get_incident_detail("missing")
        with pytest.raises(IncidentNotFoundError):
            await provider.get_incident_summary("missing")

    @pytest.mark.asyncio
    async def test_malformed_detail(self, settings):
        routes = {f"{API_PREFIX}/incidents/inc-01/details": httpx.Response(200, json={"name": "no id"})}
        provider = RestIncidentProvider(settings, transport=_transport(routes))
        with pytest.raises(IntegrationError):
            await provider.get_incident_detail("inc-01")


class TestRestUserDirectory:
    @pytest.mark.asyncio
    async def test_get_user(self, settings):
        routes = {
            "/api/v4/users/user-1": httpx.Response(
                200, json={"id": "user-1", "username": "alice", "first_name": "Alice", "last_name": "Ng", "roles": "x"}
            )
        }
        directory = RestUserDirectory(settings, transport=_transport(routes))
        user = await directory.get_user("user-1")
        assert user.display_name == "Alice Ng"

    @pytest.mark.asyncio
    async def test_missing_user_is_bare_profile(self, settings):
        directory = RestUserDirectory(settings, transport=_transport({}))
        user = await directory.get_user("ghost")
        assert user.id == "ghost"
        assert user.username == ""
