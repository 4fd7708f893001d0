"""Tests for core/detail_resolver.py: DetailResolver."""

from __future__ import annotations

import asyncio

import pytest

from core.detail_resolver import (
    LISTING,
    DetailResolver,
    DetailSource,
    ViewMode,
)
from core.exceptions import IncidentNotFoundError, IntegrationError, InvalidTransitionError


@pytest.fixture
def resolver(provider) -> DetailResolver:
    return DetailResolver(provider)


class TestSelect:
    @pytest.mark.asyncio
    async def test_detail_success(self, resolver, provider, sample_detail):
        result = await resolver.select("inc-01")

        assert result.source is DetailSource.DETAIL
        assert result.ok
        assert result.detail is sample_detail
        assert resolver.state.mode is ViewMode.VIEWING_DETAIL
        assert resolver.state.incident_id == "inc-01"
        assert resolver.selected is sample_detail
        provider.get_incident_summary.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_falls_back_to_summary(self, resolver, provider, sample_incident):
        provider.get_incident_detail.side_effect = IntegrationError("incidents", "503")

        result = await resolver.select("inc-01")

        assert result.source is DetailSource.SUMMARY
        assert result.incident is sample_incident
        assert result.detail is None
        assert resolver.selected is sample_incident
        assert resolver.state.mode is ViewMode.VIEWING_DETAIL
        provider.get_incident_summary.assert_awaited_once_with("inc-01")

    @pytest.mark.parametrize(
        "error",
        [
            ConnectionError("reset"),
            IncidentNotFoundError("incidents", "inc-01"),
            ValueError("bad json"),
        ],
    )
    @pytest.mark.asyncio
    async def test_any_primary_failure_falls_back(self, resolver, provider, error):
        provider.get_incident_detail.side_effect = error
        result = await resolver.select("inc-01")
        assert result.source is DetailSource.SUMMARY

    @pytest.mark.asyncio
    async def test_both_failing_leaves_no_selection(self, resolver, provider):
        provider.get_incident_detail.side_effect = IntegrationError("incidents", "503")
        provider.get_incident_summary.side_effect = IncidentNotFoundError("incidents", "inc-01")

        result = await resolver.select("inc-01")

        assert result.source is DetailSource.FAILED
        assert not result.ok
        assert result.incident is None
        assert "inc-01" in result.error
        assert resolver.state == LISTING
        assert resolver.selected is None
        assert resolver.last_failure is result

    @pytest.mark.asyncio
    async def test_fallback_only_after_primary_fails(self, resolver, provider, sample_incident):
        calls = []

        async def detail(incident_id):
            calls.append("detail:start")
            await asyncio.sleep(0.01)
            calls.append("detail:fail")
            raise IntegrationError("incidents", "timeout")

        async def summary(incident_id):
            calls.append("summary")
            return sample_incident

        provider.get_incident_detail.side_effect = detail
        provider.get_incident_summary.side_effect = summary

        await resolver.select("inc-01")
        assert calls == ["detail:start", "detail:fail", "summary"]

    @pytest.mark.asyncio
    async def test_success_clears_previous_failure(self, resolver, provider, sample_detail):
        provider.get_incident_detail.side_effect = IntegrationError("incidents", "503")
        provider.get_incident_summary.side_effect = IntegrationError("incidents", "503")
        await resolver.select("inc-01")
        assert resolver.last_failure is not None

        provider.get_incident_detail.side_effect = None
        provider.get_incident_detail.return_value = sample_detail
        await resolver.select("inc-01")
        assert resolver.last_failure is None


class TestTransitions:
    @pytest.mark.asyncio
    async def test_select_while_viewing_is_rejected(self, resolver):
        await resolver.select("inc-01")
        with pytest.raises(InvalidTransitionError):
            await resolver.select("inc-02")

    @pytest.mark.asyncio
    async def test_select_while_resolving_is_rejected(self, resolver, provider, sample_detail):
        gate = asyncio.Event()

        async def slow_detail(incident_id):
            await gate.wait()
            return sample_detail

        provider.get_incident_detail.side_effect = slow_detail
        first = asyncio.ensure_future(resolver.select("inc-01"))
        await asyncio.sleep(0)

        with pytest.raises(InvalidTransitionError):
            await resolver.select("inc-02")

        gate.set()
        result = await first
        assert result.incident_id == "inc-01"

    @pytest.mark.asyncio
    async def test_close_returns_to_listing(self, resolver):
        await resolver.select("inc-01")
        resolver.close()
        assert resolver.state == LISTING
        assert resolver.selected is None

    def test_close_from_listing_is_harmless(self, resolver):
        resolver.close()
        assert resolver.state.mode is ViewMode.LISTING

    @pytest.mark.asyncio
    async def test_can_select_again_after_close(self, resolver):
        await resolver.select("inc-01")
        resolver.close()
        result = await resolver.select("inc-01")
        assert result.ok
