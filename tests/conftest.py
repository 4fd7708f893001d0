"""Shared test fixtures for the incident backstage test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.config import Settings
from core.models import (
    FetchIncidentsParams,
    Incident,
    IncidentDetail,
    IncidentsPage,
    StatusPost,
)
from integrations.base import IncidentProvider, UserDirectory


@pytest.fixture
def mock_settings() -> Settings:
    """Return a Settings instance configured for mock mode."""
    return Settings(
        backstage_mode="mock",
        mock_scenario="default",
        mock_delay_enabled=False,
        search_debounce_ms=20,
    )


@pytest.fixture
def params() -> FetchIncidentsParams:
    return FetchIncidentsParams(team_id="T1")


@pytest.fixture
def sample_incident() -> Incident:
    return Incident(
        id="inc-01",
        name="Checkout latency spike",
        is_active=False,
        created_at=1700003600,
        ended_at=1700005400,
        commander_user_id="user-1",
        team_id="T1",
        channel_id="chan-01",
    )


@pytest.fixture
def sample_detail(sample_incident) -> IncidentDetail:
    return IncidentDetail(
        **sample_incident.model_dump(),
        channel_name="incident-checkout-latency",
        team_name="payments",
        num_members=6,
        total_posts=42,
        status_posts=[StatusPost(post_id="post-01a", created_at=1700003700000)],
    )


@pytest.fixture
def provider(sample_incident, sample_detail):
    """An IncidentProvider double whose calls all succeed."""
    provider = MagicMock(spec=IncidentProvider)
    provider.list_incidents = AsyncMock(
        return_value=IncidentsPage(items=[sample_incident], total_count=1)
    )
    provider.list_commanders = AsyncMock(return_value=[])
    provider.get_incident_detail = AsyncMock(return_value=sample_detail)
    provider.get_incident_summary = AsyncMock(return_value=sample_incident)
    return provider


@pytest.fixture
def users():
    directory = MagicMock(spec=UserDirectory)
    directory.get_user = AsyncMock()
    return directory
