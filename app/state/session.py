"""Streamlit session state management."""

from __future__ import annotations

import streamlit as st

from app.config import Settings, get_settings
from core.dashboard import IncidentDashboard
from integrations.registry import IntegrationRegistry

# Keys used in st.session_state
_SETTINGS_KEY = "app_settings"
_REGISTRY_KEY = "integration_registry"
_DASHBOARD_KEY = "incident_dashboard"


def init_session_state() -> None:
    """Initialize all session state keys with defaults if not already set."""
    if _SETTINGS_KEY not in st.session_state:
        st.session_state[_SETTINGS_KEY] = get_settings()
    if _REGISTRY_KEY not in st.session_state:
        st.session_state[_REGISTRY_KEY] = IntegrationRegistry(st.session_state[_SETTINGS_KEY])
    if _DASHBOARD_KEY not in st.session_state:
        st.session_state[_DASHBOARD_KEY] = None


def get_session_settings() -> Settings:
    return st.session_state[_SETTINGS_KEY]


def get_dashboard(team_id: str, team_name: str) -> tuple[IncidentDashboard, bool]:
    """Return the dashboard for *team_id*, and whether it was just mounted.

    A different team keeps the mounted dashboard and switches its team.
    """
    dashboard: IncidentDashboard | None = st.session_state[_DASHBOARD_KEY]
    if dashboard is None:
        dashboard = IncidentDashboard.from_registry(
            get_session_settings(),
            st.session_state[_REGISTRY_KEY],
            team_id,
            team_name,
        )
        st.session_state[_DASHBOARD_KEY] = dashboard
        return dashboard, True

    if dashboard.query.params.team_id != team_id:
        dashboard.switch_team(team_id, team_name)
    return dashboard, False


def unmount_dashboard() -> None:
    """Drop the dashboard and its query state."""
    st.session_state[_DASHBOARD_KEY] = None


def apply_settings(settings: Settings) -> None:
    """Replace the settings; providers and the mounted dashboard are rebuilt on next use."""
    st.session_state[_SETTINGS_KEY] = settings
    st.session_state[_REGISTRY_KEY] = IntegrationRegistry(settings)
    unmount_dashboard()
