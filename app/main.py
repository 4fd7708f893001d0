"""Streamlit entrypoint for the incident backstage."""

import logging

import streamlit as st

from app.pages.incidents import render as incidents_page
from app.pages.settings import render as settings_page
from app.state.session import get_session_settings, init_session_state

init_session_state()
settings = get_session_settings()

# Streamlit reruns this script on every interaction; basicConfig is a no-op
# once the root logger has handlers.
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

pages = st.navigation(
    [
        st.Page(incidents_page, title="Incidents", icon="🚨", url_path="incidents", default=True),
        st.Page(settings_page, title="Settings", icon="⚙️", url_path="settings"),
    ]
)

with st.sidebar:
    st.title("🚨 Incident Backstage")
    team = settings.default_team_name or settings.default_team_id or "no team selected"
    st.caption(f"Team: **{team}**")
    st.caption(
        f"Incidents: **{settings.get_integration_mode('incidents')}** | "
        f"Users: **{settings.get_integration_mode('users')}**"
    )
    if settings.get_integration_mode("incidents") == "sql":
        st.caption(f"Store: `{settings.database_url}`")

pages.run()
