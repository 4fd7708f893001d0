"""Settings page: pick the data source and the list behaviour."""

import streamlit as st

from app.state.session import apply_settings, get_session_settings


def render() -> None:
    st.header("Settings")

    settings = get_session_settings()

    # ------------------------------------------------------------------
    # Data source
    # ------------------------------------------------------------------
    st.subheader("Data Source")
    mode = st.radio(
        "Backstage mode",
        options=["mock", "live"],
        index=0 if settings.backstage_mode == "mock" else 1,
        horizontal=True,
        help="Mock mode reads scenario fixtures. Live mode calls the incident API.",
    )
    incident_modes = ["", "mock", "live", "sql"]
    incidents_mode = st.selectbox(
        "Incident source override",
        options=incident_modes,
        index=incident_modes.index(settings.incidents_mode) if settings.incidents_mode in incident_modes else 0,
        format_func=lambda m: m or "(use backstage mode)",
    )

    scenarios = settings.available_scenarios
    scenario = st.selectbox(
        "Mock scenario",
        options=scenarios,
        index=scenarios.index(settings.mock_scenario) if settings.mock_scenario in scenarios else 0,
        disabled=(mode != "mock" and incidents_mode != "mock"),
    )
    mock_delay = st.checkbox("Simulate API latency", value=settings.mock_delay_enabled)

    # ------------------------------------------------------------------
    # List behaviour
    # ------------------------------------------------------------------
    st.subheader("Incident List")
    team_id = st.text_input("Team ID", value=settings.default_team_id)
    team_name = st.text_input("Team name", value=settings.default_team_name)
    per_page = st.number_input("Incidents per page", min_value=1, max_value=200, value=settings.per_page)
    reset_page = st.checkbox(
        "Return to the first page when a filter changes",
        value=settings.reset_page_on_filter_change,
    )

    # ------------------------------------------------------------------
    # Apply
    # ------------------------------------------------------------------
    st.divider()
    if st.button("Apply settings", type="primary"):
        apply_settings(
            settings.model_copy(
                update={
                    "backstage_mode": mode,
                    "incidents_mode": incidents_mode,
                    "mock_scenario": scenario,
                    "mock_delay_enabled": mock_delay,
                    "default_team_id": team_id,
                    "default_team_name": team_name,
                    "per_page": int(per_page),
                    "reset_page_on_filter_change": reset_page,
                }
            )
        )
        st.success("Settings applied.")
        st.rerun()
