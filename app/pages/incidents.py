"""Incident list with filters, sortable headers, pagination and the detail swap."""

from __future__ import annotations

import asyncio

import streamlit as st

from app.components.incident_detail import render_detail
from app.components.pagination import render_pagination
from app.state.session import get_dashboard, get_session_settings
from core.dashboard import IncidentDashboard
from core.display import format_ended_at, format_timestamp, get_timezone
from core.models import SortColumn, SortOrder, StatusFilter

_COLUMNS = [
    (SortColumn.NAME, "Name", 3),
    (SortColumn.STATUS, "Status", 2),
    (SortColumn.CREATED_AT, "Start Time", 2),
    (SortColumn.ENDED_AT, "End Time", 2),
]


def _header_label(dashboard: IncidentDashboard, column: SortColumn, title: str) -> str:
    params = dashboard.query.params
    if params.sort is not column:
        return title
    return f"{title} {'▲' if params.order is SortOrder.ASC else '▼'}"


async def _render_list(dashboard: IncidentDashboard) -> None:
    settings = dashboard.settings
    tz = get_timezone(settings.display_timezone)
    params = dashboard.query.params

    st.header("Incidents")
    st.caption(f"({dashboard.team_name})")

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------
    col_search, col_commander, col_status = st.columns(3)
    term = col_search.text_input("Search by incident name", value=params.search_term or "")
    if (term or None) != params.search_term:
        dashboard.query.set_search_term(term)

    commanders = await dashboard.commander_options()
    options = [None] + [c.id for c in commanders]
    labels = {c.id: c.display_name for c in commanders}
    commander = col_commander.selectbox(
        "Commander",
        options=options,
        index=options.index(params.commander_user_id) if params.commander_user_id in options else 0,
        format_func=lambda user_id: labels.get(user_id, "All commanders") if user_id else "All commanders",
    )
    if commander != params.commander_user_id:
        dashboard.query.set_commander_filter(commander)

    statuses = list(StatusFilter)
    status = col_status.selectbox(
        "Status",
        options=statuses,
        index=statuses.index(params.status or StatusFilter.ALL),
        format_func=lambda s: s.value.capitalize(),
    )
    if status is not (params.status or StatusFilter.ALL):
        dashboard.query.set_status_filter(status)

    await dashboard.query.wait_idle()
    state = dashboard.query.list_state
    params = dashboard.query.params

    if state.error:
        st.warning(f"Could not refresh incidents: {state.error}")

    # ------------------------------------------------------------------
    # Header row
    # ------------------------------------------------------------------
    header = st.columns([width for _, _, width in _COLUMNS] + [3])
    for cell, (column, title, _) in zip(header, _COLUMNS):
        if cell.button(_header_label(dashboard, column, title), key=f"sort-{column.value}"):
            dashboard.query.on_column_header_activated(column)
            await dashboard.query.wait_idle()
            st.rerun()
    header[-1].write("**Commander**")

    if not state.items:
        st.info(dashboard.empty_message())

    # ------------------------------------------------------------------
    # Rows
    # ------------------------------------------------------------------
    for incident in state.items:
        row = st.columns([width for _, _, width in _COLUMNS] + [3])
        if row[0].button(incident.name, key=f"open-{incident.id}", help=incident.name):
            result = await dashboard.open_incident(incident.id)
            if not result.ok:
                st.error(f"Could not load incident: {result.error}")
            else:
                st.rerun()
        row[1].write("Ongoing" if incident.is_active else "Ended")
        row[2].write(format_timestamp(incident.created_at, tz))
        row[3].write(format_ended_at(incident, settings.ended_at_cutoff, tz))
        row[4].write(labels.get(incident.commander_user_id, incident.commander_user_id))

    page = render_pagination(params.page, params.per_page, state.total_count)
    if page != params.page:
        dashboard.query.set_page(page)
        await dashboard.query.wait_idle()
        st.rerun()


async def _render() -> None:
    settings = get_session_settings()
    team_id = settings.default_team_id
    team_name = settings.default_team_name or team_id
    if not team_id:
        st.info("Set a team on the Settings page (or **DEFAULT_TEAM_ID**) to choose which team's incidents to show.")
        return

    dashboard, mounted = get_dashboard(team_id, team_name)
    if mounted:
        await dashboard.load()
    await dashboard.query.wait_idle()

    if dashboard.viewing_detail:
        if render_detail(dashboard.detail.state.result, settings):
            dashboard.close_incident()
            st.rerun()
        return

    await _render_list(dashboard)


def render() -> None:
    asyncio.run(_render())
