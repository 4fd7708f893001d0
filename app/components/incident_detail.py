"""Detail view for one incident, tolerant of summary-only payloads."""

from __future__ import annotations

import streamlit as st

from app.config import Settings
from core.detail_resolver import DetailResult, DetailSource
from core.display import format_ended_at, format_timestamp, get_timezone


def render_detail(result: DetailResult, settings: Settings) -> bool:
    """Render the open incident. Returns True when the user closed it."""
    incident = result.incident
    tz = get_timezone(settings.display_timezone)

    closed = st.button("← Back to incidents", key="close-detail")

    st.header(incident.name)
    col1, col2, col3 = st.columns(3)
    col1.metric("Status", "Ongoing" if incident.is_active else "Ended")
    col2.metric("Started", format_timestamp(incident.created_at, tz))
    col3.metric("Ended", format_ended_at(incident, settings.ended_at_cutoff, tz))

    if incident.description:
        st.write(incident.description)

    detail = result.detail
    if result.source is DetailSource.SUMMARY or detail is None:
        st.caption("Channel and status details are unavailable for this incident.")
        return closed

    st.divider()
    st.write(f"**Channel:** {detail.channel_display_name or detail.channel_name or detail.channel_id}")
    if detail.team_name:
        st.write(f"**Team:** {detail.team_name}")
    st.write(f"**Members:** {detail.num_members} · **Posts:** {detail.total_posts}")

    st.subheader("Status updates")
    if not detail.status_posts:
        st.caption("No status updates yet.")
    for post in detail.status_posts:
        st.write(f"- {format_timestamp(post.created_at // 1000, tz)} ({post.post_id})")
    return closed
