"""Pagination row for the incident list."""

from __future__ import annotations

import streamlit as st

from core.display import page_bounds


def render_pagination(page: int, per_page: int, total_count: int) -> int:
    """Render previous/next controls and return the page the user asked for."""
    first, last, page_count = page_bounds(page, per_page, total_count)
    if page_count <= 1:
        return page

    prev_col, label_col, next_col = st.columns([1, 3, 1])
    label_col.caption(f"{first} - {last} of {total_count} total")
    if prev_col.button("Previous", disabled=page == 0, key="page-prev"):
        return page - 1
    if next_col.button("Next", disabled=page >= page_count - 1, key="page-next"):
        return page + 1
    return page
