"""Pure formatting helpers for the incident list and detail views."""

from __future__ import annotations

import math
from datetime import date, datetime, time, timezone, tzinfo
from zoneinfo import ZoneInfo

from core.models import FetchIncidentsParams, Incident, StatusFilter

PLACEHOLDER = "--"


def get_timezone(name: str) -> tzinfo:
    return timezone.utc if name.upper() == "UTC" else ZoneInfo(name)


def format_timestamp(ts: int, tz: tzinfo = timezone.utc) -> str:
    """Format unix seconds as e.g. ``Nov 14 11:13 PM``."""
    dt = datetime.fromtimestamp(ts, tz)
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt:%b %d} {hour}:{dt:%M} {meridiem}"


def format_ended_at(
    incident: Incident,
    cutoff: date = date(2020, 1, 1),
    tz: tzinfo = timezone.utc,
) -> str:
    """End time for an incident row.

    Active incidents never show one, whatever is stored. Ended incidents
    whose end time falls before *cutoff* (including the unset value 0) show
    the placeholder too.
    """
    if incident.is_active:
        return PLACEHOLDER
    ended = datetime.fromtimestamp(incident.ended_at, tz)
    if ended < datetime.combine(cutoff, time.min, tzinfo=tz):
        return PLACEHOLDER
    return format_timestamp(incident.ended_at, tz)


def is_filtering(params: FetchIncidentsParams) -> bool:
    return bool(
        params.search_term
        or params.commander_user_id
        or (params.status and params.status is not StatusFilter.ALL)
    )


def empty_list_message(params: FetchIncidentsParams, team_name: str) -> str:
    if is_filtering(params):
        return f"There are no incidents for {team_name} matching those filters."
    return f"There are no incidents for {team_name}."


def page_bounds(page: int, per_page: int, total_count: int) -> tuple[int, int, int]:
    """Return (first item number, last item number, page count) for a pagination row."""
    if total_count <= 0:
        return 0, 0, 0
    first = page * per_page + 1
    last = min(total_count, (page + 1) * per_page)
    return first, last, math.ceil(total_count / per_page)
