"""Query state for the incident list: user actions in, one fetch request out.

Transitions are computed by the pure :func:`reduce`; :class:`QueryStateManager`
holds the current :class:`FetchIncidentsParams`, applies actions and schedules
list fetches when a transition says one is needed.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
from dataclasses import dataclass, field, replace
from typing import Union

from app.config import Settings
from core.debounce import Debouncer
from core.models import (
    DEFAULT_SORT_ORDER,
    FetchIncidentsParams,
    Incident,
    SortColumn,
    StatusFilter,
)
from integrations.base import IncidentProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetTeam:
    team_id: str


@dataclass(frozen=True)
class SetSearchTerm:
    term: str | None


@dataclass(frozen=True)
class SetStatusFilter:
    status: StatusFilter | None


@dataclass(frozen=True)
class SetCommanderFilter:
    user_id: str | None


@dataclass(frozen=True)
class SetPage:
    page: int


@dataclass(frozen=True)
class ActivateColumn:
    column: SortColumn


@dataclass(frozen=True)
class Refresh:
    pass


Action = Union[SetTeam, SetSearchTerm, SetStatusFilter, SetCommanderFilter, SetPage, ActivateColumn, Refresh]


@dataclass(frozen=True)
class Transition:
    params: FetchIncidentsParams
    fetch_needed: bool


# ---------------------------------------------------------------------------
# Reducer
# ---------------------------------------------------------------------------


def next_sort(params: FetchIncidentsParams, column: SortColumn) -> dict:
    """Sort fields after a header click: same column flips, new column takes its default."""
    column = SortColumn(column)
    if params.sort == column:
        return {"order": params.order.flipped()}
    return {"sort": column, "order": DEFAULT_SORT_ORDER[column]}


def reduce(
    params: FetchIncidentsParams,
    action: Action,
    reset_page_on_filter_change: bool = True,
) -> Transition:
    """Return the params that follow *action*, and whether they need a fetch.

    Filter changes (search term, status, commander) send the list back to the
    first page unless *reset_page_on_filter_change* is off. Team and sort
    changes keep the current page.
    """
    if isinstance(action, Refresh):
        return Transition(params, fetch_needed=True)

    if isinstance(action, SetTeam):
        update: dict = {"team_id": action.team_id}
    elif isinstance(action, SetSearchTerm):
        update = {"search_term": action.term or None}
    elif isinstance(action, SetStatusFilter):
        update = {"status": action.status}
    elif isinstance(action, SetCommanderFilter):
        update = {"commander_user_id": action.user_id or None}
    elif isinstance(action, SetPage):
        update = {"page": action.page}
    elif isinstance(action, ActivateColumn):
        update = next_sort(params, action.column)
    else:
        raise TypeError(f"Unknown action: {action!r}")

    is_filter = isinstance(action, (SetSearchTerm, SetStatusFilter, SetCommanderFilter))
    # Validate so plain-string enum values are coerced and bounds are enforced.
    new_params = FetchIncidentsParams.model_validate({**params.model_dump(), **update})
    if is_filter and reset_page_on_filter_change and new_params != params:
        new_params = new_params.model_copy(update={"page": 0})

    return Transition(new_params, fetch_needed=new_params != params)


# ---------------------------------------------------------------------------
# Stateful manager
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ListState:
    """What the list view shows: the last applied page, plus fetch status."""

    params: FetchIncidentsParams | None = None
    items: list[Incident] = field(default_factory=list)
    total_count: int = 0
    loading: bool = False
    error: str | None = None


class QueryStateManager:
    """Owns the current fetch parameters and the list they produced.

    Every fetch is tagged with a sequence token; a response is applied only
    while its token is the latest, so a slow stale response never replaces
    a newer one. A failed fetch keeps the previous items and records the error.
    """

    def __init__(
        self,
        provider: IncidentProvider,
        params: FetchIncidentsParams,
        debounce_seconds: float = 0.3,
        reset_page_on_filter_change: bool = True,
    ) -> None:
        self._provider = provider
        self._params = params
        self._reset_page = reset_page_on_filter_change
        self._list_state = ListState()
        self._tokens = itertools.count(1)
        self._latest_token = 0
        self._in_flight: set[asyncio.Task] = set()
        self._search = Debouncer(debounce_seconds, lambda term: self.dispatch(SetSearchTerm(term)))

    @classmethod
    def from_settings(cls, provider: IncidentProvider, settings: Settings, team_id: str) -> QueryStateManager:
        return cls(
            provider,
            FetchIncidentsParams(team_id=team_id, per_page=settings.per_page),
            debounce_seconds=settings.search_debounce_seconds,
            reset_page_on_filter_change=settings.reset_page_on_filter_change,
        )

    @property
    def params(self) -> FetchIncidentsParams:
        return self._params

    @property
    def list_state(self) -> ListState:
        return self._list_state

    @property
    def busy(self) -> bool:
        return self._search.pending or bool(self._in_flight)

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def dispatch(self, action: Action) -> FetchIncidentsParams:
        transition = reduce(self._params, action, self._reset_page)
        self._params = transition.params
        if transition.fetch_needed:
            self._schedule_fetch()
        return self._params

    def set_team(self, team_id: str) -> FetchIncidentsParams:
        return self.dispatch(SetTeam(team_id))

    def set_search_term(self, term: str | None) -> None:
        """Debounced: only the last term of a burst is applied."""
        self._search(term)

    def set_status_filter(self, status: StatusFilter | None) -> FetchIncidentsParams:
        return self.dispatch(SetStatusFilter(status))

    def set_commander_filter(self, user_id: str | None) -> FetchIncidentsParams:
        return self.dispatch(SetCommanderFilter(user_id))

    def set_page(self, page: int) -> FetchIncidentsParams:
        return self.dispatch(SetPage(page))

    def on_column_header_activated(self, column: SortColumn) -> FetchIncidentsParams:
        return self.dispatch(ActivateColumn(column))

    def refresh(self) -> FetchIncidentsParams:
        return self.dispatch(Refresh())

    async def wait_idle(self) -> None:
        """Wait for a pending search term and every in-flight fetch to settle."""
        await self._search.wait()
        while self._in_flight:
            await asyncio.wait(set(self._in_flight))

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _schedule_fetch(self) -> None:
        token = next(self._tokens)
        self._latest_token = token
        self._list_state = replace(self._list_state, loading=True)
        task = asyncio.get_running_loop().create_task(self._fetch(self._params, token))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _fetch(self, params: FetchIncidentsParams, token: int) -> None:
        try:
            page = await self._provider.list_incidents(params)
        except Exception as e:
            if token != self._latest_token:
                logger.debug("Ignoring failure of superseded fetch #%d: %s", token, e)
                return
            logger.warning("Failed to fetch incidents for team %s: %s", params.team_id, e)
            self._list_state = replace(self._list_state, loading=False, error=str(e))
            return

        if token != self._latest_token:
            logger.debug("Discarding stale response #%d (latest is #%d)", token, self._latest_token)
            return

        self._list_state = ListState(
            params=params,
            items=page.items,
            total_count=page.total_count,
        )
