"""Detail view state: which incident, if any, is open, and how it was loaded."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from core.exceptions import InvalidTransitionError
from core.models import Incident, IncidentDetail
from integrations.base import IncidentProvider

logger = logging.getLogger(__name__)


class ViewMode(str, Enum):
    LISTING = "listing"
    VIEWING_DETAIL = "viewing_detail"


class DetailSource(str, Enum):
    DETAIL = "detail"      # full detail endpoint answered
    SUMMARY = "summary"    # detail failed; summary endpoint answered
    FAILED = "failed"      # both failed


@dataclass(frozen=True)
class DetailResult:
    """Outcome of resolving one incident for the detail view."""

    incident_id: str
    source: DetailSource
    incident: Incident | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.source is not DetailSource.FAILED

    @property
    def detail(self) -> IncidentDetail | None:
        """The full payload, only when the detail endpoint produced it."""
        if self.source is DetailSource.DETAIL:
            return self.incident  # type: ignore[return-value]
        return None


@dataclass(frozen=True)
class ViewState:
    mode: ViewMode
    incident_id: str | None = None
    result: DetailResult | None = None


LISTING = ViewState(ViewMode.LISTING)


class DetailResolver:
    """Two-state controller for the incident detail view.

    Listing → ViewingDetail through :meth:`select`; back through :meth:`close`.
    Selecting is only accepted from Listing with no other selection in progress.
    """

    def __init__(self, provider: IncidentProvider) -> None:
        self._provider = provider
        self._state = LISTING
        self._resolving: str | None = None
        self._last_failure: DetailResult | None = None

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def selected(self) -> Incident | None:
        if self._state.result is None:
            return None
        return self._state.result.incident

    @property
    def last_failure(self) -> DetailResult | None:
        return self._last_failure

    async def resolve(self, incident_id: str) -> DetailResult:
        """Fetch the richest available view of an incident.

        The summary endpoint is only tried after the detail endpoint has failed.
        """
        try:
            detail = await self._provider.get_incident_detail(incident_id)
            return DetailResult(incident_id, DetailSource.DETAIL, detail)
        except Exception as e:
            logger.warning("Detail fetch failed for %s, falling back to summary: %s", incident_id, e)

        try:
            summary = await self._provider.get_incident_summary(incident_id)
            return DetailResult(incident_id, DetailSource.SUMMARY, summary)
        except Exception as e:
            logger.error("Summary fetch failed for %s: %s", incident_id, e)
            return DetailResult(incident_id, DetailSource.FAILED, error=str(e))

    async def select(self, incident_id: str) -> DetailResult:
        if self._state.mode is not ViewMode.LISTING:
            raise InvalidTransitionError(self._state.mode.value, "select an incident")
        if self._resolving is not None:
            raise InvalidTransitionError("resolving", "select an incident")

        self._resolving = incident_id
        try:
            result = await self.resolve(incident_id)
        finally:
            self._resolving = None

        if not result.ok:
            self._last_failure = result
            return result

        self._last_failure = None
        self._state = ViewState(ViewMode.VIEWING_DETAIL, incident_id, result)
        return result

    def close(self) -> None:
        self._state = LISTING
