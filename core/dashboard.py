"""One mounted incident dashboard: list query, detail view and commander lookup."""

from __future__ import annotations

import asyncio
import logging

from app.config import Settings
from core.detail_resolver import DetailResolver, DetailResult, ViewMode
from core.display import empty_list_message
from core.exceptions import BackstageError
from core.models import UserProfile
from core.query_state import QueryStateManager
from integrations.base import IncidentProvider, UserDirectory
from integrations.registry import IntegrationRegistry

logger = logging.getLogger(__name__)


class IncidentDashboard:
    """Wires the query state and detail resolver for a single team view."""

    def __init__(
        self,
        settings: Settings,
        incidents: IncidentProvider,
        users: UserDirectory,
        team_id: str,
        team_name: str = "",
    ) -> None:
        self.settings = settings
        self.team_name = team_name or team_id
        self._incidents = incidents
        self._users = users
        self.query = QueryStateManager.from_settings(incidents, settings, team_id)
        self.detail = DetailResolver(incidents)

    @classmethod
    def from_registry(
        cls,
        settings: Settings,
        registry: IntegrationRegistry,
        team_id: str,
        team_name: str = "",
    ) -> IncidentDashboard:
        return cls(settings, registry.incidents(), registry.users(), team_id, team_name)

    @property
    def viewing_detail(self) -> bool:
        return self.detail.state.mode is ViewMode.VIEWING_DETAIL

    async def load(self) -> None:
        """Fetch the first page for the current params and wait for it."""
        self.query.refresh()
        await self.query.wait_idle()

    def switch_team(self, team_id: str, team_name: str = "") -> None:
        self.team_name = team_name or team_id
        self.query.set_team(team_id)

    async def commander_options(self) -> list[UserProfile]:
        """Profiles of everyone who has commanded an incident in the current team.

        A failed commander lookup yields no options, and a failed profile
        lookup yields a bare profile, so the list view still renders.
        """
        team_id = self.query.params.team_id
        try:
            commanders = await self._incidents.list_commanders(team_id)
        except BackstageError as e:
            logger.warning("Failed to load commanders for team %s: %s", team_id, e)
            return []

        results = await asyncio.gather(
            *(self._users.get_user(c.user_id) for c in commanders),
            return_exceptions=True,
        )
        profiles: list[UserProfile] = []
        for commander, result in zip(commanders, results):
            if isinstance(result, BackstageError):
                logger.warning("Failed to load profile for %s: %s", commander.user_id, result)
                profiles.append(UserProfile(id=commander.user_id))
            elif isinstance(result, BaseException):
                raise result
            else:
                profiles.append(result)
        return profiles

    async def open_incident(self, incident_id: str) -> DetailResult:
        return await self.detail.select(incident_id)

    def close_incident(self) -> None:
        # The list is left exactly as it was; no refetch.
        self.detail.close()

    def empty_message(self) -> str:
        return empty_list_message(self.query.params, self.team_name)
