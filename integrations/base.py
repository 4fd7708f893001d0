"""Abstract base classes for all integration providers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from core.models import (
    Commander,
    FetchIncidentsParams,
    Incident,
    IncidentDetail,
    IncidentsPage,
    UserProfile,
)


class IncidentProvider(ABC):
    """Interface for the incident query backend (REST API, SQL store, mock)."""

    @abstractmethod
    async def list_incidents(self, params: FetchIncidentsParams) -> IncidentsPage:
        """Return one page of the filtered, sorted incident set.

        ``total_count`` counts the filtered set, not every incident of the team.
        """
        ...

    @abstractmethod
    async def list_commanders(self, team_id: str) -> list[Commander]:
        ...

    @abstractmethod
    async def get_incident_detail(self, incident_id: str) -> IncidentDetail:
        ...

    @abstractmethod
    async def get_incident_summary(self, incident_id: str) -> Incident:
        ...


class UserDirectory(ABC):
    """Interface for resolving user ids to display profiles."""

    @abstractmethod
    async def get_user(self, user_id: str) -> UserProfile:
        ...
