"""Core data models for the incident backstage."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class SortColumn(str, Enum):
    NAME = "name"
    STATUS = "status"
    CREATED_AT = "created_at"
    ENDED_AT = "ended_at"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> SortOrder:
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class StatusFilter(str, Enum):
    ALL = "all"
    ACTIVE = "active"
    ENDED = "ended"


# New sort columns start in this order; the time-based ones show newest first.
DEFAULT_SORT_ORDER: dict[SortColumn, SortOrder] = {
    SortColumn.NAME: SortOrder.ASC,
    SortColumn.STATUS: SortOrder.ASC,
    SortColumn.CREATED_AT: SortOrder.DESC,
    SortColumn.ENDED_AT: SortOrder.DESC,
}


# ---------------------------------------------------------------------------
# Query models
# ---------------------------------------------------------------------------


class FetchIncidentsParams(BaseModel):
    """Which page of which filtered, sorted incident set is displayed."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=15, ge=1)
    sort: SortColumn = SortColumn.CREATED_AT
    order: SortOrder = SortOrder.DESC
    search_term: str | None = None
    status: StatusFilter | None = None
    commander_user_id: str | None = None

    def to_query(self) -> dict[str, str | int]:
        """Render as query-string parameters, leaving out unset filters."""
        query: dict[str, str | int] = {
            "team_id": self.team_id,
            "page": self.page,
            "per_page": self.per_page,
            "sort": self.sort.value,
            "order": self.order.value,
        }
        if self.search_term:
            query["search_term"] = self.search_term
        if self.status and self.status is not StatusFilter.ALL:
            query["status"] = self.status.value
        if self.commander_user_id:
            query["commander_user_id"] = self.commander_user_id
        return query


# ---------------------------------------------------------------------------
# Incident models
# ---------------------------------------------------------------------------


class Incident(BaseModel):
    """An incident as shown in the list view."""

    id: str
    name: str
    description: str = ""
    is_active: bool = True
    created_at: int = 0
    ended_at: int = 0
    commander_user_id: str = ""
    team_id: str = ""
    channel_id: str = ""


class StatusPost(BaseModel):
    post_id: str
    created_at: int


class IncidentDetail(Incident):
    """An incident with the extra fields only the detail view needs."""

    channel_name: str | None = None
    channel_display_name: str | None = None
    team_name: str | None = None
    num_members: int = 0
    total_posts: int = 0
    status_posts: list[StatusPost] = Field(default_factory=list)


class IncidentsPage(BaseModel):
    items: list[Incident] = Field(default_factory=list)
    total_count: int = 0


class Commander(BaseModel):
    user_id: str
    username: str = ""


class UserProfile(BaseModel):
    id: str
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    nickname: str = ""

    @property
    def display_name(self) -> str:
        full_name = f"{self.first_name} {self.last_name}".strip()
        if full_name and self.nickname:
            return f"{full_name} ({self.nickname})"
        return full_name or self.nickname or self.username or self.id
