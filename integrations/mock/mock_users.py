"""Mock user directory: implements UserDirectory with scenario fixtures."""

from __future__ import annotations

from app.config import Settings
from core.models import UserProfile
from integrations.base import UserDirectory
from integrations.mock.base import MockBase


class MockUserDirectory(UserDirectory, MockBase):
    provider_key = "users"

    def __init__(self, settings: Settings) -> None:
        MockBase.__init__(self, settings)
        self._users = {raw["id"]: UserProfile.model_validate(raw) for raw in self._data.get("users", [])}

    async def get_user(self, user_id: str) -> UserProfile:
        await self._simulate_delay()
        # Unknown ids still render, as a bare profile.
        return self._users.get(user_id, UserProfile(id=user_id))
