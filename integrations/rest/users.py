"""Live user directory: the server's users API."""

from __future__ import annotations

from pydantic import ValidationError

from core.exceptions import IntegrationError
from core.models import UserProfile
from integrations.base import UserDirectory
from integrations.rest.base import NotFound, RestBase


class RestUserDirectory(UserDirectory, RestBase):
    provider_key = "users"

    async def get_user(self, user_id: str) -> UserProfile:
        try:
            data = await self._get_json(f"/api/v4/users/{user_id}")
        except NotFound:
            return UserProfile(id=user_id)
        try:
            return UserProfile.model_validate(data)
        except ValidationError as exc:
            raise IntegrationError(self.provider_key, f"Malformed user profile: {exc}") from exc
