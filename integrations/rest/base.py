"""Shared HTTP plumbing for the live REST providers."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import Settings
from core.exceptions import IntegrationError

logger = logging.getLogger(__name__)


class NotFound(Exception):
    """The server answered 404; callers translate this into a domain error."""


class RestBase:
    """Issues authenticated JSON GETs against the configured server.

    A fresh ``httpx.AsyncClient`` is opened per call so providers hold no
    connection state between requests.
    """

    provider_key: str = ""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        headers = {"Accept": "application/json"}
        if self._settings.api_token:
            headers["Authorization"] = f"Bearer {self._settings.api_token}"
        return httpx.AsyncClient(
            base_url=self._settings.api_base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(self._settings.api_timeout_seconds),
            transport=self._transport,
        )

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET *path* and decode the JSON body.

        Raises:
            NotFound: on a 404 response.
            IntegrationError: on transport failures, other error statuses, or a
                body that is not JSON.
        """
        async with self._client() as client:
            try:
                resp = await client.get(path, params=params)
            except httpx.HTTPError as exc:
                raise IntegrationError(self.provider_key, f"GET {path} failed: {exc}") from exc

        if resp.status_code == httpx.codes.NOT_FOUND:
            raise NotFound(path)
        if resp.is_error:
            raise IntegrationError(self.provider_key, f"GET {path} returned {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            raise IntegrationError(self.provider_key, f"GET {path} returned invalid JSON") from exc
