"""Integration registry and factory for resolving providers based on configuration."""

from __future__ import annotations

import importlib
import logging
from typing import TYPE_CHECKING

from core.exceptions import ProviderNotFoundError

if TYPE_CHECKING:
    from app.config import Settings
    from integrations.base import IncidentProvider, UserDirectory

logger = logging.getLogger(__name__)

# Maps category → mode → import path (module, class_name).
# Providers are imported lazily so mock mode never loads httpx or SQLAlchemy.
PROVIDER_MAP: dict[str, dict[str, tuple[str, str]]] = {
    "incidents": {
        "mock": ("integrations.mock.mock_incidents", "MockIncidentService"),
        "live": ("integrations.rest.incidents", "RestIncidentProvider"),
        "sql": ("storage.reader", "SqlIncidentProvider"),
    },
    "users": {
        "mock": ("integrations.mock.mock_users", "MockUserDirectory"),
        "live": ("integrations.rest.users", "RestUserDirectory"),
    },
}


def _import_class(module_path: str, class_name: str) -> type:
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


class IntegrationRegistry:
    """Resolves and caches providers based on application configuration."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._cache: dict[str, object] = {}

    def get_provider(self, category: str) -> IncidentProvider | UserDirectory:
        """Return the provider instance for the given category.

        Providers are instantiated once and cached for the lifetime of the registry.
        """
        if category in self._cache:
            return self._cache[category]  # type: ignore[return-value]

        if category not in PROVIDER_MAP:
            raise ProviderNotFoundError(category)

        mode = self._settings.get_integration_mode(category)
        providers = PROVIDER_MAP[category]
        if mode not in providers:
            raise ProviderNotFoundError(category, mode)

        module_path, class_name = providers[mode]
        logger.info("Resolved %s provider: %s (%s)", category, class_name, mode)
        instance = _import_class(module_path, class_name)(self._settings)
        self._cache[category] = instance
        return instance  # type: ignore[return-value]

    def incidents(self) -> IncidentProvider:
        return self.get_provider("incidents")  # type: ignore[return-value]

    def users(self) -> UserDirectory:
        return self.get_provider("users")  # type: ignore[return-value]

    def reset(self) -> None:
        """Clear the provider cache, forcing re-resolution on next access."""
        self._cache.clear()
