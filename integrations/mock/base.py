"""Scenario fixtures and simulated latency shared by the mock providers."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from app.config import Settings
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SCENARIOS_DIR = Path(__file__).resolve().parent / "fixtures" / "scenarios"

# Seconds of artificial latency per provider section.
MOCK_DELAYS: dict[str, float] = {
    "incidents": 0.3,
    "users": 0.1,
}


def scenario_path(name: str) -> Path:
    return SCENARIOS_DIR / f"{name}.json"


def load_scenario_section(name: str, section: str) -> dict[str, Any]:
    """Read one provider's section out of a scenario file.

    Raises:
        ConfigurationError: if no fixture exists for *name* or it is not valid JSON.
    """
    path = scenario_path(name)
    if not path.exists():
        raise ConfigurationError(f"Unknown mock scenario '{name}' (looked for {path.name})")

    try:
        with open(path, encoding="utf-8") as f:
            scenario = json.load(f)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Mock scenario '{name}' is not valid JSON: {exc}") from exc

    return scenario.get(section, {})


class MockBase:
    """Mixin giving a mock provider its fixture section and fake latency."""

    provider_key: str = ""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._data: dict[str, Any] = load_scenario_section(settings.mock_scenario, self.provider_key)
        logger.debug("Loaded mock scenario '%s' for %s", settings.mock_scenario, self.provider_key)

    def reload_scenario(self) -> None:
        self._data = load_scenario_section(self._settings.mock_scenario, self.provider_key)

    async def _simulate_delay(self) -> None:
        if self._settings.mock_delay_enabled:
            await asyncio.sleep(MOCK_DELAYS.get(self.provider_key, 0.2))
