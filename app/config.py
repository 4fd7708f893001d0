"""Application configuration loaded from environment variables and .env file."""

from __future__ import annotations

from datetime import date

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Global mode
    backstage_mode: str = Field(default="mock", description="Global mode: 'mock' or 'live'")

    # Per-category overrides ("" means use the global mode)
    incidents_mode: str = Field(default="", description="'mock', 'live' or 'sql'")
    users_mode: str = Field(default="")

    # Mock settings
    mock_scenario: str = Field(default="default")
    mock_delay_enabled: bool = Field(default=True)

    # Incident REST API
    api_base_url: str = Field(default="http://localhost:8065")
    api_token: str = Field(default="")
    api_timeout_seconds: float = Field(default=10.0)

    # Relational store
    database_url: str = Field(default="sqlite:///backstage.db")

    # List behaviour
    per_page: int = Field(default=15, ge=1)
    search_debounce_ms: int = Field(default=300, ge=0)
    reset_page_on_filter_change: bool = Field(default=True)

    # Display
    ended_at_cutoff: date = Field(default=date(2020, 1, 1))
    display_timezone: str = Field(default="UTC")

    # Logging
    log_level: str = Field(default="INFO")

    # Initial team shown when the dashboard mounts
    default_team_id: str = Field(default="")
    default_team_name: str = Field(default="")

    def get_integration_mode(self, category: str) -> str:
        """Return the effective mode for a given provider category.

        Per-category overrides take precedence over the global backstage_mode.
        """
        override = getattr(self, f"{category}_mode", "")
        return override if override else self.backstage_mode

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000

    @property
    def available_scenarios(self) -> list[str]:
        return [
            "default",
            "empty",
        ]


def get_settings() -> Settings:
    """Create and return the application settings singleton."""
    return Settings()
