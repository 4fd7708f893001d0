"""Custom exceptions for the incident backstage."""


class BackstageError(Exception):
    """Base exception for all backstage errors."""


class ConfigurationError(BackstageError):
    """Raised when configuration is invalid or missing."""


class IntegrationError(BackstageError):
    """Raised when a provider call fails."""

    def __init__(self, provider: str, message: str):
        self.provider = provider
        super().__init__(f"[{provider}] {message}")


class IncidentNotFoundError(IntegrationError):
    """Raised when a provider has no incident with the requested id."""

    def __init__(self, provider: str, incident_id: str):
        self.incident_id = incident_id
        super().__init__(provider, f"Incident '{incident_id}' not found")


class ProviderNotFoundError(BackstageError):
    """Raised when a requested provider is not registered."""

    def __init__(self, category: str, provider: str | None = None):
        self.category = category
        self.provider = provider
        detail = f" (provider={provider})" if provider else ""
        super().__init__(f"No provider found for category '{category}'{detail}")


class InvalidTransitionError(BackstageError):
    """Raised when a view action is not valid in the current view state."""

    def __init__(self, state: str, action: str):
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} while in state '{state}'")


class PersistenceError(BackstageError):
    """Raised when the relational store rejects a write."""

    def __init__(self, table: str, message: str):
        self.table = table
        super().__init__(f"Insert into '{table}' failed: {message}")
