"""grafana-snitch configuration settings - main aggregator."""

from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Integration settings
from infrastructure.configuration.integrations import (
    GoogleWorkspaceSettings,
    GrafanaSettings,
)

# Feature settings
from infrastructure.configuration.features import SyncSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import ServerSettings

LOG_LEVELS = ("debug", "info", "warn", "warning", "error", "fatal", "panic", "critical")


class Settings(BaseSettings):
    """grafana-snitch configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration
    object, built once at startup and passed to the components that need it.

    - **Integrations**: Google Workspace directory, Grafana
    - **Features**: role synchronization (rules document, interval)
    - **Infrastructure**: listen address, timeouts, shutdown

    Environment Variables:
        LOG_LEVEL: debug, info, warn, error, fatal or panic
        LOG_JSON: Log as JSON instead of the console renderer
        GIT_SHA: Git commit SHA for deployment tracking

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        admin_email = settings.google_workspace.GOOGLE_ADMIN_EMAIL
        interval = settings.sync.INTERVAL
        ```
    """

    # Application-level settings
    LOG_LEVEL: str = "info"
    LOG_JSON: bool = False
    GIT_SHA: str = "Unknown"

    # Integration settings
    google_workspace: GoogleWorkspaceSettings
    grafana: GrafanaSettings

    # Feature settings
    sync: SyncSettings

    # Infrastructure settings
    server: ServerSettings

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _validate_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            level = v.strip().lower()
            if level not in LOG_LEVELS:
                raise ValueError(
                    f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}: {v!r}"
                )
            return level
        return v

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Integrations
            "google_workspace": GoogleWorkspaceSettings,
            "grafana": GrafanaSettings,
            # Features
            "sync": SyncSettings,
            # Infrastructure
            "server": ServerSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
