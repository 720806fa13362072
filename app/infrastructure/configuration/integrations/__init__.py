"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.google import (
    DIRECTORY_READONLY_SCOPES,
    GoogleWorkspaceSettings,
)
from infrastructure.configuration.integrations.grafana import GrafanaSettings

__all__ = [
    "DIRECTORY_READONLY_SCOPES",
    "GoogleWorkspaceSettings",
    "GrafanaSettings",
]
