"""Startup validation of the process configuration."""

from typing import TYPE_CHECKING

from infrastructure.configuration.base import ConfigurationError

if TYPE_CHECKING:
    from infrastructure.configuration.settings import Settings


# (section, field, command-line flag)
REQUIRED_SETTINGS = (
    ("sync", "CONFIG", "--config"),
    ("google_workspace", "GOOGLE_APPLICATION_CREDENTIALS", "--google-admin-config"),
    ("google_workspace", "GOOGLE_ADMIN_EMAIL", "--google-admin-email"),
    ("grafana", "GRAFANA_HOST", "--grafana-host"),
    ("grafana", "GRAFANA_USERNAME", "--grafana-username"),
    ("grafana", "GRAFANA_PASSWORD", "--grafana-password"),
)


def missing_settings(settings: "Settings") -> list[str]:
    """Return the flags of every required setting that is empty."""
    missing = []
    for section, field_name, flag in REQUIRED_SETTINGS:
        value = getattr(getattr(settings, section), field_name, "")
        if not value:
            missing.append(f"{flag} ({field_name})")
    return missing


def validate_startup_settings(settings: "Settings") -> None:
    """Ensure every value required to start serving is present.

    Raises:
        ConfigurationError: Listing all missing settings at once
    """
    missing = missing_settings(settings)
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    # Surfaces a malformed LISTEN_ADDRESS before the server tries to bind.
    try:
        _ = settings.server.port
    except ValueError as e:
        raise ConfigurationError(str(e)) from e
