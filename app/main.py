"""Command-line entrypoint.

Every option can be set through its environment variable; a flag given on
the command line takes precedence.
"""

import argparse
import sys
from typing import Any, Optional, Sequence

import uvicorn
from pydantic import ValidationError

from infrastructure.configuration import (
    ConfigurationError,
    Settings,
    validate_startup_settings,
)
from infrastructure.configuration.features import SyncSettings
from infrastructure.configuration.infrastructure import ServerSettings
from infrastructure.configuration.integrations import (
    GoogleWorkspaceSettings,
    GrafanaSettings,
)
from infrastructure.logging import configure_logging
from server.server import create_app

# flag -> (settings section or None for top level, environment variable)
FLAGS = {
    "listen_address": ("server", "LISTEN_ADDRESS"),
    "config": ("sync", "CONFIG"),
    "google_admin_config": ("google_workspace", "GOOGLE_APPLICATION_CREDENTIALS"),
    "google_admin_email": ("google_workspace", "GOOGLE_ADMIN_EMAIL"),
    "grafana_host": ("grafana", "GRAFANA_HOST"),
    "grafana_username": ("grafana", "GRAFANA_USERNAME"),
    "grafana_password": ("grafana", "GRAFANA_PASSWORD"),
    "update_interval": ("sync", "INTERVAL"),
    "log_level": (None, "LOG_LEVEL"),
    "log_json": (None, "LOG_JSON"),
}

SECTIONS = {
    "server": ServerSettings,
    "sync": SyncSettings,
    "google_workspace": GoogleWorkspaceSettings,
    "grafana": GrafanaSettings,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grafana-snitch",
        description="Sync Grafana roles with Google Workspace group membership.",
    )
    parser.add_argument(
        "--listen-address", help="The address to listen on for HTTP requests."
    )
    parser.add_argument("--config", help="Path to yaml config")
    parser.add_argument(
        "--google-admin-config",
        help="The Path to the Service Account's Private Key file. "
        "see https://developers.google.com/admin-sdk/directory/v1/guides/delegation",
    )
    parser.add_argument(
        "--google-admin-email",
        help="The Google Admin Email. "
        "see https://developers.google.com/admin-sdk/directory/v1/guides/delegation",
    )
    parser.add_argument("--grafana-host", help="Grafana server host")
    parser.add_argument("--grafana-username", help="Grafana username")
    parser.add_argument("--grafana-password", help="Grafana password")
    parser.add_argument(
        "--update-interval", help="Update interval in seconds. e.g. 30s or 5m"
    )
    parser.add_argument(
        "--log-level",
        help="Log level: `debug`, `info`, `warn`, `error`, `fatal` or `panic`.",
    )
    parser.add_argument(
        "--log-json",
        action="store_true",
        default=None,
        help="Log as JSON instead of the default console formatter.",
    )
    return parser


def build_settings(args: argparse.Namespace) -> Settings:
    """Load settings from the environment and apply command-line overrides."""
    top_level: dict[str, Any] = {}
    sections: dict[str, dict[str, Any]] = {name: {} for name in SECTIONS}

    for dest, (section, env_name) in FLAGS.items():
        value = getattr(args, dest, None)
        if value is None:
            continue
        if section is None:
            top_level[env_name] = value
        else:
            sections[section][env_name] = value

    kwargs: dict[str, Any] = dict(top_level)
    for name, overrides in sections.items():
        if overrides:
            kwargs[name] = SECTIONS[name](**overrides)
    return Settings(**kwargs)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = build_settings(args)
        validate_startup_settings(settings)
    except (ConfigurationError, ValidationError) as e:
        parser.error(str(e))

    logger = configure_logging(settings=settings)
    app = create_app(settings)

    logger.info(
        "starting_server",
        host=settings.server.host,
        port=settings.server.port,
    )
    uvicorn.run(
        app,
        host=settings.server.host,
        port=settings.server.port,
        timeout_keep_alive=settings.server.KEEP_ALIVE_TIMEOUT,
        timeout_graceful_shutdown=settings.server.SHUTDOWN_GRACE_PERIOD,
        log_config=None,
        access_log=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
