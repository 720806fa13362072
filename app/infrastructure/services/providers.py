"""
Factory functions for dependency injection.

Provides the application-scoped settings provider and accessors for the
components the lifespan stores on ``app.state``.
"""

from functools import lru_cache
from typing import Optional

from fastapi import Request

from infrastructure.configuration import Settings
from infrastructure.observability.metrics import SyncMetrics
from modules.sync import ReconciliationService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton loaded from the environment.

    The command-line entrypoint builds its own Settings (environment plus
    flag overrides) and hands it to the app factory; this provider is the
    fallback when the app is created without explicit settings.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


def get_app_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_metrics(request: Request) -> SyncMetrics:
    """Metrics registry of the running application."""
    return request.app.state.metrics


def get_reconciliation_service(request: Request) -> Optional[ReconciliationService]:
    """Reconciliation service, or None before startup completed."""
    return getattr(request.app.state, "reconciliation_service", None)
