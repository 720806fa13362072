"""
Dependency injection services.

Provides type aliases and provider functions for FastAPI dependency injection.
"""

from infrastructure.services.dependencies import (
    MetricsDep,
    ReconciliationServiceDep,
    SettingsDep,
)
from infrastructure.services.providers import (
    get_app_settings,
    get_metrics,
    get_reconciliation_service,
    get_settings,
)

__all__ = [
    "MetricsDep",
    "ReconciliationServiceDep",
    "SettingsDep",
    "get_app_settings",
    "get_metrics",
    "get_reconciliation_service",
    "get_settings",
]
