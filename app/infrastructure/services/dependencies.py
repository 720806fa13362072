"""
Type aliases for FastAPI dependency injection.

Provides annotated type hints for common infrastructure dependencies.
"""

from typing import Annotated, Optional

from fastapi import Depends

from infrastructure.configuration import Settings
from infrastructure.observability.metrics import SyncMetrics
from infrastructure.services.providers import (
    get_app_settings,
    get_metrics,
    get_reconciliation_service,
)
from modules.sync import ReconciliationService

# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_app_settings)]

# Prometheus counters
MetricsDep = Annotated[SyncMetrics, Depends(get_metrics)]

# Reconciliation service (None until the lifespan has started it)
ReconciliationServiceDep = Annotated[
    Optional[ReconciliationService], Depends(get_reconciliation_service)
]

__all__ = [
    "SettingsDep",
    "MetricsDep",
    "ReconciliationServiceDep",
]
