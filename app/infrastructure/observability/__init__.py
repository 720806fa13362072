"""Infrastructure observability module - metrics.

Exports:
    SyncMetrics: Prometheus success/error counters per operation
"""

from infrastructure.observability.metrics import SyncMetrics

__all__ = ["SyncMetrics"]
