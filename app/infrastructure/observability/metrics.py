"""Prometheus counters for role synchronization.

Each application instance owns its own ``CollectorRegistry`` so tests can
create isolated apps without duplicate-registration errors.

Usage:
    metrics = SyncMetrics()
    metrics.success("get-members")
    metrics.error("get-members")
    body = metrics.render()
"""

from typing import Optional

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    disable_created_metrics,
    generate_latest,
)

# Operation label values
GET_ADMIN_CONFIG = "get-admin-config"
GET_MEMBERS = "get-members"
RESOLVE_GROUP = "resolve-group"
RESOLVE_USER = "resolve-user"
RECONCILE = "reconcile"
GRAFANA_HEALTH = "grafana-health"


class SyncMetrics:
    """Success and error counters labelled by operation category."""

    content_type = CONTENT_TYPE_LATEST

    def __init__(self, registry: Optional[CollectorRegistry] = None) -> None:
        # Only the _total samples are exposed, no _created gauges.
        disable_created_metrics()
        self.registry = registry or CollectorRegistry()
        self._success = Counter(
            "grafana_snitch_success",
            "Cumulative number of role update operations",
            ["operation"],
            registry=self.registry,
        )
        self._errors = Counter(
            "grafana_snitch_errors",
            "Cumulative number of errors during role update operations",
            ["operation"],
            registry=self.registry,
        )

    def success(self, operation: str, amount: float = 1) -> None:
        self._success.labels(operation=operation).inc(amount)

    def error(self, operation: str, amount: float = 1) -> None:
        self._errors.labels(operation=operation).inc(amount)

    def value(self, kind: str, operation: str) -> float:
        """Current counter value; ``kind`` is ``success`` or ``errors``."""
        sample = self.registry.get_sample_value(
            f"grafana_snitch_{kind}_total", {"operation": operation}
        )
        return sample or 0.0

    def render(self) -> bytes:
        """Render the registry in the Prometheus text exposition format."""
        return generate_latest(self.registry)
