"""Grafana integration."""

from integrations.grafana.client import GrafanaClient

__all__ = ["GrafanaClient"]
