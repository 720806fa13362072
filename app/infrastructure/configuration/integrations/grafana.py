"""Grafana (target system) integration settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import IntegrationSettings


class GrafanaSettings(IntegrationSettings):
    """Grafana connection settings.

    Environment Variables:
        GRAFANA_HOST: Grafana base URL (e.g. https://grafana.example.com)
        GRAFANA_USERNAME: Grafana admin username
        GRAFANA_PASSWORD: Grafana admin password
        GRAFANA_TIMEOUT: HTTP timeout in seconds for Grafana calls
    """

    GRAFANA_HOST: str = Field(default="", alias="GRAFANA_HOST")
    GRAFANA_USERNAME: str = Field(default="", alias="GRAFANA_USERNAME")
    GRAFANA_PASSWORD: str = Field(default="", alias="GRAFANA_PASSWORD")
    GRAFANA_TIMEOUT: int = Field(default=10, gt=0, alias="GRAFANA_TIMEOUT")

    @field_validator("GRAFANA_HOST", mode="before")
    @classmethod
    def _normalize_host(cls, v: object) -> object:
        """Strip whitespace and a trailing slash so paths can be appended."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return v
