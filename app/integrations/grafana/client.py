"""Grafana HTTP API client.

Only the connectivity check is implemented; the service does not write role
assignments to Grafana.

Usage:
    client = GrafanaClient.from_settings(settings.grafana)
    if not client.healthcheck():
        ...
"""

from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests
import structlog

from infrastructure.configuration.integrations.grafana import GrafanaSettings
from infrastructure.operations import OperationResult, OperationStatus

logger = structlog.get_logger()


class GrafanaClient:
    """Basic-auth HTTP client for the Grafana API.

    Attributes:
        base_url: Grafana base URL
        timeout: Default timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        username: str,
        password: str,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout
        self._session = session or requests.Session()
        self._session.auth = (username, password)
        self._session.headers.update(
            {
                "User-Agent": "grafana-snitch/1.0",
                "Accept": "application/json",
            }
        )
        self._logger = logger.bind(component="grafana_client")

    @classmethod
    def from_settings(cls, settings: GrafanaSettings) -> "GrafanaClient":
        return cls(
            base_url=settings.GRAFANA_HOST,
            username=settings.GRAFANA_USERNAME,
            password=settings.GRAFANA_PASSWORD,
            timeout=settings.GRAFANA_TIMEOUT,
        )

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> OperationResult:
        """Send a GET request to ``path`` relative to the Grafana base URL."""
        url = urljoin(self.base_url, path.lstrip("/"))
        log = self._logger.bind(method="GET", path=path)
        log.debug("grafana_request")

        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout:
            log.error("grafana_timeout", timeout=self.timeout)
            return OperationResult.transient_error(
                message=f"Request timeout after {self.timeout}s",
                error_code="TIMEOUT",
            )
        except requests.RequestException as e:
            log.error("grafana_connection_error", error=str(e))
            return OperationResult.transient_error(
                message=f"Connection error: {e}",
                error_code="CONNECTION_ERROR",
            )

        data: Optional[Any] = None
        if response.content:
            try:
                data = response.json()
            except requests.JSONDecodeError:
                log.warning("non_json_response", content=response.text[:200])

        status_code = response.status_code
        if 200 <= status_code < 300:
            return OperationResult.success(data=data, message=f"GET {path} succeeded")

        message = (data or {}).get("message") if isinstance(data, dict) else None
        message = message or response.text[:200] or f"HTTP {status_code}"
        log.warning("grafana_error_response", status_code=status_code, error=message)

        if status_code in (401, 403):
            return OperationResult.error(
                OperationStatus.UNAUTHORIZED, message, error_code=f"HTTP_{status_code}"
            )
        if status_code == 404:
            return OperationResult.error(
                OperationStatus.NOT_FOUND, message, error_code="HTTP_404"
            )
        if status_code >= 500:
            return OperationResult.transient_error(
                message, error_code=f"HTTP_{status_code}"
            )
        return OperationResult.permanent_error(message, error_code=f"HTTP_{status_code}")

    def healthcheck(self) -> bool:
        """Check if Grafana is reachable and reports a healthy database."""
        result = self.get("/api/health")
        healthy = (
            result.is_success
            and isinstance(result.data, dict)
            and result.data.get("database") == "ok"
        )
        self._logger.info(
            "grafana_healthcheck",
            status="healthy" if healthy else "unhealthy",
            message=result.message,
        )
        return healthy
