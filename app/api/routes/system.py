from fastapi import APIRouter, Response

from infrastructure.services import MetricsDep, ReconciliationServiceDep, SettingsDep

router = APIRouter(tags=["System"])


@router.get("/version")
def get_version(settings: SettingsDep):
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.api_route("/health", methods=["GET", "OPTIONS"])
def get_health():
    """Healthcheck endpoint."""
    return {"ok": True}


@router.api_route("/metrics", methods=["GET", "OPTIONS"])
def get_metrics(metrics: MetricsDep):
    """Prometheus metrics exposition."""
    return Response(content=metrics.render(), media_type=metrics.content_type)


@router.get("/status")
def get_status(service: ReconciliationServiceDep):
    """Report of the last reconciliation pass."""
    report = service.last_report if service is not None else None
    running = service.is_running if service is not None else False
    if report is None:
        return {"status": "pending", "running": running}
    return {**report.to_dict(), "running": running}
