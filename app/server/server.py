from typing import Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.router import api_router
from infrastructure.configuration import Settings
from infrastructure.observability.metrics import SyncMetrics
from infrastructure.services import get_settings
from server.lifespan import lifespan
from server.middleware import RequestLoggingMiddleware

logger = structlog.get_logger()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return JSONResponse(status_code=404, content={"message": "not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "unhandled_request_error",
        method=request.method,
        path=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content={"message": "internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    metrics: Optional[SyncMetrics] = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Process configuration (loaded from the environment if None)
        metrics: Counter registry (a fresh one if None)
    """
    handler = FastAPI(title="grafana-snitch", lifespan=lifespan)
    handler.state.settings = settings or get_settings()
    handler.state.metrics = metrics or SyncMetrics()
    handler.state.reconciliation_service = None

    handler.add_middleware(RequestLoggingMiddleware)
    handler.add_exception_handler(StarletteHTTPException, http_exception_handler)
    handler.add_exception_handler(Exception, unhandled_exception_handler)
    handler.include_router(api_router)
    return handler
