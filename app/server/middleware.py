import time

from starlette.middleware.base import BaseHTTPMiddleware

from infrastructure.logging import get_module_logger

logger = get_module_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        logger.debug(
            "handle_request",
            method=request.method,
            url=str(request.url.path),
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
