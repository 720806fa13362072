"""Context binding for structured logging.

Binds a correlation ID (and any extra metadata) to every log entry emitted
inside a block, so all the logs of one reconciliation pass or one HTTP
request can be grouped together.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(correlation_id=pass_id, rules=3):
        logger.info("reconciliation_pass_started")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind a correlation ID and extra context to all logs within the block.

    Args:
        correlation_id: Unique identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation ID in use.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from the logging context."""
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("correlation_id")
