"""Structlog configuration and logger setup.

This module provides the core logging configuration for the application.
It configures structlog with processors for debugging context, exception
formatting, masking of credentials and environment-aware rendering.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    # Configure logging at app startup
    configure_logging(settings=settings)

    # Get a logger for your module
    logger = get_module_logger()
    logger.info("event_name", key="value")
"""

import inspect
import logging
import sys
from typing import TYPE_CHECKING, Any, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.logging.formatters import mask_sensitive_data

if TYPE_CHECKING:
    from infrastructure.configuration import Settings

# Level names accepted on the command line, including the zerolog-style ones.
_LEVEL_ALIASES = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "panic": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def resolve_log_level(name: Optional[str]) -> int:
    """Map a level name (``warn``, ``INFO``, ``panic`` ...) to a logging level."""
    if not name:
        return logging.INFO
    return _LEVEL_ALIASES.get(name.strip().lower(), logging.INFO)


def configure_logging(
    settings: Optional["Settings"] = None,
    log_level: Optional[str] = None,
    json_logs: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging.

    Configures structlog with:
    - Context variable merging for correlation IDs
    - File/line/function context
    - Exception formatting with stack traces
    - Masking of password/token/credential values
    - Console rendering, or JSON when ``json_logs`` is set

    Args:
        settings: Application settings; LOG_LEVEL and LOG_JSON are read from it.
        log_level: Optional override for the log level.
        json_logs: Optional override for JSON output.

    Returns:
        Configured logger instance

    Example:
        logger = configure_logging(log_level="debug", json_logs=True)
    """
    # Suppress all logging during tests
    if _is_test_environment():
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    if log_level is None and settings is not None:
        log_level = settings.LOG_LEVEL
    if json_logs is None:
        json_logs = settings.LOG_JSON if settings is not None else False

    processors: list[Any] = [
        # Add context variables (correlation IDs of reconciliation passes)
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        mask_sensitive_data(),
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=resolve_log_level(log_level),
        force=True,
    )

    return structlog.stdlib.get_logger()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Automatically detects the calling module and binds component
    and module_path context for structured logging.

    Returns:
        Logger instance with module context

    Example:
        # In modules/membership/resolver.py
        logger = get_module_logger()
        # context: {"component": "resolver", "module_path": "modules.membership.resolver"}
    """
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(frame) if frame is not None else None

    # Lazy proxy: the processors are resolved on first use, so loggers
    # created at import time still honour configure_logging() called later.
    if module:
        module_name = module.__name__
        parts = module_name.split(".")
        return structlog.stdlib.get_logger(
            component=parts[-1], module_path=module_name
        )

    return structlog.stdlib.get_logger(component="unknown")
