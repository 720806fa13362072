from contextlib import asynccontextmanager
from dataclasses import dataclass
from functools import partial
from typing import TYPE_CHECKING, AsyncIterator

import schedule
from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from infrastructure.clients.google_workspace import DirectoryClient, SessionProvider
from infrastructure.configuration import ConfigurationError
from infrastructure.configuration.integrations import DIRECTORY_READONLY_SCOPES
from infrastructure.logging.setup import configure_logging
from infrastructure.observability import metrics as metric_names
from infrastructure.observability.metrics import SyncMetrics
from integrations.grafana import GrafanaClient
from jobs import scheduled_tasks
from modules.membership import MembershipResolver
from modules.sync import ReconciliationService, load_rules

if TYPE_CHECKING:
    from infrastructure.configuration import Settings


@dataclass
class Components:
    service: ReconciliationService
    grafana: GrafanaClient


def _list_configs(settings: "Settings", logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


def build_components(
    settings: "Settings", metrics: SyncMetrics, logger: BoundLogger
) -> Components:
    """Load the rules and credentials and wire the reconciliation service.

    Raises:
        ConfigurationError: If the rules document or the credential file
            cannot be used
    """
    rules = load_rules(settings.sync.CONFIG)
    logger.info(
        "rules_loaded",
        path=settings.sync.CONFIG,
        groups=len(rules.rules.groups),
        users=len(rules.rules.users),
        mode=rules.mode,
    )

    google = settings.google_workspace
    try:
        session_provider = SessionProvider.from_file(
            google.GOOGLE_APPLICATION_CREDENTIALS,
            default_delegated_email=google.GOOGLE_ADMIN_EMAIL,
            default_scopes=DIRECTORY_READONLY_SCOPES,
        )
        # Fail fast on a key that cannot produce credentials.
        session_provider.get_credentials()
    except ConfigurationError:
        metrics.error(metric_names.GET_ADMIN_CONFIG)
        raise
    metrics.success(metric_names.GET_ADMIN_CONFIG)

    directory = DirectoryClient(
        session_provider=session_provider, max_retries=google.GOOGLE_MAX_RETRIES
    )
    service = ReconciliationService(
        resolver=MembershipResolver(directory),
        rules=rules,
        metrics=metrics,
        timeout=settings.sync.RECONCILE_TIMEOUT,
    )
    return Components(service=service, grafana=GrafanaClient.from_settings(settings.grafana))


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = app.state.settings
    metrics = app.state.metrics
    logger = configure_logging(settings=settings)

    logger.info("application_startup")
    _list_configs(settings, logger)

    try:
        components = build_components(settings, metrics, logger)
    except ConfigurationError as exc:
        logger.critical("startup_configuration_error", error=str(exc))
        raise

    app.state.reconciliation_service = components.service

    scheduler = schedule.Scheduler()
    scheduled_tasks.init(
        scheduler,
        service=components.service,
        grafana=components.grafana,
        metrics=metrics,
        interval=settings.sync.INTERVAL,
    )
    on_start = None
    if settings.sync.RUN_ON_STARTUP:
        on_start = partial(
            scheduled_tasks.safe_run(scheduled_tasks.reconcile),
            service=components.service,
        )
    stop_event, thread = scheduled_tasks.run_continuously(scheduler, on_start=on_start)
    logger.info("scheduled_tasks_started", interval=settings.sync.INTERVAL)

    yield

    logger.warning("application_shutdown")

    stop_event.set()
    components.service.cancel()
    grace_period = settings.server.SHUTDOWN_GRACE_PERIOD
    thread.join(timeout=grace_period)
    if thread.is_alive():
        logger.warning("scheduler_shutdown_timeout", grace_period=grace_period)
    else:
        logger.info("scheduled_tasks_stopped")
    scheduler.clear()
