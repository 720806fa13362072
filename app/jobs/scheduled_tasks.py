import threading
import time
from typing import Callable, Optional, Tuple

import schedule
import structlog

from infrastructure.observability import metrics as metric_names
from infrastructure.observability.metrics import SyncMetrics
from integrations.grafana import GrafanaClient
from modules.sync import ReconciliationService

logger = structlog.get_logger()


def safe_run(job):
    def wrapper(*args, **kwargs):
        try:
            return job(*args, **kwargs)
        except Exception as e:  # pylint: disable=broad-except
            logger.error(
                "safe_run_error",
                error=str(e),
                function=getattr(job, "__name__", repr(job)),
                module=getattr(job, "__module__", None),
                job_args=args,
                job_kwargs=kwargs,
            )
            return None

    return wrapper


def init(
    scheduler: schedule.Scheduler,
    service: ReconciliationService,
    grafana: GrafanaClient,
    metrics: SyncMetrics,
    interval: int,
) -> None:
    logger.info("scheduled_tasks_initialized", interval=interval)

    scheduler.every(interval).seconds.do(safe_run(reconcile), service=service).tag(
        "reconcile"
    )
    scheduler.every(5).minutes.do(safe_run(scheduler_heartbeat))
    scheduler.every(5).minutes.do(
        safe_run(integration_healthchecks), grafana=grafana, metrics=metrics
    )


def reconcile(service: ReconciliationService):
    return service.run_once()


def scheduler_heartbeat():
    logger.info("scheduler_heartbeat", time=time.ctime())


def integration_healthchecks(grafana: GrafanaClient, metrics: SyncMetrics):
    logger.info("integration_healthchecks_started")
    healthchecks: dict[str, Callable[[], bool]] = {
        "grafana": grafana.healthcheck,
    }
    for key, healthcheck in healthchecks.items():
        if healthcheck():
            metrics.success(metric_names.GRAFANA_HEALTH)
            logger.info("integration_healthy", integration=key)
        else:
            metrics.error(metric_names.GRAFANA_HEALTH)
            logger.error("integration_unhealthy", integration=key)


def run_continuously(
    scheduler: schedule.Scheduler,
    interval: float = 1,
    on_start: Optional[Callable[[], object]] = None,
) -> Tuple[threading.Event, threading.Thread]:
    """Continuously run, while executing pending jobs at each
    elapsed time interval.

    @return (cease_continuous_run, thread): the threading.Event which can
    be set to cease continuous run, and the thread running the jobs so the
    caller can join it on shutdown. Please note that it is *intended
    behavior that run_continuously() does not run missed jobs*: a pass that
    overruns the reconciliation interval delays the next one instead of
    queueing it.

    ``on_start`` runs once in the scheduler thread before the first tick.
    """
    cease_continuous_run = threading.Event()

    def run():
        if on_start is not None:
            on_start()
        while not cease_continuous_run.is_set():
            scheduler.run_pending()
            cease_continuous_run.wait(interval)

    continuous_thread = threading.Thread(target=run, name="scheduler", daemon=True)
    continuous_thread.start()
    return cease_continuous_run, continuous_thread
