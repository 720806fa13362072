"""Reconciliation pass over the configured rules.

A pass resolves every group rule to its unique terminal members, turns every
rule into desired role assignments and records the outcome. Rules are
isolated from each other: a failing group never prevents the other rules
from being evaluated.
"""

import threading
import time
import uuid
from datetime import datetime, timezone
from typing import Callable, Iterator, List, Optional, Tuple

import structlog

from infrastructure.logging import bind_request_context
from infrastructure.observability import metrics as metric_names
from infrastructure.observability.metrics import SyncMetrics
from modules.membership import (
    MembershipResolutionError,
    MembershipResolver,
    unique_by_email,
)
from modules.sync.models import (
    OUTCOME_FAILED,
    OUTCOME_OK,
    OUTCOME_PARTIAL,
    ReconciliationReport,
    RoleAssignment,
    RuleOutcome,
)
from modules.sync.rules import Rule, RulesDocument

logger = structlog.get_logger()

KIND_GROUP = "group"
KIND_USER = "user"


class ReconciliationService:
    """Runs reconciliation passes, one at a time.

    Args:
        resolver: Expands group rules into terminal members
        rules: Parsed rules document
        metrics: Success/error counters
        timeout: Maximum seconds per pass; rules not started before the
            deadline are skipped and the pass is reported as aborted
        clock: Monotonic clock, injectable for tests
    """

    def __init__(
        self,
        resolver: MembershipResolver,
        rules: RulesDocument,
        metrics: SyncMetrics,
        timeout: float = 600,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._resolver = resolver
        self._rules = rules
        self._metrics = metrics
        self._timeout = timeout
        self._clock = clock
        self._run_lock = threading.Lock()
        self._report_lock = threading.Lock()
        self._cancel = threading.Event()
        self._last_report: Optional[ReconciliationReport] = None
        self._logger = logger.bind(component="reconciliation_service")

    @property
    def is_running(self) -> bool:
        return self._run_lock.locked()

    @property
    def last_report(self) -> Optional[ReconciliationReport]:
        with self._report_lock:
            return self._last_report

    def cancel(self) -> None:
        """Stop the in-flight pass before its next rule and refuse new passes."""
        self._cancel.set()

    def wait_idle(self, timeout: float) -> bool:
        """Block until no pass is running or ``timeout`` elapses."""
        if not self._run_lock.acquire(timeout=timeout):
            return False
        self._run_lock.release()
        return True

    def run_once(self) -> Optional[ReconciliationReport]:
        """Run a single pass unless one is already running.

        Returns:
            The pass report, or None when the pass was skipped
        """
        if self._cancel.is_set():
            self._logger.info("reconciliation_pass_skipped", reason="cancelled")
            return None

        if not self._run_lock.acquire(blocking=False):
            self._logger.warning(
                "reconciliation_pass_skipped", reason="pass_in_progress"
            )
            return None

        try:
            report = self._run_pass()
        finally:
            self._run_lock.release()

        with self._report_lock:
            self._last_report = report
        return report

    def _iter_rules(self) -> Iterator[Tuple[str, Rule]]:
        for rule in self._rules.rules.groups:
            yield KIND_GROUP, rule
        for rule in self._rules.rules.users:
            yield KIND_USER, rule

    def _run_pass(self) -> ReconciliationReport:
        pass_id = uuid.uuid4().hex
        report = ReconciliationReport(
            pass_id=pass_id,
            started_at=datetime.now(timezone.utc),
            mode=self._rules.mode,
        )
        deadline = self._clock() + self._timeout

        with bind_request_context(correlation_id=pass_id):
            self._logger.info(
                "reconciliation_pass_started", rules=self._rules.rule_count
            )

            for kind, rule in self._iter_rules():
                if self._cancel.is_set():
                    report.aborted, report.abort_reason = True, "cancelled"
                    break
                if self._clock() > deadline:
                    report.aborted, report.abort_reason = True, "timeout"
                    break
                report.outcomes.append(self._evaluate(kind, rule))

            report.finished_at = datetime.now(timezone.utc)

            if report.is_success:
                self._metrics.success(metric_names.RECONCILE)
            else:
                self._metrics.error(metric_names.RECONCILE)

            log_method = self._logger.info if report.is_success else self._logger.warning
            log_method(
                "reconciliation_pass_completed",
                rules_evaluated=len(report.outcomes),
                rules_failed=len(report.failed),
                assignments=len(report.assignments),
                aborted=report.aborted,
                abort_reason=report.abort_reason,
            )

        return report

    def _evaluate(self, kind: str, rule: Rule) -> RuleOutcome:
        try:
            if kind == KIND_GROUP:
                return self._evaluate_group_rule(rule)
            return self._evaluate_user_rule(rule)
        except Exception as e:  # pylint: disable=broad-except
            self._logger.exception(
                "rule_evaluation_error", rule=rule.label, kind=kind, error=str(e)
            )
            self._metrics.error(
                metric_names.RESOLVE_GROUP if kind == KIND_GROUP else metric_names.RESOLVE_USER
            )
            return RuleOutcome(
                rule=rule.label,
                kind=kind,
                email=rule.email,
                status=OUTCOME_FAILED,
                errors=[f"{type(e).__name__}: {e}"],
            )

    def _evaluate_group_rule(self, rule: Rule) -> RuleOutcome:
        log = self._logger.bind(rule=rule.label, group_key=rule.email)

        try:
            resolution = self._resolver.resolve(rule.email)
        except MembershipResolutionError as e:
            self._metrics.error(metric_names.GET_MEMBERS)
            self._metrics.error(metric_names.RESOLVE_GROUP)
            log.error(
                "group_rule_failed", status=e.status, error_code=e.error_code, error=str(e)
            )
            return RuleOutcome(
                rule=rule.label,
                kind=KIND_GROUP,
                email=rule.email,
                status=OUTCOME_FAILED,
                errors=[str(e)],
            )

        failed_lookups = len(resolution.errors)
        self._metrics.success(
            metric_names.GET_MEMBERS, resolution.groups_expanded - failed_lookups
        )
        if failed_lookups:
            self._metrics.error(metric_names.GET_MEMBERS, failed_lookups)

        members = unique_by_email(resolution.members)
        assignments = _assignments(rule, [m.email for m in members if m.email])

        if resolution.is_complete:
            self._metrics.success(metric_names.RESOLVE_GROUP)
            status = OUTCOME_OK
        else:
            self._metrics.error(metric_names.RESOLVE_GROUP)
            status = OUTCOME_PARTIAL
            log.warning("group_rule_partial", failed_groups=failed_lookups)

        return RuleOutcome(
            rule=rule.label,
            kind=KIND_GROUP,
            email=rule.email,
            status=status,
            assignments=assignments,
            errors=[
                f"{issue.group_key} (in {issue.parent}): {issue.message}"
                for issue in resolution.errors
            ],
            cycles=list(resolution.cycles),
        )

    def _evaluate_user_rule(self, rule: Rule) -> RuleOutcome:
        self._metrics.success(metric_names.RESOLVE_USER)
        return RuleOutcome(
            rule=rule.label,
            kind=KIND_USER,
            email=rule.email,
            status=OUTCOME_OK,
            assignments=_assignments(rule, [rule.email]),
        )


def _assignments(rule: Rule, emails: List[str]) -> List[RoleAssignment]:
    return [
        RoleAssignment(
            email=email,
            organization=rule.organization,
            role=rule.role,
            rule=rule.label,
        )
        for email in emails
    ]
