"""Reconciliation pass models.

``RoleAssignment`` is the desired state derived from the rules; applying it
to Grafana is outside the scope of this service.
"""

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

# Rule outcome statuses
OUTCOME_OK = "ok"
OUTCOME_PARTIAL = "partial"
OUTCOME_FAILED = "failed"


@dataclass(frozen=True)
class RoleAssignment:
    """A directory identity that should hold ``role`` in ``organization``."""

    email: str
    organization: str
    role: str
    rule: str


@dataclass
class RuleOutcome:
    """Result of evaluating one rule during a pass.

    Attributes:
        rule: Rule label (name, or email when unnamed)
        kind: ``group`` or ``user``
        email: Group or user identifier from the rule
        status: ``ok``, ``partial`` (nested lookups failed) or ``failed``
        assignments: Desired role assignments, one per unique member
        errors: Messages describing what failed
        cycles: Nested groups that referenced one of their ancestors
    """

    rule: str
    kind: str
    email: str
    status: str
    assignments: List[RoleAssignment] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    cycles: List[str] = field(default_factory=list)

    @property
    def member_count(self) -> int:
        return len(self.assignments)


@dataclass
class ReconciliationReport:
    """Summary of one reconciliation pass."""

    pass_id: str
    started_at: datetime
    finished_at: Optional[datetime] = None
    outcomes: List[RuleOutcome] = field(default_factory=list)
    aborted: bool = False
    abort_reason: Optional[str] = None
    mode: str = ""

    @property
    def failed(self) -> List[RuleOutcome]:
        return [o for o in self.outcomes if o.status != OUTCOME_OK]

    @property
    def is_success(self) -> bool:
        return not self.aborted and not self.failed

    @property
    def assignments(self) -> List[RoleAssignment]:
        return [a for o in self.outcomes for a in o.assignments]

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly representation used by the status endpoint."""
        return {
            "pass_id": self.pass_id,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "status": "ok" if self.is_success else "degraded",
            "aborted": self.aborted,
            "abort_reason": self.abort_reason,
            "mode": self.mode,
            "rules": [
                {
                    "rule": o.rule,
                    "kind": o.kind,
                    "email": o.email,
                    "status": o.status,
                    "members": o.member_count,
                    "errors": list(o.errors),
                    "cycles": list(o.cycles),
                    "assignments": [asdict(a) for a in o.assignments],
                }
                for o in self.outcomes
            ],
        }
