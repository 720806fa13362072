"""Periodic synchronization of Grafana roles with directory membership.

Public API:
    ReconciliationService: runs single-flight reconciliation passes
    load_rules / parse_rules: read the YAML rules document
    Rule, RulesDocument: rules models
    ReconciliationReport, RuleOutcome, RoleAssignment: pass results
"""

from modules.sync.models import (
    OUTCOME_FAILED,
    OUTCOME_OK,
    OUTCOME_PARTIAL,
    ReconciliationReport,
    RoleAssignment,
    RuleOutcome,
)
from modules.sync.rules import Rule, RuleConfigs, RulesDocument, load_rules, parse_rules
from modules.sync.service import ReconciliationService

__all__ = [
    "OUTCOME_FAILED",
    "OUTCOME_OK",
    "OUTCOME_PARTIAL",
    "ReconciliationReport",
    "ReconciliationService",
    "RoleAssignment",
    "Rule",
    "RuleConfigs",
    "RuleOutcome",
    "RulesDocument",
    "load_rules",
    "parse_rules",
]
