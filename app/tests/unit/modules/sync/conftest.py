"""Fixtures for reconciliation service tests."""

from typing import Callable
from unittest.mock import Mock

import pytest

from infrastructure.operations import OperationResult, OperationStatus
from modules.membership import (
    Member,
    MembershipResolutionError,
    ResolutionIssue,
    ResolutionResult,
)
from modules.sync import RulesDocument, parse_rules


@pytest.fixture
def make_rules() -> Callable[..., RulesDocument]:
    """Build a rules document from (email, role) pairs."""

    def _make(groups=(), users=(), mode="sync") -> RulesDocument:
        return RulesDocument.model_validate(
            {
                "mode": mode,
                "rules": {
                    "groups": [
                        {"name": email.split("@")[0], "email": email, "organization": "Main Org.", "role": role}
                        for email, role in groups
                    ],
                    "users": [
                        {"email": email, "organization": "Main Org.", "role": role}
                        for email, role in users
                    ],
                },
            }
        )

    return _make


@pytest.fixture
def default_rules() -> RulesDocument:
    return parse_rules(
        """
mode: sync
rules:
  groups:
    - name: engineering
      email: eng@co
      organization: Main Org.
      role: Editor
  users:
    - email: lead@co
      organization: Main Org.
      role: Admin
"""
    )


@pytest.fixture
def resolved() -> Callable[..., ResolutionResult]:
    """Build a ResolutionResult from emails."""

    def _make(group_key, emails, errors=(), cycles=(), groups_expanded=1):
        return ResolutionResult(
            group_key=group_key,
            members=[Member(email=e, type="USER") for e in emails],
            errors=list(errors),
            cycles=list(cycles),
            skipped_groups=list(cycles),
            groups_expanded=groups_expanded,
        )

    return _make


@pytest.fixture
def nested_issue() -> ResolutionIssue:
    return ResolutionIssue(
        group_key="gone@co",
        parent="eng@co",
        status="not_found",
        message="Google resource not found",
        error_code="NOT_FOUND",
    )


@pytest.fixture
def not_found_error() -> Callable[[str], MembershipResolutionError]:
    def _make(group_key):
        return MembershipResolutionError(
            group_key,
            OperationResult.error(
                OperationStatus.NOT_FOUND,
                "Google resource not found",
                error_code="NOT_FOUND",
            ),
        )

    return _make


@pytest.fixture
def mock_resolver() -> Mock:
    return Mock()
