"""Directory membership resolution.

Public API:
    MembershipResolver: expand nested groups into terminal members
    unique_by_email: keep the first member per email
    Member, ResolutionResult, ResolutionIssue: data models
    MembershipResolutionError: top-level lookup failure
"""

from modules.membership.dedup import unique_by_email
from modules.membership.errors import MembershipResolutionError
from modules.membership.models import (
    GROUP_TYPE,
    Member,
    ResolutionIssue,
    ResolutionResult,
    member_from_dict,
)
from modules.membership.resolver import MemberDirectory, MembershipResolver

__all__ = [
    "GROUP_TYPE",
    "Member",
    "MemberDirectory",
    "MembershipResolutionError",
    "MembershipResolver",
    "ResolutionIssue",
    "ResolutionResult",
    "member_from_dict",
    "unique_by_email",
]
