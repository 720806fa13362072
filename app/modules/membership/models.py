"""Data models for directory membership resolution.

Lightweight dataclasses (not Pydantic) used internally while expanding
groups. ``Member`` wraps a single entry of a Directory API ``members.list``
response; the raw payload is kept untouched in ``raw``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

GROUP_TYPE = "GROUP"


@dataclass(frozen=True)
class Member:
    """One entry of a group's member list.

    Attributes:
        email: The member's email address (absent for ``CUSTOMER`` entries)
        type: Directory type tag: ``USER``, ``GROUP``, ``CUSTOMER`` ...
        id: Directory unique ID
        role: Role inside the group (``OWNER``, ``MANAGER``, ``MEMBER``)
        status: Membership status (``ACTIVE``, ``SUSPENDED`` ...)
        raw: Original response entry
    """

    email: Optional[str]
    type: str
    id: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_group(self) -> bool:
        return self.type.upper() == GROUP_TYPE

    @property
    def key(self) -> str:
        """Stable identity used for de-duplication: normalized email, else id."""
        if self.email:
            return self.email.strip().lower()
        return self.id or ""

    @property
    def group_key(self) -> str:
        """Identifier to query when this entry is a nested group."""
        return self.email or self.id or ""


def member_from_dict(data: Dict[str, Any]) -> Member:
    """Build a Member from a Directory API member resource."""
    return Member(
        email=data.get("email"),
        type=str(data.get("type") or "USER"),
        id=data.get("id"),
        role=data.get("role"),
        status=data.get("status"),
        raw=data,
    )


@dataclass
class ResolutionIssue:
    """A nested group whose members could not be listed.

    Attributes:
        group_key: The nested group that failed
        parent: The group that referenced it
        status: OperationStatus value of the failed lookup
        message: Error message
        error_code: Machine error code
    """

    group_key: str
    parent: str
    status: str
    message: str
    error_code: Optional[str] = None


@dataclass
class ResolutionResult:
    """Terminal members of a group plus everything that prevented completeness.

    Attributes:
        group_key: The group that was resolved
        members: Terminal members in depth-first traversal order
        errors: Nested lookups that failed; their members are missing
        skipped_groups: Nested references not fetched again because the group
            was already expanded (diamonds) or is an ancestor (cycles)
        cycles: Subset of skipped_groups that referenced an ancestor
        groups_expanded: Number of directory lookups performed
    """

    group_key: str
    members: List[Member] = field(default_factory=list)
    errors: List[ResolutionIssue] = field(default_factory=list)
    skipped_groups: List[str] = field(default_factory=list)
    cycles: List[str] = field(default_factory=list)
    groups_expanded: int = 0

    @property
    def is_complete(self) -> bool:
        """True when every nested group was listed successfully."""
        return not self.errors

    @property
    def emails(self) -> List[str]:
        return [m.email for m in self.members if m.email]
