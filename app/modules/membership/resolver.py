"""Expansion of nested directory groups into their terminal members.

Traversal is an explicit depth-first worklist instead of recursion: every
stack frame holds the remaining entries of one group, so a nested group's
members are emitted where the group appeared in its parent. Each group is
listed at most once per resolution, which bounds the work by the number of
distinct groups and makes cyclic memberships terminate.
"""

from typing import Iterator, List, Protocol, Tuple

import structlog

from infrastructure.operations import OperationResult
from modules.membership.errors import MembershipResolutionError
from modules.membership.models import (
    Member,
    ResolutionIssue,
    ResolutionResult,
    member_from_dict,
)

logger = structlog.get_logger()


class MemberDirectory(Protocol):
    """Anything that can list the immediate members of a group."""

    def list_members(self, group_key: str) -> OperationResult: ...


def _normalize(group_key: str) -> str:
    return group_key.strip().lower()


def _to_members(result: OperationResult) -> List[Member]:
    return [member_from_dict(entry) for entry in (result.data or [])]


class MembershipResolver:
    """Resolve a group to the flat list of its terminal (non-group) members.

    A failure to list the requested group raises MembershipResolutionError.
    Failures of nested groups do not abort the traversal; they are returned
    in ``ResolutionResult.errors`` so a partial result is never mistaken for
    a complete one.

    Args:
        directory: Client exposing ``list_members(group_key)``
    """

    def __init__(self, directory: MemberDirectory) -> None:
        self._directory = directory
        self._logger = logger.bind(component="membership_resolver")

    def resolve(self, group_key: str) -> ResolutionResult:
        """Expand ``group_key`` into its terminal members.

        Raises:
            MembershipResolutionError: If the top-level group cannot be listed
        """
        log = self._logger.bind(group_key=group_key)
        result = ResolutionResult(group_key=group_key)

        response = self._directory.list_members(group_key)
        result.groups_expanded += 1
        if not response.is_success:
            log.error(
                "group_resolution_failed",
                status=response.status.value,
                error_code=response.error_code,
                error=response.message,
            )
            raise MembershipResolutionError(group_key, response)

        root = _normalize(group_key)
        expanded = {root}
        on_path = {root}
        stack: List[Tuple[str, Iterator[Member]]] = [
            (group_key, iter(_to_members(response)))
        ]

        while stack:
            parent, entries = stack[-1]
            member = next(entries, None)

            if member is None:
                stack.pop()
                on_path.discard(_normalize(parent))
                continue

            if not member.is_group:
                result.members.append(member)
                continue

            nested = member.group_key
            if not nested:
                result.errors.append(
                    ResolutionIssue(
                        group_key="",
                        parent=parent,
                        status="permanent_error",
                        message="Nested group entry has neither email nor id",
                        error_code="MISSING_GROUP_KEY",
                    )
                )
                continue

            nested_norm = _normalize(nested)
            if nested_norm in expanded:
                result.skipped_groups.append(nested)
                if nested_norm in on_path:
                    result.cycles.append(nested)
                    log.warning("group_cycle_detected", nested_group=nested, parent=parent)
                continue

            expanded.add(nested_norm)
            response = self._directory.list_members(nested)
            result.groups_expanded += 1

            if not response.is_success:
                log.warning(
                    "nested_group_lookup_failed",
                    nested_group=nested,
                    parent=parent,
                    status=response.status.value,
                    error=response.message,
                )
                result.errors.append(
                    ResolutionIssue(
                        group_key=nested,
                        parent=parent,
                        status=response.status.value,
                        message=response.message,
                        error_code=response.error_code,
                    )
                )
                continue

            stack.append((nested, iter(_to_members(response))))
            on_path.add(nested_norm)

        log.info(
            "group_resolved",
            members=len(result.members),
            groups_expanded=result.groups_expanded,
            errors=len(result.errors),
            cycles=len(result.cycles),
        )
        return result
