"""Fixtures for membership resolution tests."""

from typing import Any, Callable, Dict, List, Union

import pytest

from infrastructure.operations import OperationResult, OperationStatus


class FakeDirectory:
    """In-memory directory: group key -> member dicts or a failed OperationResult."""

    def __init__(self, groups: Dict[str, Union[List[Dict[str, Any]], OperationResult]]):
        self.groups = groups
        self.calls: List[str] = []

    def list_members(self, group_key: str) -> OperationResult:
        self.calls.append(group_key)
        entry = self.groups.get(group_key)
        if entry is None:
            return OperationResult.error(
                OperationStatus.NOT_FOUND,
                "Google resource not found",
                error_code="NOT_FOUND",
            )
        if isinstance(entry, OperationResult):
            return entry
        return OperationResult.success(data=entry)


def user(email: str, **extra: Any) -> Dict[str, Any]:
    return {"email": email, "type": "USER", "role": "MEMBER", "status": "ACTIVE", **extra}


def group(email: str) -> Dict[str, Any]:
    return {"email": email, "type": "GROUP", "role": "MEMBER"}


@pytest.fixture
def make_directory() -> Callable[..., FakeDirectory]:
    """Factory for an in-memory directory.

    Example:
        directory = make_directory({"eng@co": [user("a@co"), group("sub@co")]})
    """

    def _make(groups):
        return FakeDirectory(groups)

    return _make


@pytest.fixture
def member_user() -> Callable[..., Dict[str, Any]]:
    return user


@pytest.fixture
def member_group() -> Callable[[str], Dict[str, Any]]:
    return group
