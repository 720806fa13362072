"""Unit tests for MembershipResolver."""

import pytest

from infrastructure.operations import OperationResult, OperationStatus
from modules.membership import (
    MembershipResolutionError,
    MembershipResolver,
    unique_by_email,
)


@pytest.mark.unit
class TestResolveFlatGroups:
    """Groups without nested groups."""

    def test_flat_group_returns_immediate_members_unchanged(
        self, make_directory, member_user
    ):
        directory = make_directory(
            {
                "eng@co": [
                    member_user("b@co"),
                    member_user("a@co"),
                    {"id": "C0123", "type": "CUSTOMER"},
                ]
            }
        )

        result = MembershipResolver(directory).resolve("eng@co")

        assert [m.raw for m in result.members] == directory.groups["eng@co"]
        assert result.is_complete
        assert result.skipped_groups == []
        assert directory.calls == ["eng@co"]

    def test_empty_group(self, make_directory):
        result = MembershipResolver(make_directory({"empty@co": []})).resolve("empty@co")

        assert result.members == []
        assert result.is_complete
        assert result.groups_expanded == 1


@pytest.mark.unit
class TestResolveNestedGroups:
    """Nested group expansion."""

    def test_nested_group_scenario_dedups_to_two_members(
        self, make_directory, member_user, member_group
    ):
        directory = make_directory(
            {
                "eng@co": [member_user("a@co"), member_group("sub@co")],
                "sub@co": [member_user("a@co"), member_user("b@co")],
            }
        )

        result = MembershipResolver(directory).resolve("eng@co")
        unique = unique_by_email(result.members)

        assert result.emails == ["a@co", "a@co", "b@co"]
        assert [m.email for m in unique] == ["a@co", "b@co"]
        assert result.is_complete

    def test_no_group_entries_remain(self, make_directory, member_user, member_group):
        directory = make_directory(
            {
                "root@co": [member_group("l1@co"), member_user("r@co")],
                "l1@co": [member_group("l2@co"), member_user("x@co")],
                "l2@co": [member_user("y@co")],
            }
        )

        result = MembershipResolver(directory).resolve("root@co")

        assert not any(m.is_group for m in result.members)
        assert {m.email for m in result.members} == {"r@co", "x@co", "y@co"}

    def test_nested_members_are_emitted_in_place(
        self, make_directory, member_user, member_group
    ):
        directory = make_directory(
            {
                "root@co": [
                    member_user("first@co"),
                    member_group("sub@co"),
                    member_user("last@co"),
                ],
                "sub@co": [member_user("s1@co"), member_user("s2@co")],
            }
        )

        result = MembershipResolver(directory).resolve("root@co")

        assert result.emails == ["first@co", "s1@co", "s2@co", "last@co"]

    def test_deep_nesting_does_not_recurse(self, make_directory, member_user, member_group):
        depth = 2000
        groups = {
            f"g{i}@co": [member_group(f"g{i + 1}@co")] for i in range(depth)
        }
        groups[f"g{depth}@co"] = [member_user("leaf@co")]

        result = MembershipResolver(make_directory(groups)).resolve("g0@co")

        assert result.emails == ["leaf@co"]
        assert result.groups_expanded == depth + 1

    def test_diamond_fetches_shared_group_once(
        self, make_directory, member_user, member_group
    ):
        directory = make_directory(
            {
                "root@co": [member_group("left@co"), member_group("right@co")],
                "left@co": [member_group("shared@co")],
                "right@co": [member_group("shared@co")],
                "shared@co": [member_user("a@co")],
            }
        )

        result = MembershipResolver(directory).resolve("root@co")

        assert directory.calls.count("shared@co") == 1
        assert result.emails == ["a@co"]
        assert result.skipped_groups == ["shared@co"]
        assert result.cycles == []


@pytest.mark.unit
class TestResolveCycles:
    """Cyclic memberships terminate."""

    def test_self_reference(self, make_directory, member_user, member_group):
        directory = make_directory(
            {"loop@co": [member_user("a@co"), member_group("loop@co")]}
        )

        result = MembershipResolver(directory).resolve("loop@co")

        assert result.emails == ["a@co"]
        assert result.cycles == ["loop@co"]
        assert directory.calls == ["loop@co"]

    def test_two_group_cycle(self, make_directory, member_user, member_group):
        directory = make_directory(
            {
                "a-team@co": [member_user("a@co"), member_group("b-team@co")],
                "b-team@co": [member_user("b@co"), member_group("A-Team@co")],
            }
        )

        result = MembershipResolver(directory).resolve("a-team@co")

        assert result.emails == ["a@co", "b@co"]
        assert result.cycles == ["A-Team@co"]
        assert result.is_complete
        assert directory.calls == ["a-team@co", "b-team@co"]


@pytest.mark.unit
class TestResolveFailures:
    """Top-level and nested lookup failures."""

    def test_top_level_not_found_raises(self, make_directory):
        directory = make_directory({})

        with pytest.raises(MembershipResolutionError) as exc_info:
            MembershipResolver(directory).resolve("missing@co")

        assert exc_info.value.group_key == "missing@co"
        assert exc_info.value.status == "not_found"
        assert exc_info.value.error_code == "NOT_FOUND"

    def test_top_level_unauthorized_raises(self, make_directory):
        directory = make_directory(
            {
                "eng@co": OperationResult.error(
                    OperationStatus.UNAUTHORIZED,
                    "Google API authorization denied",
                    error_code="FORBIDDEN",
                )
            }
        )

        with pytest.raises(MembershipResolutionError) as exc_info:
            MembershipResolver(directory).resolve("eng@co")

        assert exc_info.value.status == "unauthorized"
        assert "authorization denied" in str(exc_info.value)

    def test_nested_failure_is_recorded_and_traversal_continues(
        self, make_directory, member_user, member_group
    ):
        directory = make_directory(
            {
                "eng@co": [
                    member_user("a@co"),
                    member_group("gone@co"),
                    member_user("b@co"),
                ],
            }
        )

        result = MembershipResolver(directory).resolve("eng@co")

        assert result.emails == ["a@co", "b@co"]
        assert not result.is_complete
        assert len(result.errors) == 1
        issue = result.errors[0]
        assert issue.group_key == "gone@co"
        assert issue.parent == "eng@co"
        assert issue.status == "not_found"
        assert issue.error_code == "NOT_FOUND"

    def test_nested_group_without_key_is_reported(self, make_directory, member_user):
        directory = make_directory(
            {"eng@co": [member_user("a@co"), {"type": "GROUP"}]}
        )

        result = MembershipResolver(directory).resolve("eng@co")

        assert result.emails == ["a@co"]
        assert result.errors[0].error_code == "MISSING_GROUP_KEY"
        assert directory.calls == ["eng@co"]

    def test_nested_transient_error(self, make_directory, member_user, member_group):
        directory = make_directory(
            {
                "eng@co": [member_group("flaky@co"), member_user("a@co")],
                "flaky@co": OperationResult.transient_error(
                    "Google API server error (503)", error_code="SERVER_ERROR"
                ),
            }
        )

        result = MembershipResolver(directory).resolve("eng@co")

        assert result.emails == ["a@co"]
        assert result.errors[0].status == "transient_error"
        assert result.groups_expanded == 2
