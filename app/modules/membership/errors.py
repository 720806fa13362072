"""Errors for the membership module."""

from infrastructure.operations import OperationResult


class MembershipResolutionError(Exception):
    """Raised when the members of the requested group cannot be listed.

    Only the top-level lookup raises; failures of nested groups are
    collected in ``ResolutionResult.errors`` instead.

    Attributes:
        group_key: The group that could not be resolved
        result: The failed OperationResult from the directory client
    """

    def __init__(self, group_key: str, result: OperationResult):
        super().__init__(
            f"Unable to list members of {group_key}: {result.message}"
        )
        self.group_key = group_key
        self.result = result

    @property
    def status(self) -> str:
        return self.result.status.value

    @property
    def error_code(self):
        return self.result.error_code
