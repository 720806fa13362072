"""Operation result dataclass.

Uniform result type returned by the directory and target-system clients.
Clients never raise for API failures; they return an ``OperationResult``
and let the caller decide whether the failure is fatal.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass
class OperationResult:
    """Outcome of a single client operation.

    Attributes:
        status: High-level outcome
        message: Human-friendly message for logs
        data: Payload on success (dict, list, ...)
        error_code: Machine error code on failure (e.g. ``NOT_FOUND``)
        retry_after: Seconds to wait before retrying when rate-limited
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    retry_after: Optional[int] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @property
    def is_retryable(self) -> bool:
        return self.status == OperationStatus.TRANSIENT_ERROR

    @classmethod
    def success(
        cls, data: Optional[Any] = None, message: str = "ok"
    ) -> "OperationResult":
        """Create a SUCCESS result carrying ``data``."""
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def error(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Create a failed result with an explicit status."""
        return cls(
            status=status,
            message=message,
            error_code=error_code,
            retry_after=retry_after,
        )

    @classmethod
    def transient_error(
        cls,
        message: str,
        error_code: Optional[str] = None,
        retry_after: Optional[int] = None,
    ) -> "OperationResult":
        """Create a TRANSIENT_ERROR result (network issues, rate limits, 5xx)."""
        return cls.error(
            OperationStatus.TRANSIENT_ERROR, message, error_code, retry_after
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a PERMANENT_ERROR result (will not succeed on retry)."""
        return cls.error(OperationStatus.PERMANENT_ERROR, message, error_code)
