"""Error classifiers for Google API exceptions.

Converts ``googleapiclient`` exceptions into ``OperationResult`` objects so
that every directory call reports failures the same way.

Usage:
    from infrastructure.operations.classifiers import classify_http_error

    try:
        response = service.members().list(groupKey=group_key).execute()
    except Exception as exc:
        return classify_http_error(exc)
"""

from typing import Optional

from googleapiclient.errors import HttpError

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

DEFAULT_RETRY_AFTER = 60


def _status_code(exc: HttpError) -> Optional[int]:
    resp = getattr(exc, "resp", None)
    if resp is None:
        return None
    try:
        return int(resp.status)
    except (AttributeError, TypeError, ValueError):
        return None


def classify_http_error(exc: Exception) -> OperationResult:
    """Classify a Google API exception into an OperationResult.

    Status Code Mapping:
    - 429: Rate limiting -> TRANSIENT_ERROR with retry_after
    - 401/403: Credentials or delegation rejected -> UNAUTHORIZED
    - 404: Group not found -> NOT_FOUND
    - 5xx: Server error -> TRANSIENT_ERROR
    - Other 4xx and unknown: PERMANENT_ERROR

    Non-HttpError exceptions (socket errors, timeouts, refresh failures) are
    treated as transient connection errors.

    Args:
        exc: Exception raised while executing a Google API request

    Returns:
        OperationResult describing the failure
    """
    if not isinstance(exc, HttpError):
        return OperationResult.transient_error(
            f"Connection error: {type(exc).__name__}: {str(exc)}",
            error_code="CONNECTION_ERROR",
        )

    status_code = _status_code(exc)

    if status_code == 429:
        retry_after = DEFAULT_RETRY_AFTER
        header_value = exc.resp.get("retry-after") if hasattr(exc.resp, "get") else None
        if header_value:
            try:
                retry_after = int(header_value)
            except (ValueError, TypeError):
                pass
        return OperationResult.error(
            OperationStatus.TRANSIENT_ERROR,
            "Google API rate limited",
            error_code="RATE_LIMITED",
            retry_after=retry_after,
        )

    if status_code == 401:
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            "Google API authentication failed",
            error_code="UNAUTHORIZED",
        )

    if status_code == 403:
        return OperationResult.error(
            OperationStatus.UNAUTHORIZED,
            "Google API authorization denied",
            error_code="FORBIDDEN",
        )

    if status_code == 404:
        return OperationResult.error(
            OperationStatus.NOT_FOUND,
            "Google resource not found",
            error_code="NOT_FOUND",
        )

    if status_code and 500 <= status_code < 600:
        return OperationResult.transient_error(
            f"Google API server error ({status_code})",
            error_code="SERVER_ERROR",
        )

    if status_code and 400 <= status_code < 500:
        return OperationResult.permanent_error(
            f"Google API client error ({status_code}): {str(exc)}",
            error_code="HTTP_ERROR",
        )

    return OperationResult.permanent_error(
        f"Google API error: {str(exc)}",
        error_code="UNKNOWN_ERROR",
    )
