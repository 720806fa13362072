"""Operation status enumeration.

Classifies the outcome of calls to external systems (Directory API, Grafana)
so callers can tell retryable failures from permanent ones.
"""

from enum import Enum


class OperationStatus(Enum):
    """Status codes for operation results.

    Attributes:
        SUCCESS: Operation completed successfully
        TRANSIENT_ERROR: Retryable error (network, timeout, rate limit, 5xx)
        PERMANENT_ERROR: Non-retryable error (bad request, unknown failure)
        UNAUTHORIZED: Authentication or authorization failure (401/403)
        NOT_FOUND: Group or resource not found (404)
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
