"""Shared fixtures for Google Workspace client tests."""

import json
from typing import Any, Callable
from unittest.mock import MagicMock, Mock

import pytest
from googleapiclient.errors import HttpError


@pytest.fixture
def mock_google_service() -> Mock:
    """Mock Google API service resource.

    Use this to mock the return value of build() or SessionProvider.get_service().
    """
    return Mock()


@pytest.fixture
def mock_session_provider():
    """Mock SessionProvider that prevents actual API calls.

    Usage:
        def test_something(mock_session_provider):
            mock_service = mock_session_provider.get_service.return_value
            mock_service.members().list().execute.return_value = {"members": []}
    """
    provider = Mock()
    # Return a MagicMock for the service to support arbitrary chaining
    provider.get_service.return_value = MagicMock()
    return provider


@pytest.fixture
def make_mock_request() -> Callable:
    """Factory fixture for creating mock Google API requests.

    Example:
        def test_api_call(make_mock_request):
            request = make_mock_request(return_value={"members": []})
            result = request.execute()
    """

    def _make(
        return_value: Any = None,
        side_effect: Any = None,
        raise_error: Exception | None = None,
    ) -> Mock:
        request = Mock()
        if raise_error:
            request.execute.side_effect = raise_error
        elif side_effect:
            request.execute.side_effect = side_effect
        else:
            request.execute.return_value = return_value
        return request

    return _make


@pytest.fixture
def mock_google_api_error():
    """Factory fixture for creating mock Google API HttpError.

    Example:
        def test_error_handling(mock_google_api_error):
            error = mock_google_api_error(status=404, reason="Not Found")
    """

    def _make(status: int = 500, reason: str = "Internal Server Error") -> HttpError:
        resp = Mock()
        resp.status = status
        resp.reason = reason
        resp.get = Mock(return_value=None)
        content = json.dumps(
            {
                "error": {
                    "code": status,
                    "message": reason,
                    "errors": [
                        {"message": reason, "reason": reason.lower().replace(" ", "_")}
                    ],
                }
            }
        ).encode()
        return HttpError(resp=resp, content=content)

    return _make
