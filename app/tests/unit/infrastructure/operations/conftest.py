"""Fixtures for operations tests."""

import json
from unittest.mock import Mock

import pytest
from googleapiclient.errors import HttpError


@pytest.fixture
def mock_google_api_error():
    """Factory fixture for creating Google API HttpError instances."""

    def _make(status: int = 500, reason: str = "Internal Server Error") -> HttpError:
        resp = Mock()
        resp.status = status
        resp.reason = reason
        resp.get = Mock(return_value=None)
        content = json.dumps({"error": {"code": status, "message": reason}}).encode()
        return HttpError(resp=resp, content=content)

    return _make
