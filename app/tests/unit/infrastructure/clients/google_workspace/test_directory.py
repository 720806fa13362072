"""Unit tests for DirectoryClient."""

from unittest.mock import Mock

import pytest

from infrastructure.clients.google_workspace.directory import DirectoryClient
from infrastructure.configuration.base import ConfigurationError
from infrastructure.configuration.integrations.google import DIRECTORY_READONLY_SCOPES
from infrastructure.operations.status import OperationStatus


@pytest.mark.unit
class TestDirectoryClientMembers:
    """Test DirectoryClient member operations."""

    def test_list_members_single_page(self, mock_session_provider: Mock):
        mock_service = Mock()
        mock_request = Mock()
        mock_request.execute.return_value = {
            "members": [
                {"email": "a@example.com", "type": "USER"},
                {"email": "sub@example.com", "type": "GROUP"},
            ]
        }
        mock_service.members().list.return_value = mock_request
        mock_service.members().list_next.return_value = None
        mock_session_provider.get_service.return_value = mock_service

        client = DirectoryClient(session_provider=mock_session_provider)
        result = client.list_members("group@example.com")

        assert result.is_success
        assert [m["email"] for m in result.data] == ["a@example.com", "sub@example.com"]
        mock_service.members().list.assert_called_with(groupKey="group@example.com")

    def test_list_members_pagination(self, mock_session_provider: Mock):
        mock_service = Mock()
        mock_request1 = Mock()
        mock_request1.execute.return_value = {
            "members": [{"email": "a@example.com"}],
            "nextPageToken": "token123",
        }
        mock_request2 = Mock()
        mock_request2.execute.return_value = {"members": [{"email": "b@example.com"}]}
        mock_service.members().list.return_value = mock_request1
        mock_service.members().list_next.side_effect = [mock_request2, None]
        mock_session_provider.get_service.return_value = mock_service

        client = DirectoryClient(session_provider=mock_session_provider)
        result = client.list_members("group@example.com")

        assert result.is_success
        assert [m["email"] for m in result.data] == ["a@example.com", "b@example.com"]

    def test_list_members_empty_group(self, mock_session_provider: Mock):
        mock_service = Mock()
        mock_request = Mock()
        mock_request.execute.return_value = {"kind": "admin#directory#members"}
        mock_service.members().list.return_value = mock_request
        mock_service.members().list_next.return_value = None
        mock_session_provider.get_service.return_value = mock_service

        result = DirectoryClient(session_provider=mock_session_provider).list_members(
            "empty@example.com"
        )

        assert result.is_success
        assert result.data == []

    def test_list_members_uses_readonly_scopes_and_delegation(
        self, mock_session_provider: Mock
    ):
        mock_service = mock_session_provider.get_service.return_value
        mock_service.members().list().execute.return_value = {"members": []}
        mock_service.members().list_next.return_value = None

        client = DirectoryClient(session_provider=mock_session_provider)
        client.list_members("group@example.com", delegated_email="admin@example.com")

        args, kwargs = mock_session_provider.get_service.call_args
        assert args == ("admin", "directory_v1")
        assert kwargs["scopes"] == DIRECTORY_READONLY_SCOPES
        assert kwargs["delegated_user_email"] == "admin@example.com"

    def test_list_members_with_kwargs(self, mock_session_provider: Mock):
        mock_service = Mock()
        mock_request = Mock()
        mock_request.execute.return_value = {"members": []}
        mock_service.members().list.return_value = mock_request
        mock_service.members().list_next.return_value = None
        mock_session_provider.get_service.return_value = mock_service

        DirectoryClient(session_provider=mock_session_provider).list_members(
            "group@example.com", maxResults=200
        )

        mock_service.members().list.assert_called_with(
            groupKey="group@example.com", maxResults=200
        )

    def test_list_members_not_found(
        self, mock_session_provider: Mock, mock_google_api_error
    ):
        mock_service = Mock()
        mock_request = Mock()
        mock_request.execute.side_effect = mock_google_api_error(404, "Not Found")
        mock_service.members().list.return_value = mock_request
        mock_session_provider.get_service.return_value = mock_service

        result = DirectoryClient(
            session_provider=mock_session_provider, max_retries=0
        ).list_members("missing@example.com")

        assert not result.is_success
        assert result.status == OperationStatus.NOT_FOUND

    def test_list_members_permission_denied(
        self, mock_session_provider: Mock, mock_google_api_error
    ):
        mock_service = Mock()
        mock_request = Mock()
        mock_request.execute.side_effect = mock_google_api_error(403, "Forbidden")
        mock_service.members().list.return_value = mock_request
        mock_session_provider.get_service.return_value = mock_service

        result = DirectoryClient(session_provider=mock_session_provider).list_members(
            "group@example.com"
        )

        assert result.status == OperationStatus.UNAUTHORIZED
        assert result.error_code == "FORBIDDEN"

    def test_list_members_invalid_credentials(self, mock_session_provider: Mock):
        mock_session_provider.get_service.side_effect = ConfigurationError(
            "Invalid service account key"
        )

        result = DirectoryClient(session_provider=mock_session_provider).list_members(
            "group@example.com"
        )

        assert result.status == OperationStatus.UNAUTHORIZED
        assert result.error_code == "INVALID_CREDENTIALS"
        assert mock_session_provider.get_service.call_count == 1
