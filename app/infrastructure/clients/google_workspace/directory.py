"""Directory client for Google Workspace operations.

Read-only access to the Google Workspace Directory API group membership,
with pagination, retries and OperationResult return types.
"""

from typing import Any, Optional

import structlog

from infrastructure.clients.google_workspace.executor import execute_google_api_call
from infrastructure.clients.google_workspace.session_provider import SessionProvider
from infrastructure.configuration.integrations.google import DIRECTORY_READONLY_SCOPES
from infrastructure.operations.result import OperationResult

logger = structlog.get_logger()


class DirectoryClient:
    """Client for Google Workspace Directory API group operations.

    All methods return OperationResult; API failures are never raised.

    Args:
        session_provider: SessionProvider for authentication
        max_retries: Retry attempts for 429/5xx responses (uses executor default if None)
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        max_retries: Optional[int] = None,
    ) -> None:
        self._session_provider = session_provider
        self._max_retries = max_retries
        self._logger = logger.bind(component="directory_client")

    def _service(self, delegated_email: Optional[str] = None) -> Any:
        return self._session_provider.get_service(
            "admin",
            "directory_v1",
            scopes=DIRECTORY_READONLY_SCOPES,
            delegated_user_email=delegated_email,
        )

    def list_members(
        self,
        group_key: str,
        delegated_email: Optional[str] = None,
        **kwargs: Any,
    ) -> OperationResult:
        """List the immediate members of a group with automatic pagination.

        Nested groups are returned as entries with ``type == "GROUP"``; they
        are not expanded here.

        Args:
            group_key: Group's email address or unique ID
            delegated_email: Email for domain-wide delegation
            **kwargs: Additional parameters (maxResults, roles, ...)

        Returns:
            OperationResult with the list of member dicts in data field
        """
        self._logger.debug("listing_members", group_key=group_key)

        def api_call() -> list[dict[str, Any]]:
            service = self._service(delegated_email)

            all_members: list[dict[str, Any]] = []
            request = service.members().list(groupKey=group_key, **kwargs)

            while request is not None:
                response = request.execute()
                all_members.extend(response.get("members", []))
                request = service.members().list_next(request, response)

            return all_members

        return execute_google_api_call(
            "list_members", api_call, max_retries=self._max_retries
        )
