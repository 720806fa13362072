"""Google Workspace clients for infrastructure layer.

Public API (Package Level):
- SessionProvider: service account credentials with domain-wide delegation
- DirectoryClient: read-only group membership lookups
- execute_google_api_call: retrying executor returning OperationResult

Usage:
    provider = SessionProvider.from_file(
        settings.google_workspace.GOOGLE_APPLICATION_CREDENTIALS,
        default_delegated_email=settings.google_workspace.GOOGLE_ADMIN_EMAIL,
    )
    directory = DirectoryClient(session_provider=provider)
    result = directory.list_members("eng@example.com")
"""

from infrastructure.clients.google_workspace.directory import DirectoryClient
from infrastructure.clients.google_workspace.executor import execute_google_api_call
from infrastructure.clients.google_workspace.session_provider import SessionProvider

__all__ = ["DirectoryClient", "SessionProvider", "execute_google_api_call"]
