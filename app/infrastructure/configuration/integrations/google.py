"""Google Workspace integration settings."""

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings

DIRECTORY_READONLY_SCOPES = [
    "https://www.googleapis.com/auth/admin.directory.group.member.readonly",
    "https://www.googleapis.com/auth/admin.directory.group.readonly",
]


class GoogleWorkspaceSettings(IntegrationSettings):
    """Google Workspace configuration settings.

    The service account must have domain-wide delegation enabled for the
    read-only directory group scopes, and acts on behalf of an administrator.
    See https://developers.google.com/admin-sdk/directory/v1/guides/delegation

    Environment Variables:
        GOOGLE_APPLICATION_CREDENTIALS: Path to the service account key file
        GOOGLE_ADMIN_EMAIL: Administrator email to impersonate
        GOOGLE_MAX_RETRIES: Retry attempts for retryable Directory API errors

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()
        key_file = settings.google_workspace.GOOGLE_APPLICATION_CREDENTIALS
        ```
    """

    GOOGLE_APPLICATION_CREDENTIALS: str = Field(
        default="", alias="GOOGLE_APPLICATION_CREDENTIALS"
    )
    GOOGLE_ADMIN_EMAIL: str = Field(default="", alias="GOOGLE_ADMIN_EMAIL")
    GOOGLE_MAX_RETRIES: int = Field(default=3, ge=0, alias="GOOGLE_MAX_RETRIES")
