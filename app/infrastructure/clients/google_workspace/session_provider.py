"""Google Workspace session provider for authentication and service creation."""

import json
from pathlib import Path
from typing import Any, List, Optional

import structlog
from google.oauth2 import service_account
from googleapiclient.discovery import Resource, build

from infrastructure.configuration.base import ConfigurationError

logger = structlog.get_logger()


class SessionProvider:
    """Manages Google Workspace API authentication and service creation.

    Holds the service account key and builds delegated credentials that act
    on behalf of an administrator (domain-wide delegation).

    Args:
        credentials_info: Parsed service account JSON key
        default_delegated_email: Administrator email to impersonate
        default_scopes: Default OAuth scopes for services

    Thread Safety:
        This class is thread-safe. Resource objects returned by get_service()
        are NOT thread-safe per the Google API client library documentation;
        each thread must call get_service() to create its own instance.

    References:
        https://googleapis.github.io/google-api-python-client/docs/thread_safety.html
    """

    def __init__(
        self,
        credentials_info: dict[str, Any],
        default_delegated_email: Optional[str] = None,
        default_scopes: Optional[List[str]] = None,
    ) -> None:
        self._credentials_info: dict[str, Any] = credentials_info
        self._default_delegated_email: Optional[str] = default_delegated_email
        self._default_scopes: List[str] = default_scopes or []
        self._logger = logger.bind(component="google_session_provider")

    @classmethod
    def from_file(
        cls,
        path: str,
        default_delegated_email: Optional[str] = None,
        default_scopes: Optional[List[str]] = None,
    ) -> "SessionProvider":
        """Load the service account key from ``path``.

        Raises:
            ConfigurationError: If the file is missing, unreadable or not a
                service account key
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Unable to read service account key file {path!r}: {e}"
            ) from e

        try:
            info = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Service account key file {path!r} is not valid JSON: {e}"
            ) from e

        if not isinstance(info, dict) or info.get("type") != "service_account":
            raise ConfigurationError(
                f"Service account key file {path!r} does not contain a service account key"
            )

        return cls(
            credentials_info=info,
            default_delegated_email=default_delegated_email,
            default_scopes=default_scopes,
        )

    def get_credentials(
        self,
        scopes: Optional[List[str]] = None,
        delegated_user_email: Optional[str] = None,
    ) -> service_account.Credentials:
        """Build delegated, scoped service account credentials.

        Raises:
            ConfigurationError: If the key cannot be turned into credentials
        """
        try:
            creds = service_account.Credentials.from_service_account_info(
                self._credentials_info
            )
        except (ValueError, KeyError) as e:
            self._logger.error("invalid_service_account_key", error=str(e))
            raise ConfigurationError(f"Invalid service account key: {e}") from e

        delegation_email = delegated_user_email or self._default_delegated_email
        if delegation_email:
            creds = creds.with_subject(delegation_email)

        service_scopes = scopes or self._default_scopes
        if service_scopes:
            creds = creds.with_scopes(service_scopes)

        return creds

    def get_service(
        self,
        service_name: str,
        version: str,
        scopes: Optional[List[str]] = None,
        delegated_user_email: Optional[str] = None,
    ) -> Resource:
        """Create an authenticated Google API service resource.

        Args:
            service_name: Google service name (e.g., "admin")
            version: API version (e.g., "directory_v1")
            scopes: OAuth scopes (uses default if None)
            delegated_user_email: Email for delegation (uses default if None)

        Returns:
            Authenticated Google API service resource
        """
        creds = self.get_credentials(
            scopes=scopes, delegated_user_email=delegated_user_email
        )
        try:
            return build(
                service_name,
                version,
                credentials=creds,
                cache_discovery=False,
                static_discovery=True,
            )
        except Exception as e:
            self._logger.error(
                "service_creation_failed", service=service_name, error=str(e)
            )
            raise
