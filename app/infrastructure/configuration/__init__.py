"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
domain-based organization.

Exports:
    Settings: Main settings class
    ConfigurationError: Raised for configuration that cannot start the service
    validate_startup_settings: Check required settings before serving

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    validate_startup_settings(settings)
    ```
"""

from infrastructure.configuration.base import ConfigurationError
from infrastructure.configuration.settings import Settings
from infrastructure.configuration.validation import validate_startup_settings

__all__ = ["ConfigurationError", "Settings", "validate_startup_settings"]
