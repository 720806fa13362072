"""Infrastructure modules for the grafana-snitch application.

Centralized infrastructure components:
- configuration: Settings management (Settings, ConfigurationError)
- clients: Google Workspace Directory API clients
- logging: structlog configuration and context binding
- observability: Prometheus counters
- operations: Operation results and error classification
- services: Dependency injection providers (get_settings, SettingsDep)
"""
