"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.sync import SyncSettings, parse_duration

__all__ = [
    "SyncSettings",
    "parse_duration",
]
