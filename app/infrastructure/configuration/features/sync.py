"""Role synchronization feature settings."""

import re
from typing import Any

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings

_DURATION_PART = re.compile(r"(\d+)(h|m|s)")
_UNIT_SECONDS = {"h": 3600, "m": 60, "s": 1}


def parse_duration(value: Any) -> int:
    """Parse an interval into whole seconds.

    Accepts a number of seconds (``3600``, ``"3600"``) or a duration string
    made of hour/minute/second parts (``"30s"``, ``"5m"``, ``"1h30m"``).

    Raises:
        ValueError: If the value cannot be parsed or is not positive
    """
    if isinstance(value, bool):
        raise ValueError(f"invalid duration: {value!r}")
    if isinstance(value, (int, float)):
        seconds = int(value)
    elif isinstance(value, str):
        text = value.strip().lower()
        if text.isdigit():
            seconds = int(text)
        else:
            parts = _DURATION_PART.findall(text)
            if not parts or "".join(n + u for n, u in parts) != text:
                raise ValueError(f"invalid duration: {value!r}")
            seconds = sum(int(n) * _UNIT_SECONDS[u] for n, u in parts)
    else:
        raise ValueError(f"invalid duration: {value!r}")

    if seconds <= 0:
        raise ValueError(f"duration must be positive: {value!r}")
    return seconds


class SyncSettings(FeatureSettings):
    """Configuration for the periodic role synchronization.

    Environment Variables:
        CONFIG: Path to the YAML rules document
        INTERVAL: Seconds (or ``30s``/``5m``/``1h``) between reconciliation passes
        RECONCILE_TIMEOUT: Maximum duration of a single pass before remaining rules are skipped
        RUN_ON_STARTUP: Run a pass as soon as the scheduler starts

    Example:
        ```python
        settings = get_settings()
        every = settings.sync.INTERVAL
        ```
    """

    CONFIG: str = Field(default="", alias="CONFIG")
    INTERVAL: int = Field(default=3600, alias="INTERVAL")
    RECONCILE_TIMEOUT: int = Field(default=600, alias="RECONCILE_TIMEOUT")
    RUN_ON_STARTUP: bool = Field(default=True, alias="RUN_ON_STARTUP")

    @field_validator("INTERVAL", "RECONCILE_TIMEOUT", mode="before")
    @classmethod
    def _parse_duration(cls, v: Any) -> int:
        return parse_duration(v)
