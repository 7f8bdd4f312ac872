from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from settings import DEFAULT_SENSOR_TIMEOUT, get_settings


@dataclass(frozen=True)
class CLIConfig:
    location: Optional[str] = None
    timeout: float = DEFAULT_SENSOR_TIMEOUT


def load_config(
    location: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CLIConfig:
    settings = get_settings()
    resolved_location = location or settings.location
    if timeout is None or timeout <= 0:
        timeout = settings.sensor_timeout
    return CLIConfig(location=resolved_location, timeout=timeout)
