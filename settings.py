from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_LOCATION_ENV = "FIREALARM_LOCATION"
_SENSOR_TIMEOUT_ENV = "SENSOR_TIMEOUT_SECONDS"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_SENSOR_TIMEOUT = 5.0


@dataclass(frozen=True)
class Settings:
    location: Optional[str]
    sensor_timeout: float
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_timeout(default: float) -> float:
    value = os.getenv(_SENSOR_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        location=_read_optional_env(_LOCATION_ENV, None),
        sensor_timeout=_read_timeout(DEFAULT_SENSOR_TIMEOUT),
        log_level=_read_log_level("INFO"),
    )
