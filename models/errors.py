"""Fault kinds raised by the fire alarm monitor."""

from __future__ import annotations

from typing import Optional


class FireAlarmError(Exception):
    """Base class for every fault the monitor reports."""


class ConfigurationFileProblemException(FireAlarmError):
    """The configuration source is missing, unreadable, or unparseable."""


class DatabaseProblemException(FireAlarmError):
    """The configured data store cannot be opened or validated."""


class SensorError(FireAlarmError):
    """A fault tied to one sensor; ``sensor_id`` names it when known."""

    def __init__(self, message: str, sensor_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.sensor_id = sensor_id


class SensorConnectionProblemException(SensorError):
    """A sensor endpoint is unset, unreachable, or does not speak JSON over HTTP."""


class IncorrectDataException(SensorError):
    """A sensor answered, but its payload holds no usable temperature."""
