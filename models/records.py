"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class SensorReading:
    """A single temperature reading taken from a sensor endpoint."""

    sensor_id: str
    temperature: int
