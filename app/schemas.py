"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class SensorEndpoint(BaseModel):
    """A registered sensor and the endpoint it is polled from."""

    sensor_id: str
    endpoint: str


class SensorReadingResponse(BaseModel):
    """Temperature currently reported by one sensor."""

    sensor_id: str
    temperature: int


class AlarmStatus(BaseModel):
    """Outcome of one evaluation across every registered sensor."""

    too_high: bool
    max_temperature: int
    checked_at: datetime = Field(..., description="UTC time the evaluation finished.")
