"""Composition root wiring configuration, data store, and sensors."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import httpx

from configuration.resolver import Configuration, resolve_configuration
from datastore.probe import DataStoreProbe
from models.records import SensorReading
from sensors.reader import ReadingParser, SensorReader
from sensors.registry import SensorRegistry
from services.evaluator import MAX_TEMPERATURE, AlarmEvaluator
from settings import DEFAULT_SENSOR_TIMEOUT, get_settings

logger = logging.getLogger(__name__)


class FireAlarm:
    """Fire alarm monitor built from an already resolved configuration.

    Construction probes the data store and fails with
    ``DatabaseProblemException`` when it is unusable.
    """

    def __init__(
        self,
        configuration: Configuration,
        *,
        parser: Optional[ReadingParser] = None,
        http_client: Optional[httpx.Client] = None,
        probe: Optional[DataStoreProbe] = None,
        max_temperature: int = MAX_TEMPERATURE,
        timeout: float = DEFAULT_SENSOR_TIMEOUT,
    ) -> None:
        self.configuration = configuration
        (probe or DataStoreProbe()).probe(configuration)

        self.sensors = SensorRegistry(configuration.sensors)
        self.reader = SensorReader(
            self.sensors, parser=parser, client=http_client, timeout=timeout
        )
        self.evaluator = AlarmEvaluator(
            self.sensors, self.reader, max_temperature=max_temperature
        )
        logger.info(
            "Fire alarm ready",
            extra={"max_temperature": max_temperature, "db_location": configuration.db_location},
        )

    @classmethod
    def from_location(cls, location: Optional[str | Path], **kwargs) -> "FireAlarm":
        return cls(resolve_configuration(location), **kwargs)

    @property
    def max_temperature(self) -> int:
        return self.evaluator.max_temperature

    def get_temperature(self, sensor_id: str) -> int:
        return self.reader.read(sensor_id)

    def is_temperature_too_high(self) -> bool:
        return self.evaluator.is_temperature_too_high()

    def readings(self) -> List[SensorReading]:
        return self.evaluator.readings()

    def close(self) -> None:
        self.reader.close()

    def __enter__(self) -> "FireAlarm":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@lru_cache
def build_default_monitor() -> FireAlarm:
    """Factory that wires the monitor from process settings."""
    settings = get_settings()
    return FireAlarm.from_location(settings.location, timeout=settings.sensor_timeout)
