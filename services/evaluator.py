"""Threshold evaluation across every registered sensor."""

from __future__ import annotations

import logging
from typing import List

from models.records import SensorReading
from sensors.reader import SensorReader
from sensors.registry import SensorRegistry

logger = logging.getLogger(__name__)

MAX_TEMPERATURE = 80


class AlarmEvaluator:
    """Decides whether any sensor reports a temperature above the threshold.

    A failed read aborts the evaluation: the fault propagates unchanged and
    no answer is produced from the remaining sensors.
    """

    def __init__(
        self,
        registry: SensorRegistry,
        reader: SensorReader,
        max_temperature: int = MAX_TEMPERATURE,
    ) -> None:
        self.registry = registry
        self.reader = reader
        self.max_temperature = max_temperature

    def exceeds(self, temperature: int) -> bool:
        return temperature > self.max_temperature

    def is_temperature_too_high(self) -> bool:
        for sensor_id in self.registry.identifiers():
            temperature = self.reader.read(sensor_id)
            if self.exceeds(temperature):
                logger.warning(
                    "Temperature above threshold",
                    extra={
                        "sensor_id": sensor_id,
                        "temperature": temperature,
                        "max_temperature": self.max_temperature,
                    },
                )
                return True
        return False

    def readings(self) -> List[SensorReading]:
        """Read every sensor without short-circuiting."""
        return [
            SensorReading(sensor_id=sensor_id, temperature=self.reader.read(sensor_id))
            for sensor_id in self.registry.identifiers()
        ]
