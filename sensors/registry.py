from __future__ import annotations

from threading import Lock
from typing import Dict, Iterator, Mapping, Optional


class SensorRegistry:
    """Maps sensor identifiers (room names) to HTTP endpoint URLs.

    Endpoints are stored as given; a broken endpoint only surfaces when a
    reading is attempted.
    """

    def __init__(self, endpoints: Optional[Mapping[str, str]] = None) -> None:
        self._endpoints: Dict[str, str] = dict(endpoints or {})
        self._lock = Lock()

    def register(self, sensor_id: str, endpoint: str) -> None:
        with self._lock:
            self._endpoints[sensor_id] = endpoint

    def unregister(self, sensor_id: str) -> None:
        with self._lock:
            self._endpoints.pop(sensor_id, None)

    def get(self, sensor_id: str) -> Optional[str]:
        with self._lock:
            return self._endpoints.get(sensor_id)

    def identifiers(self) -> list[str]:
        """Return a snapshot of the registered identifiers."""
        with self._lock:
            return list(self._endpoints)

    def items(self) -> list[tuple[str, str]]:
        with self._lock:
            return list(self._endpoints.items())

    def __contains__(self, sensor_id: object) -> bool:
        with self._lock:
            return sensor_id in self._endpoints

    def __len__(self) -> int:
        with self._lock:
            return len(self._endpoints)

    def __iter__(self) -> Iterator[str]:
        return iter(self.identifiers())
