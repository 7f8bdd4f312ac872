"""Fetch sensor responses over HTTP and extract integer temperatures."""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional, Protocol

import httpx

from models.errors import IncorrectDataException, SensorConnectionProblemException
from sensors.registry import SensorRegistry
from settings import DEFAULT_SENSOR_TIMEOUT

logger = logging.getLogger(__name__)

TEMPERATURE_FIELD = "temperature"

_INTEGER_TEXT = re.compile(r"[+-]?\d+")


class ReadingParser(Protocol):
    """Turns a raw sensor response body into a temperature."""

    def parse(self, body: str, sensor_id: Optional[str] = None) -> int:
        ...


def _as_integer(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("boolean is not a temperature")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f"{value!r} is not a whole number")
    if isinstance(value, str):
        candidate = value.strip()
        if _INTEGER_TEXT.fullmatch(candidate):
            return int(candidate)
        raise ValueError(f"{value!r} is not an integer literal")
    raise ValueError(f"{type(value).__name__} is not a temperature")


class JsonReadingParser:
    """Reads the ``temperature`` field of a JSON object."""

    def __init__(self, field: str = TEMPERATURE_FIELD) -> None:
        self.field = field

    def load(self, body: str) -> Any:
        if not body or not body.strip():
            return None
        return json.loads(body)

    def parse(self, body: str, sensor_id: Optional[str] = None) -> int:
        try:
            document = self.load(body)
        except json.JSONDecodeError as exc:
            raise IncorrectDataException(
                f"Sensor response is not valid JSON: {exc.msg}", sensor_id=sensor_id
            ) from exc
        # Oversized integer literals and very deep nesting fail outside the decoder.
        except (ValueError, RecursionError) as exc:
            raise IncorrectDataException(
                f"Sensor response is not valid JSON: {type(exc).__name__}",
                sensor_id=sensor_id,
            ) from exc

        if document is None:
            raise IncorrectDataException("Sensor returned no JSON document.", sensor_id=sensor_id)

        if not isinstance(document, dict) or self.field not in document:
            raise IncorrectDataException(
                f"Sensor response has no {self.field!r} field.", sensor_id=sensor_id
            )

        try:
            return _as_integer(document[self.field])
        except ValueError as exc:
            raise IncorrectDataException(
                f"Sensor {self.field!r} value is not an integer: {exc}",
                sensor_id=sensor_id,
            ) from exc


def _is_json_media_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


class SensorReader:
    """Resolves a sensor endpoint, fetches it, and validates the reading."""

    def __init__(
        self,
        registry: SensorRegistry,
        parser: Optional[ReadingParser] = None,
        client: Optional[httpx.Client] = None,
        timeout: float = DEFAULT_SENSOR_TIMEOUT,
    ) -> None:
        self.registry = registry
        self.parser: ReadingParser = parser or JsonReadingParser()
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def endpoint_for(self, sensor_id: str) -> httpx.URL:
        endpoint = (self.registry.get(sensor_id) or "").strip()
        if not endpoint:
            raise SensorConnectionProblemException(
                f"Sensor {sensor_id!r} has no endpoint.", sensor_id=sensor_id
            )
        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as exc:
            raise SensorConnectionProblemException(
                f"Sensor {sensor_id!r} endpoint {endpoint!r} is not a valid URL.",
                sensor_id=sensor_id,
            ) from exc
        if url.scheme not in {"http", "https"} or not url.host:
            raise SensorConnectionProblemException(
                f"Sensor {sensor_id!r} endpoint {endpoint!r} is not an HTTP URL.",
                sensor_id=sensor_id,
            )
        return url

    def fetch(self, sensor_id: str) -> str:
        """Return the raw JSON body served by the sensor's endpoint."""
        url = self.endpoint_for(sensor_id)
        try:
            response = self._client.get(url, headers={"Accept": "application/json"})
        except httpx.HTTPError as exc:
            logger.warning(
                "Sensor request failed",
                extra={"sensor_id": sensor_id, "endpoint": str(url), "reason": str(exc)},
            )
            raise SensorConnectionProblemException(
                f"Sensor {sensor_id!r} is unreachable: {exc}", sensor_id=sensor_id
            ) from exc

        if not response.is_success:
            logger.warning(
                "Sensor answered with an error status",
                extra={
                    "sensor_id": sensor_id,
                    "endpoint": str(url),
                    "status_code": response.status_code,
                },
            )
            raise SensorConnectionProblemException(
                f"Sensor {sensor_id!r} answered with status {response.status_code}.",
                sensor_id=sensor_id,
            )

        content_type = response.headers.get("content-type", "")
        if not _is_json_media_type(content_type):
            logger.warning(
                "Sensor endpoint does not serve JSON",
                extra={"sensor_id": sensor_id, "endpoint": str(url), "reason": content_type},
            )
            raise SensorConnectionProblemException(
                f"Sensor {sensor_id!r} endpoint does not serve JSON "
                f"(content type {content_type or 'missing'!r}).",
                sensor_id=sensor_id,
            )

        return response.text

    def read(self, sensor_id: str) -> int:
        body = self.fetch(sensor_id)
        try:
            temperature = self.parser.parse(body, sensor_id=sensor_id)
        except IncorrectDataException as exc:
            logger.warning(
                "Sensor returned unusable data",
                extra={"sensor_id": sensor_id, "reason": str(exc)},
            )
            raise
        logger.debug(
            "Sensor read", extra={"sensor_id": sensor_id, "temperature": temperature}
        )
        return temperature
