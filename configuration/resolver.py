"""Locate and parse the properties file that configures the monitor."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from models.errors import ConfigurationFileProblemException

logger = logging.getLogger(__name__)

CONFIG_RELATIVE_PATH = Path("resources") / "config.properties"
DB_LOCATION_KEY = "dblocation"
SENSOR_KEY_PREFIX = "sensor."

_COMMENT_PREFIXES = ("#", "!")


class Configuration(BaseModel):
    """Resolved monitor configuration."""

    model_config = ConfigDict(frozen=True)

    db_location: str = Field(..., min_length=1)
    sensors: Dict[str, str] = Field(default_factory=dict)


def parse_properties(text: str) -> Dict[str, str]:
    """Parse ``key = value`` / ``key: value`` lines into a dict.

    Blank lines and lines starting with ``#`` or ``!`` are skipped. A later
    duplicate key overrides an earlier one. Raises ``ValueError`` on a line
    that holds no separator or an empty key.
    """
    properties: Dict[str, str] = {}
    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue

        separators = [index for index in (line.find("="), line.find(":")) if index >= 0]
        if not separators:
            raise ValueError(f"line {line_number} has no key/value separator")
        split_at = min(separators)

        key = line[:split_at].strip()
        if not key:
            raise ValueError(f"line {line_number} has an empty key")
        properties[key] = line[split_at + 1 :].strip()
    return properties


class ConfigResolver:
    """Resolves a :class:`Configuration` from a filesystem root."""

    def __init__(self, location: Optional[str | Path]) -> None:
        self.location = location

    @property
    def config_path(self) -> Optional[Path]:
        if self.location is None or not str(self.location).strip():
            return None
        return Path(self.location) / CONFIG_RELATIVE_PATH

    def resolve(self) -> Configuration:
        path = self.config_path
        if path is None:
            raise ConfigurationFileProblemException(
                "Configuration location is not set."
            )

        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigurationFileProblemException(
                f"Configuration file {str(path)!r} does not exist."
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise ConfigurationFileProblemException(
                f"Configuration file {str(path)!r} could not be read: {exc}"
            ) from exc

        try:
            properties = parse_properties(text)
        except ValueError as exc:
            raise ConfigurationFileProblemException(
                f"Configuration file {str(path)!r} is malformed: {exc}"
            ) from exc

        sensors = {
            key[len(SENSOR_KEY_PREFIX) :]: value
            for key, value in properties.items()
            if key.startswith(SENSOR_KEY_PREFIX) and len(key) > len(SENSOR_KEY_PREFIX)
        }

        try:
            configuration = Configuration(
                db_location=properties.get(DB_LOCATION_KEY, ""),
                sensors=sensors,
            )
        except ValidationError as exc:
            raise ConfigurationFileProblemException(
                f"Configuration file {str(path)!r} does not define {DB_LOCATION_KEY!r}."
            ) from exc

        logger.info(
            "Configuration resolved",
            extra={"config_path": str(path), "db_location": configuration.db_location},
        )
        return configuration


def resolve_configuration(location: Optional[str | Path]) -> Configuration:
    return ConfigResolver(location).resolve()
