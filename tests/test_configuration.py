from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from configuration.resolver import (
    ConfigResolver,
    Configuration,
    parse_properties,
    resolve_configuration,
)
from models.errors import ConfigurationFileProblemException


def test_parse_properties_tolerates_spacing_comments_and_colons() -> None:
    text = """
# fire alarm configuration
! legacy comment style
dblocation = sqlite:///alarm.db
sensor.kitchen:http://kitchen.local/temp
  sensor.hall   =   http://hall.local:8080/temp
"""

    assert parse_properties(text) == {
        "dblocation": "sqlite:///alarm.db",
        "sensor.kitchen": "http://kitchen.local/temp",
        "sensor.hall": "http://hall.local:8080/temp",
    }


def test_parse_properties_later_duplicate_wins() -> None:
    assert parse_properties("a = 1\na = 2\n") == {"a": "2"}


def test_parse_properties_rejects_line_without_separator() -> None:
    with pytest.raises(ValueError, match="line 2"):
        parse_properties("dblocation = x\njust some words\n")


def test_parse_properties_rejects_empty_key() -> None:
    with pytest.raises(ValueError, match="empty key"):
        parse_properties(" = value\n")


@pytest.mark.parametrize("location", [None, "", "   "])
def test_missing_location_pointer_fails(location) -> None:
    with pytest.raises(ConfigurationFileProblemException):
        resolve_configuration(location)


def test_missing_config_file_fails(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationFileProblemException, match="does not exist"):
        ConfigResolver(tmp_path).resolve()


def test_malformed_config_file_fails(write_config) -> None:
    root = write_config("dblocation\n")

    with pytest.raises(ConfigurationFileProblemException, match="malformed"):
        resolve_configuration(root)


@pytest.mark.parametrize("content", ["", "other = value\n", "dblocation =\n"])
def test_missing_db_location_fails(write_config, content: str) -> None:
    root = write_config(content)

    with pytest.raises(ConfigurationFileProblemException, match="dblocation"):
        resolve_configuration(root)


def test_resolves_db_location_and_sensor_seeds(write_config) -> None:
    root = write_config(
        "dblocation = auxiliar\n"
        "sensor.kitchen = http://kitchen.local/temp\n"
        "sensor. = http://ignored.local\n"
    )

    configuration = resolve_configuration(str(root))

    assert configuration.db_location == "auxiliar"
    assert configuration.sensors == {"kitchen": "http://kitchen.local/temp"}


def test_config_path_is_below_resources(tmp_path: Path) -> None:
    resolver = ConfigResolver(tmp_path)

    assert resolver.config_path == tmp_path / "resources" / "config.properties"


def test_configuration_is_immutable() -> None:
    configuration = Configuration(db_location="sqlite:///alarm.db")

    with pytest.raises(ValidationError):
        configuration.db_location = "sqlite:///other.db"  # type: ignore[misc]
