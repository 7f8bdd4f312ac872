from __future__ import annotations

from typing import Any, Iterable

import typer

from models.records import SensorReading


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def render_readings(readings: Iterable[SensorReading], max_temperature: int) -> None:
    echo_heading("Sensor Readings")
    rows = list(readings)
    if not rows:
        typer.echo("No sensors registered.")
        return
    for reading in rows:
        marker = " (above threshold)" if reading.temperature > max_temperature else ""
        typer.echo(f"  - {reading.sensor_id}: {reading.temperature}{marker}")


def render_alarm(too_high: bool, max_temperature: int) -> None:
    typer.echo()
    echo_heading("Alarm")
    echo_key_values([("max_temperature", max_temperature), ("too_high", too_high)])
    if too_high:
        typer.secho("Temperature too high!", fg=typer.colors.RED, bold=True)
    else:
        typer.secho("All sensors within limits.", fg=typer.colors.GREEN)
