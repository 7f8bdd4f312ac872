from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.config import CLIConfig, load_config
from cli.render import echo_key_values, render_alarm, render_readings
from logging_config import configure_logging
from models.errors import FireAlarmError
from services.monitor import FireAlarm

EXIT_FAULT = 1
EXIT_ALARM = 2


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Check HTTP temperature sensors against the fire alarm threshold.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=EXIT_FAULT)
    return state


def _fail(exc: FireAlarmError) -> typer.Exit:
    typer.secho(f"{type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    return typer.Exit(code=EXIT_FAULT)


def _open_monitor(ctx: typer.Context) -> FireAlarm:
    state = _get_state(ctx)
    try:
        monitor = FireAlarm.from_location(state.config.location, timeout=state.config.timeout)
    except FireAlarmError as exc:
        raise _fail(exc) from exc
    ctx.call_on_close(monitor.close)
    return monitor


@app.callback()
def main(
    ctx: typer.Context,
    location: Optional[str] = typer.Option(
        None,
        "--location",
        "-l",
        help="Directory holding resources/config.properties (defaults to FIREALARM_LOCATION).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for each sensor response.",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging()
    ctx.obj = CLIState(config=load_config(location=location, timeout=timeout))


@app.command("check")
def check_command(
    ctx: typer.Context,
    show_readings: bool = typer.Option(
        False,
        "--show-readings/--no-show-readings",
        help="Read every sensor and list the temperatures before deciding.",
    ),
) -> None:
    """Evaluate every sensor; exit status 2 signals a temperature above the threshold."""
    monitor = _open_monitor(ctx)
    try:
        if show_readings:
            readings = monitor.readings()
            render_readings(readings, monitor.max_temperature)
            too_high = any(monitor.evaluator.exceeds(r.temperature) for r in readings)
        else:
            too_high = monitor.is_temperature_too_high()
    except FireAlarmError as exc:
        raise _fail(exc) from exc

    render_alarm(too_high, monitor.max_temperature)
    if too_high:
        raise typer.Exit(code=EXIT_ALARM)


@app.command("read")
def read_command(
    ctx: typer.Context,
    sensor_id: str = typer.Argument(..., help="Identifier (room name) of the sensor."),
) -> None:
    """Read the current temperature of one sensor."""
    monitor = _open_monitor(ctx)
    try:
        temperature = monitor.get_temperature(sensor_id)
    except FireAlarmError as exc:
        raise _fail(exc) from exc
    echo_key_values([("sensor_id", sensor_id), ("temperature", temperature)])
