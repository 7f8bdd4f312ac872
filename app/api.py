"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import AlarmStatus, SensorEndpoint, SensorReadingResponse
from models.errors import IncorrectDataException, SensorConnectionProblemException
from services.monitor import FireAlarm, build_default_monitor

router = APIRouter()


def get_monitor() -> FireAlarm:
    return build_default_monitor()


def _sensor_fault(exc: Exception) -> HTTPException:
    if isinstance(exc, SensorConnectionProblemException):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
    return HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))


@router.get(
    "/sensors",
    response_model=list[SensorEndpoint],
    summary="List registered sensors and their endpoints.",
)
async def list_sensors(monitor: FireAlarm = Depends(get_monitor)) -> list[SensorEndpoint]:
    return [
        SensorEndpoint(sensor_id=sensor_id, endpoint=endpoint)
        for sensor_id, endpoint in sorted(monitor.sensors.items())
    ]


@router.get(
    "/sensors/{sensor_id}",
    response_model=SensorReadingResponse,
    summary="Read the current temperature of one sensor.",
)
def read_sensor(
    sensor_id: str,
    monitor: FireAlarm = Depends(get_monitor),
) -> SensorReadingResponse:
    if sensor_id not in monitor.sensors:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Sensor {sensor_id!r} is not registered.",
        )
    try:
        temperature = monitor.get_temperature(sensor_id)
    except (SensorConnectionProblemException, IncorrectDataException) as exc:
        raise _sensor_fault(exc) from exc
    return SensorReadingResponse(sensor_id=sensor_id, temperature=temperature)


@router.get(
    "/alarm",
    response_model=AlarmStatus,
    summary="Evaluate every sensor against the temperature threshold.",
)
def alarm_status(monitor: FireAlarm = Depends(get_monitor)) -> AlarmStatus:
    try:
        too_high = monitor.is_temperature_too_high()
    except (SensorConnectionProblemException, IncorrectDataException) as exc:
        raise _sensor_fault(exc) from exc
    return AlarmStatus(
        too_high=too_high,
        max_temperature=monitor.max_temperature,
        checked_at=datetime.now(timezone.utc),
    )


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
