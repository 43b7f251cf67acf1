# backend/verdanta/api/farm/environmental.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.core.auth import require_user
from verdanta.core.database import get_db
from verdanta.core.envelope import InvalidParameterError, ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.crud import devices as device_crud
from verdanta.crud import environmental as env_crud
from verdanta.crud.serializers import reading_to_dict
from verdanta.schemas.farm import SensorReadingCreate
from verdanta.services.query_params import MAX_HOURS, normalize_label, parse_int

router = APIRouter(prefix="/environmental", tags=["Environmental"])

DEFAULT_HOURS = 24


@router.get("")
async def environmental_readings(
    hours: Optional[str] = None,
    sensorType: Optional[str] = None,
    location: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_user),
):
    hours_value = parse_int(hours, DEFAULT_HOURS, minimum=1, maximum=MAX_HOURS)

    try:
        readings = await env_crud.list_readings(db, hours_value, normalize_label(sensorType), location)
        return ok({
            "readings": env_crud.group_by_sensor_type(readings),
            "totalReadings": len(readings),
            "timeRange": f"{hours_value} hours",
        })

    except Exception as exc:
        logger.exception("Environmental API error")
        return failure("Failed to fetch environmental readings", exc)


@router.post("")
async def record_reading(body: SensorReadingCreate, db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    require_fields(deviceId=body.device_id, sensorType=body.sensor_type, value=body.value, unit=body.unit)
    device = await device_crud.get_device(db, body.device_id)
    if device is None:
        raise InvalidParameterError("Unknown deviceId")

    try:
        reading = await env_crud.create_reading(db, body)
        return ok(reading_to_dict(reading, device.name))

    except Exception as exc:
        logger.exception("Environmental reading creation error")
        return failure("Failed to record environmental reading", exc)
