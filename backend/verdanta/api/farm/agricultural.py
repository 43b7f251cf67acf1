# backend/verdanta/api/farm/agricultural.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.agricultural import MockSystemCreate, ZoneReadingCreate
from verdanta.services import system_mock_service
from verdanta.services.query_params import MAX_FORECAST_DAYS, MAX_HOURS, parse_flag, parse_int

router = APIRouter(prefix="/agricultural", tags=["Agricultural Systems"])

DEFAULT_HOURS = 24
DEFAULT_METRIC_DAYS = 30


@router.get("/environmental")
async def zone_readings(
    hours: Optional[str] = None,
    systemId: Optional[str] = None,
    zone: Optional[str] = None,
):
    hours_value = parse_int(hours, DEFAULT_HOURS, maximum=MAX_HOURS)

    try:
        readings = system_mock_service.generate_environmental_data(hours_value, systemId, zone)
        return ok(readings, metadata={"total": len(readings), "hours": hours_value})

    except Exception as exc:
        logger.exception("Agricultural environmental API error")
        return failure("Failed to fetch environmental data", exc)


@router.post("/environmental")
async def record_zone_reading(body: ZoneReadingCreate):
    require_fields(temperature=body.temperature, moisture=body.moisture, ph=body.ph, systemId=body.system_id)

    try:
        reading = system_mock_service.record_reading(body.model_dump(by_alias=True))
        return ok(reading, message="Environmental data recorded successfully")

    except Exception as exc:
        logger.exception("Agricultural environmental POST error")
        return failure("Failed to record environmental data", exc)


@router.get("/systems")
async def list_systems(includeMetrics: Optional[str] = None, days: Optional[str] = None):
    try:
        systems = system_mock_service.list_systems()
        extra = {}
        if parse_flag(includeMetrics):
            extra["performanceMetrics"] = system_mock_service.generate_performance_metrics(
                parse_int(days, DEFAULT_METRIC_DAYS, maximum=MAX_FORECAST_DAYS)
            )
        return ok(systems, metadata={"total": len(systems)}, **extra)

    except Exception as exc:
        logger.exception("Agricultural systems API error")
        return failure("Failed to fetch agricultural systems", exc)


@router.post("/systems")
async def create_system(body: MockSystemCreate):
    require_fields(name=body.name, location=body.location)

    try:
        system = system_mock_service.create_system(body.name, body.location, body.capacity)
        return ok(system, message="System created successfully")

    except Exception as exc:
        logger.exception("Agricultural systems POST error")
        return failure("Failed to create system", exc)
