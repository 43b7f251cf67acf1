# backend/verdanta/api/government_data/weather.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import InvalidParameterError, ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.government_data import WeatherAnalysisRequest
from verdanta.services import weather_service
from verdanta.services.query_params import (
    DEFAULT_DAYS,
    DEFAULT_LOCATION,
    MAX_FORECAST_DAYS,
    parse_flag,
    parse_int,
)

router = APIRouter(prefix="/government-data/weather", tags=["Government Data"])

SOURCE = "VerdantaIQ Weather Service"
ANALYSIS_TYPES = ("multi-location", "agricultural-impact")


@router.get("")
async def weather_forecast(
    location: Optional[str] = None,
    days: Optional[str] = None,
    includeHistorical: Optional[str] = None,
):
    location = location or DEFAULT_LOCATION
    day_count = parse_int(days, DEFAULT_DAYS, maximum=MAX_FORECAST_DAYS)

    try:
        report = await weather_service.get_forecast_report(
            location,
            day_count,
            include_historical=parse_flag(includeHistorical),
        )
        return ok(report, source=SOURCE, location=location)

    except Exception as exc:
        logger.exception("Weather API error")
        return failure("Failed to fetch weather data", exc)


@router.post("")
async def weather_analysis(body: WeatherAnalysisRequest):
    require_fields(locations=body.locations)
    if body.analysis_type not in ANALYSIS_TYPES:
        raise InvalidParameterError('Invalid analysis_type. Use "multi-location" or "agricultural-impact"')

    try:
        if body.analysis_type == "multi-location":
            data = await weather_service.multi_location(body.locations)
        else:
            data = await weather_service.agricultural_impact(body.locations, body.crop_type, body.growth_stage)

        return ok(data, analysis_type=body.analysis_type, source=SOURCE)

    except Exception as exc:
        logger.exception("Weather POST API error")
        return failure("Failed to process weather analysis request", exc)
