# backend/verdanta/services/weather_service.py

import asyncio
from typing import Any, Dict, List, Optional

from verdanta.services.summary import (
    crop_weather_impact,
    weather_insights,
    weather_recommendations,
)
from verdanta.services.synthesizer import (
    generate_daily_weather,
    generate_historical_weather,
)

MULTI_LOCATION_DAYS = 7
IMPACT_DAYS = 14


async def get_weather_data(location: str, days: int, rng=None) -> List[Dict[str, Any]]:
    return generate_daily_weather(location, days, rng=rng)


async def get_forecast_report(location: str, days: int, include_historical: bool = False) -> Dict[str, Any]:
    forecast = await get_weather_data(location, days)
    insights = weather_insights(forecast)

    report = {
        "location": location,
        "forecast": forecast,
        "insights": insights,
        "recommendations": weather_recommendations(insights),
    }
    if include_historical:
        historical = generate_historical_weather(location, days)
        report["historical"] = historical
        report["historicalInsights"] = weather_insights(historical)
    return report


async def multi_location(locations: List[str]) -> List[Dict[str, Any]]:
    async def _one(location: str) -> Dict[str, Any]:
        weather = await get_weather_data(location, MULTI_LOCATION_DAYS)
        return {"location": location, "weather": weather, "insights": weather_insights(weather)}

    return list(await asyncio.gather(*[_one(loc) for loc in locations]))


async def agricultural_impact(locations: List[str], crop_type: Optional[str], growth_stage: Optional[str] = None) -> List[Dict[str, Any]]:
    async def _one(location: str) -> Dict[str, Any]:
        weather = await get_weather_data(location, IMPACT_DAYS)
        return {
            "location": location,
            "weather": weather,
            "impact": crop_weather_impact(weather, crop_type, growth_stage),
        }

    return list(await asyncio.gather(*[_one(loc) for loc in locations]))
