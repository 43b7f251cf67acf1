# backend/verdanta/services/synthesizer.py
"""
Formula-driven stand-ins for the forecasting models.

Every series is: base constant + seasonal sine term + uniform noise, one
entry per requested day. The random source and reference date are
injectable so tests can pin them; by default the module-level `random`
and today's UTC date are used, so output differs between calls.
"""

import math
import random
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

WEATHER_CONDITIONS = ["Sunny", "Partly Cloudy", "Cloudy", "Light Rain"]

# Peoria-area baselines
FORECAST_BASE_TEMP = 68.0
FORECAST_BASE_HUMIDITY = 65.0
FORECAST_RAIN_CHANCE = 0.3

YIELD_GROWTH_OVER_WINDOW = 0.3
YIELD_OBSERVED_DAYS = 3


def _today() -> date:
    return datetime.utcnow().date()


# ---------------------------------------------------
# Daily weather readings (government weather feed)
# ---------------------------------------------------
def generate_daily_weather(
    location: str,
    days: int,
    start: Optional[date] = None,
    rng=None,
    source: str = "NOAA",
) -> List[Dict[str, Any]]:
    """
    EnvironmentalReading per day starting at `start`.
    Temperatures always satisfy min <= avg <= max.
    """
    rng = rng or random
    start = start or _today()

    readings = []
    for i in range(max(0, days)):
        t_min = 65 + rng.random() * 10
        t_max = max(t_min, 75 + rng.random() * 15)
        t_avg = t_min + (t_max - t_min) * rng.uniform(0.35, 0.65)

        readings.append({
            "location": location,
            "date": (start + timedelta(days=i)).isoformat(),
            "temperature": {
                "min": round(t_min, 1),
                "max": round(t_max, 1),
                "avg": round(t_avg, 1),
            },
            "precipitation": round(rng.random() * 0.5, 2),
            "humidity": round(60 + rng.random() * 30, 1),
            "windSpeed": round(5 + rng.random() * 10, 1),
            "conditions": rng.choice(WEATHER_CONDITIONS),
            "source": source,
        })
    return readings


def generate_historical_weather(location: str, days: int, end: Optional[date] = None, rng=None) -> List[Dict[str, Any]]:
    """The `days` days immediately before `end`, oldest first."""
    end = end or _today()
    return generate_daily_weather(
        location,
        days,
        start=end - timedelta(days=max(0, days)),
        rng=rng,
        source="NOAA_HISTORICAL",
    )


# ---------------------------------------------------
# Forecast series (predictions)
# ---------------------------------------------------
def generate_weather_forecast(days: int, today: Optional[date] = None, rng=None) -> List[Dict[str, Any]]:
    rng = rng or random
    today = today or _today()

    forecast = []
    for i in range(max(0, days)):
        day = today + timedelta(days=i)

        seasonal = math.sin(day.month * math.pi / 6) * 15
        weekly = math.sin(i * math.pi / 7) * 5
        noise = (rng.random() - 0.5) * 8
        temperature = FORECAST_BASE_TEMP + seasonal + weekly + noise

        humidity = max(30.0, min(90.0, FORECAST_BASE_HUMIDITY + (rng.random() - 0.5) * 20))

        rainfall = 0.0
        if rng.random() < FORECAST_RAIN_CHANCE:
            rainfall = rng.random() * 0.5

        forecast.append({
            "date": day.isoformat(),
            "temperature": round(temperature, 1),
            "humidity": round(humidity),
            "rainfall": round(rainfall, 2),
            "confidence": round(85 + rng.random() * 10, 1),
        })
    return forecast


def generate_yield_series(
    days: int,
    base_yield: float = 100.0,
    confidence: float = 0.8,
    today: Optional[date] = None,
    rng=None,
) -> List[Dict[str, Any]]:
    """
    Projected yield growing ~30% over the window with +/-5% noise.
    The confidence band narrows as model confidence rises.
    """
    rng = rng or random
    today = today or _today()

    series = []
    for i in range(max(0, days)):
        growth = 1 + (i / days) * YIELD_GROWTH_OVER_WINDOW
        variance = (rng.random() - 0.5) * 0.1

        predicted = base_yield * growth * (1 + variance)
        band = predicted * (1 - confidence) * 0.5

        actual = None
        if i < YIELD_OBSERVED_DAYS:
            actual = round(predicted * 0.95 + rng.random() * predicted * 0.1, 2)

        series.append({
            "date": (today + timedelta(days=i)).isoformat(),
            "predicted": round(predicted, 2),
            "confidence_upper": round(predicted + band, 2),
            "confidence_lower": round(predicted - band, 2),
            "actual": actual,
        })
    return series
