"""Tests for the mock data synthesizer."""
import random
from datetime import date, timedelta

import pytest

from verdanta.services.synthesizer import (
    generate_daily_weather,
    generate_historical_weather,
    generate_weather_forecast,
    generate_yield_series,
)

TODAY = date(2024, 7, 15)


@pytest.mark.parametrize("seed", range(5))
def test_daily_weather_temperature_ordering(seed):
    readings = generate_daily_weather("Peoria", 30, start=TODAY, rng=random.Random(seed))
    assert len(readings) == 30
    for r in readings:
        t = r["temperature"]
        assert t["min"] <= t["avg"] <= t["max"]


def test_daily_weather_dates_are_consecutive(rng):
    readings = generate_daily_weather("Peoria", 3, start=TODAY, rng=rng)
    assert [r["date"] for r in readings] == ["2024-07-15", "2024-07-16", "2024-07-17"]
    assert all(r["source"] == "NOAA" and r["location"] == "Peoria" for r in readings)


def test_daily_weather_zero_days(rng):
    assert generate_daily_weather("Peoria", 0, rng=rng) == []
    assert generate_daily_weather("Peoria", -4, rng=rng) == []


def test_historical_weather_ends_before_today(rng):
    readings = generate_historical_weather("Peoria", 5, end=TODAY, rng=rng)
    assert len(readings) == 5
    assert readings[0]["date"] == (TODAY - timedelta(days=5)).isoformat()
    assert readings[-1]["date"] == (TODAY - timedelta(days=1)).isoformat()
    assert all(r["source"] == "NOAA_HISTORICAL" for r in readings)


def test_weather_forecast_shape(rng):
    forecast = generate_weather_forecast(7, today=TODAY, rng=rng)
    assert len(forecast) == 7
    for day in forecast:
        assert 30 <= day["humidity"] <= 90
        assert 0 <= day["rainfall"] <= 0.5
        assert 85 <= day["confidence"] <= 95


def test_yield_series_actuals_only_for_first_days(rng):
    series = generate_yield_series(7, base_yield=125.5, confidence=0.82, today=TODAY, rng=rng)
    assert len(series) == 7
    assert all(s["actual"] is not None for s in series[:3])
    assert all(s["actual"] is None for s in series[3:])
    for s in series:
        assert s["confidence_lower"] <= s["predicted"] <= s["confidence_upper"]


def test_yield_series_single_day(rng):
    assert len(generate_yield_series(1, today=TODAY, rng=rng)) == 1
