"""Tests for aggregation and summary helpers."""
from verdanta.services.summary import (
    PEST_TABLE,
    count_by,
    crop_weather_impact,
    describe,
    risk_level,
    seasonal_pest_factor,
    summarize_alerts,
    weather_insights,
    weather_recommendations,
)


def _reading(avg, lo=None, hi=None, precip=0.2, humidity=70, wind=8):
    return {
        "temperature": {"min": lo if lo is not None else avg - 5, "avg": avg, "max": hi if hi is not None else avg + 5},
        "precipitation": precip,
        "humidity": humidity,
        "windSpeed": wind,
    }


ALERTS = [
    {"type": "environmental", "severity": "HIGH", "acknowledged": False, "resolved": False},
    {"type": "equipment", "severity": "low", "acknowledged": True, "resolved": False},
    {"type": "equipment", "severity": "critical", "acknowledged": True, "resolved": True},
    {"type": "unknown", "severity": "urgent", "acknowledged": False, "resolved": False},
]


def test_count_by_ignores_unknown_categories():
    counts = count_by(ALERTS, "severity", ["critical", "high", "medium", "low"])
    assert counts == {"critical": 1, "high": 1, "medium": 0, "low": 1}


def test_summarize_alerts_totals():
    summary = summarize_alerts(ALERTS)
    assert summary["total"] == 4
    assert sum(summary["by_severity"].values()) == 3
    assert sum(summary["by_type"].values()) == 3
    assert summary["by_type_and_severity"]["equipment"]["critical"] == 1
    assert summary["unacknowledged"] == 2
    assert summary["unresolved"] == 3


def test_summarize_alerts_empty():
    summary = summarize_alerts([])
    assert summary["total"] == 0
    assert all(v == 0 for v in summary["by_severity"].values())


def test_describe():
    assert describe([1, 2, 3]) == {"min": 1.0, "avg": 2.0, "max": 3.0}
    assert describe([]) == {"min": None, "avg": None, "max": None}


def test_weather_insights_empty():
    assert weather_insights([]) == {}
    assert weather_recommendations({}) == []


def test_weather_insights_stress_days():
    readings = [_reading(70), _reading(80, hi=90), _reading(55, lo=45)]
    insights = weather_insights(readings)
    stress = insights["stressIndicators"]
    assert stress["heatStressDays"] == 1
    assert stress["coldStressDays"] == 1
    # 0.6 inches total is below the drought threshold
    assert stress["droughtRisk"] is True
    assert insights["favorableConditions"] is False
    assert insights["growingDegreeDays"] == 20 + 30 + 5


def test_weather_recommendations_mention_heat_and_drought():
    insights = weather_insights([_reading(80, hi=90)])
    recs = weather_recommendations(insights)
    assert any("heat stress" in r for r in recs)
    assert any("Low precipitation" in r for r in recs)


def test_crop_weather_impact_falls_back_to_corn():
    impact = crop_weather_impact([_reading(75, precip=0.5)], "dragonfruit")
    assert impact["overall"] in ("positive", "neutral", "negative")
    assert isinstance(impact["factors"], list)


def test_seasonal_pest_factor_wraps_year():
    gnats = next(p for p in PEST_TABLE if p["pest_type"] == "Fungus Gnats")
    assert seasonal_pest_factor(gnats, 12) == 1.4
    assert seasonal_pest_factor(gnats, 2) == 1.4
    assert seasonal_pest_factor(gnats, 7) == 0.9


def test_risk_level_thresholds():
    assert risk_level(85) == "critical"
    assert risk_level(80) == "critical"
    assert risk_level(60) == "high"
    assert risk_level(30) == "medium"
    assert risk_level(29) == "low"
