# backend/verdanta/services/summary.py
"""
Aggregation helpers shared by the routers:
- alert summaries (severity / type / state counters)
- generic count_by and min/avg/max
- agricultural weather insights and recommendations
- crop requirement lookups and crop impact
- the pest reference table used by pest-risk assessment
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

SEVERITIES = ["critical", "high", "medium", "low"]
ALERT_TYPES = ["environmental", "equipment", "crop", "market", "weather"]

SEVERITY_RANK = {"critical": 4, "high": 3, "medium": 2, "low": 1}

GDD_BASE_TEMP = 50.0
HEAT_STRESS_TEMP = 85.0
COLD_STRESS_TEMP = 50.0
DROUGHT_PRECIPITATION = 1.0
FLOOD_PRECIPITATION = 1.5
HIGH_WIND_SPEED = 25.0


# ---------------------------------------------------
# Generic counters
# ---------------------------------------------------
def count_by(records: Iterable[Mapping[str, Any]], field: str, categories: Sequence[str]) -> Dict[str, int]:
    """Counter pre-seeded with every category at 0; values outside `categories` are ignored."""
    counts = {c: 0 for c in categories}
    for record in records:
        value = record.get(field)
        if isinstance(value, str):
            value = value.lower()
        if value in counts:
            counts[value] += 1
    return counts


def describe(values: Iterable[float], digits: int = 2) -> Dict[str, Optional[float]]:
    values = [float(v) for v in values if v is not None]
    if not values:
        return {"min": None, "avg": None, "max": None}
    return {
        "min": round(min(values), digits),
        "avg": round(sum(values) / len(values), digits),
        "max": round(max(values), digits),
    }


# ---------------------------------------------------
# Alerts
# ---------------------------------------------------
def summarize_alerts(alerts: List[Mapping[str, Any]]) -> Dict[str, Any]:
    by_type_and_severity = {t: {s: 0 for s in SEVERITIES} for t in ALERT_TYPES}
    for alert in alerts:
        alert_type = str(alert.get("type", "")).lower()
        severity = str(alert.get("severity", "")).lower()
        if alert_type in by_type_and_severity and severity in SEVERITY_RANK:
            by_type_and_severity[alert_type][severity] += 1

    return {
        "total": len(alerts),
        "by_severity": count_by(alerts, "severity", SEVERITIES),
        "by_type": count_by(alerts, "type", ALERT_TYPES),
        "by_type_and_severity": by_type_and_severity,
        "unacknowledged": sum(1 for a in alerts if not a.get("acknowledged")),
        "unresolved": sum(1 for a in alerts if not a.get("resolved")),
    }


# ---------------------------------------------------
# Weather insights
# ---------------------------------------------------
def weather_insights(readings: List[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Agricultural view of a daily weather series.
    Empty input yields an empty dict.
    """
    if not readings:
        return {}

    n = len(readings)
    avg_temp = sum(r["temperature"]["avg"] for r in readings) / n
    total_precip = sum(r["precipitation"] for r in readings)
    avg_humidity = sum(r["humidity"] for r in readings) / n
    max_wind = max(r["windSpeed"] for r in readings)

    gdd = sum(max(0.0, r["temperature"]["avg"] - GDD_BASE_TEMP) for r in readings)

    heat_days = sum(1 for r in readings if r["temperature"]["max"] > HEAT_STRESS_TEMP)
    cold_days = sum(1 for r in readings if r["temperature"]["min"] < COLD_STRESS_TEMP)
    drought = total_precip < DROUGHT_PRECIPITATION
    flood = any(r["precipitation"] > FLOOD_PRECIPITATION for r in readings)

    return {
        "averageTemperature": round(avg_temp, 1),
        "totalPrecipitation": round(total_precip, 2),
        "averageHumidity": round(avg_humidity),
        "maxWindSpeed": round(max_wind, 1),
        "growingDegreeDays": round(gdd),
        "stressIndicators": {
            "heatStressDays": heat_days,
            "coldStressDays": cold_days,
            "droughtRisk": drought,
            "floodRisk": flood,
        },
        "favorableConditions": heat_days == 0 and cold_days == 0 and not drought and not flood,
    }


def weather_recommendations(insights: Mapping[str, Any]) -> List[str]:
    recs = []
    stress = insights.get("stressIndicators") or {}

    if stress.get("heatStressDays", 0) > 0:
        recs.append(
            f"{stress['heatStressDays']} days of heat stress expected - ensure adequate irrigation and shade"
        )
    if stress.get("coldStressDays", 0) > 0:
        recs.append(
            f"{stress['coldStressDays']} days of cold stress expected - consider protective measures"
        )
    if stress.get("droughtRisk"):
        recs.append("Low precipitation forecasted - monitor soil moisture and increase irrigation")
    if stress.get("floodRisk"):
        recs.append("Heavy precipitation expected - ensure proper drainage and flood protection")
    if insights.get("maxWindSpeed", 0) > HIGH_WIND_SPEED:
        recs.append("High winds forecasted - secure equipment and protect sensitive crops")
    if insights.get("growingDegreeDays", 0) > 0:
        recs.append(
            f"{insights['growingDegreeDays']} growing degree days accumulated - good conditions for crop development"
        )
    if insights.get("favorableConditions"):
        recs.append("Favorable weather conditions expected - optimal time for field operations")

    return recs


# ---------------------------------------------------
# Crop requirements
# ---------------------------------------------------
CROP_REQUIREMENTS = {
    "corn": {"minTemp": 60, "maxTemp": 85, "minPrecipitation": 1.0, "maxPrecipitation": 3.0},
    "soybeans": {"minTemp": 65, "maxTemp": 80, "minPrecipitation": 0.8, "maxPrecipitation": 2.5},
    "wheat": {"minTemp": 55, "maxTemp": 75, "minPrecipitation": 0.6, "maxPrecipitation": 2.0},
}
DEFAULT_CROP = "corn"


def crop_requirements(crop_type: Optional[str]) -> Dict[str, float]:
    return CROP_REQUIREMENTS.get((crop_type or "").lower(), CROP_REQUIREMENTS[DEFAULT_CROP])


def crop_weather_impact(readings: List[Mapping[str, Any]], crop_type: Optional[str], growth_stage: Optional[str] = None) -> Dict[str, Any]:
    # growth_stage is accepted for the API shape; thresholds are per crop only
    insights = weather_insights(readings)
    req = crop_requirements(crop_type)

    impact = {"overall": "neutral", "factors": [], "recommendations": []}

    avg_temp = insights.get("averageTemperature")
    if avg_temp is not None:
        if avg_temp < req["minTemp"]:
            impact["overall"] = "negative"
            impact["factors"].append("Below optimal temperature range")
            impact["recommendations"].append("Consider protective measures or heating")
        elif avg_temp > req["maxTemp"]:
            impact["overall"] = "negative"
            impact["factors"].append("Above optimal temperature range")
            impact["recommendations"].append("Increase cooling and irrigation")
        else:
            impact["factors"].append("Temperature within optimal range")

    precip = insights.get("totalPrecipitation")
    if precip is not None:
        if precip < req["minPrecipitation"]:
            impact["overall"] = "negative"
            impact["factors"].append("Insufficient precipitation")
            impact["recommendations"].append("Increase irrigation frequency")
        elif precip > req["maxPrecipitation"]:
            impact["overall"] = "negative"
            impact["factors"].append("Excessive precipitation")
            impact["recommendations"].append("Improve drainage and reduce irrigation")
        else:
            impact["factors"].append("Precipitation within optimal range")

    return impact


# ---------------------------------------------------
# Pest reference table
# ---------------------------------------------------
PEST_TABLE = [
    {
        "pest_type": "Aphids",
        "base_risk": 0.3,
        # (first month, last month, in-season factor, off-season factor)
        "season": (4, 9, 1.3, 0.7),
        "affected_crops": ["lettuce", "tomatoes", "peppers", "herbs"],
        "prevention_actions": [
            "Introduce beneficial insects like ladybugs",
            "Use reflective mulch to deter aphids",
            "Apply neem oil spray as preventive measure",
            "Monitor plants daily for early detection",
        ],
    },
    {
        "pest_type": "Spider Mites",
        "base_risk": 0.25,
        "season": (6, 8, 1.5, 0.8),
        "affected_crops": ["tomatoes", "peppers", "cucumbers", "beans"],
        "prevention_actions": [
            "Maintain adequate humidity levels (>50%)",
            "Ensure proper air circulation",
            "Use predatory mites as biological control",
            "Avoid over-fertilizing with nitrogen",
        ],
    },
    {
        "pest_type": "Whiteflies",
        "base_risk": 0.2,
        "season": (5, 10, 1.2, 0.6),
        "affected_crops": ["tomatoes", "peppers", "eggplant", "herbs"],
        "prevention_actions": [
            "Install yellow sticky traps",
            "Use reflective mulch",
            "Introduce parasitic wasps",
            "Remove infected plant material promptly",
        ],
    },
    {
        "pest_type": "Thrips",
        "base_risk": 0.15,
        "season": (3, 10, 1.1, 0.7),
        "affected_crops": ["lettuce", "onions", "peppers", "flowers"],
        "prevention_actions": [
            "Use blue sticky traps for monitoring",
            "Maintain clean growing environment",
            "Apply beneficial nematodes to soil",
            "Use row covers during vulnerable periods",
        ],
    },
    {
        "pest_type": "Fungus Gnats",
        "base_risk": 0.35,
        # cool months wrap around the new year
        "season": (10, 3, 1.4, 0.9),
        "affected_crops": ["all_seedlings", "herbs", "leafy_greens"],
        "prevention_actions": [
            "Allow soil surface to dry between waterings",
            "Use yellow sticky traps near soil level",
            "Apply beneficial bacteria (BTI) to growing medium",
            "Improve drainage and air circulation",
        ],
    },
]


def seasonal_pest_factor(pest: Mapping[str, Any], month: int) -> float:
    first, last, active, dormant = pest["season"]
    if first <= last:
        in_season = first <= month <= last
    else:
        in_season = month >= first or month <= last
    return active if in_season else dormant


def risk_level(probability: float) -> str:
    if probability >= 80:
        return "critical"
    if probability >= 60:
        return "high"
    if probability >= 30:
        return "medium"
    return "low"
