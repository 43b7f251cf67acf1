# backend/verdanta/services/farm_health.py

from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from verdanta.services.watsonx_client import WatsonxClient

# NOTE:
# Greenhouse snapshot used for the system health assessment. Until the
# sensor gateway feeds this directly, the snapshot is a fixed reference
# farm stamped with the requested farm id.

MAINTENANCE_INTERVAL_DAYS = 30
HEALTHY_CROP_SCORE = 80


def _reading_series(values: List[float], scores: List[int], now: datetime) -> List[Dict[str, Any]]:
    return [
        {"timestamp": (now - timedelta(hours=i)).isoformat() + "Z", "value": v, "quality_score": q}
        for i, (v, q) in enumerate(zip(values, scores))
    ]


def build_farm_snapshot(farm_id: str, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.utcnow()
    return {
        "farmId": farm_id,
        "sensors": [
            {"deviceId": "temp_sensor_01", "type": "temperature", "location": "greenhouse_1",
             "readings": _reading_series([72, 71, 73], [95, 92, 94], now)},
            {"deviceId": "moisture_sensor_01", "type": "moisture", "location": "greenhouse_1",
             "readings": _reading_series([65, 67, 64], [88, 90, 89], now)},
            {"deviceId": "ph_sensor_01", "type": "ph", "location": "greenhouse_1",
             "readings": _reading_series([6.8, 6.7, 6.9], [94, 96, 93], now)},
            {"deviceId": "humidity_sensor_01", "type": "humidity", "location": "greenhouse_1",
             "readings": _reading_series([75, 73, 76], [91, 93, 90], now)},
        ],
        "environmental": {"temperature": 72, "moisture": 65, "ph": 6.8, "humidity": 75, "co2": 400, "lightLevel": 85},
        "equipment": [
            {"id": "pump_01", "type": "irrigation_pump", "status": "online",
             "lastMaintenance": (now - timedelta(days=12)).date().isoformat(),
             "performanceMetrics": {"efficiency": 92, "runtime_hours": 1250}},
            {"id": "fan_01", "type": "ventilation_fan", "status": "online",
             "lastMaintenance": (now - timedelta(days=7)).date().isoformat(),
             "performanceMetrics": {"efficiency": 88, "runtime_hours": 2100}},
            {"id": "heater_01", "type": "heating_system", "status": "maintenance",
             "lastMaintenance": (now - timedelta(days=48)).date().isoformat(),
             "performanceMetrics": {"efficiency": 75, "runtime_hours": 850}},
            {"id": "light_01", "type": "led_grow_lights", "status": "online",
             "lastMaintenance": (now - timedelta(days=2)).date().isoformat(),
             "performanceMetrics": {"efficiency": 95, "runtime_hours": 3200}},
        ],
        "crops": [
            {"type": "lettuce", "stage": "mature", "health": 85,
             "expectedHarvest": (now + timedelta(days=5)).date().isoformat()},
            {"type": "tomatoes", "stage": "flowering", "health": 92,
             "expectedHarvest": (now + timedelta(days=22)).date().isoformat()},
            {"type": "herbs", "stage": "growing", "health": 88,
             "expectedHarvest": (now + timedelta(days=10)).date().isoformat()},
            {"type": "peppers", "stage": "fruiting", "health": 90,
             "expectedHarvest": (now + timedelta(days=15)).date().isoformat()},
        ],
        "alerts": [
            {"id": "alert_01", "type": "temperature_high", "severity": "medium",
             "message": "Temperature approaching upper threshold in greenhouse_1", "resolved": False},
            {"id": "alert_02", "type": "equipment_maintenance", "severity": "high",
             "message": "Heating system requires scheduled maintenance", "resolved": False},
            {"id": "alert_03", "type": "moisture_low", "severity": "low",
             "message": "Soil moisture slightly below optimal range", "resolved": True},
        ],
    }


# ---------------------------------------------------
# Component assessments
# ---------------------------------------------------
def environmental_status(env: Dict[str, Any]) -> str:
    t, m, ph = env["temperature"], env["moisture"], env["ph"]
    if 65 <= t <= 75 and 60 <= m <= 70 and 6.0 <= ph <= 7.0:
        return "optimal"
    if 60 <= t <= 80 and 50 <= m <= 80 and 5.5 <= ph <= 7.5:
        return "good"
    return "needs_attention"


def equipment_status(equipment: List[Dict[str, Any]]) -> str:
    if not equipment:
        return "no_data"
    online = sum(1 for e in equipment if e["status"] == "online")
    if online == len(equipment):
        return "excellent"
    if online / len(equipment) >= 0.8:
        return "good"
    return "needs_attention"


def crop_status(crops: List[Dict[str, Any]]) -> str:
    if not crops:
        return "no_data"
    avg = sum(c["health"] for c in crops) / len(crops)
    if avg >= 90:
        return "excellent"
    if avg >= 75:
        return "good"
    if avg >= 60:
        return "fair"
    return "poor"


def alert_status(alerts: List[Dict[str, Any]]) -> Dict[str, Any]:
    active = [a for a in alerts if not a.get("resolved")]
    critical = sum(1 for a in active if a["severity"] == "critical")
    high = sum(1 for a in active if a["severity"] == "high")
    if critical:
        status = "critical"
    elif high:
        status = "warning"
    else:
        status = "normal"
    return {"total_active": len(active), "critical": critical, "high": high, "status": status}


def _pct(part: int, whole: int) -> int:
    return round(part / whole * 100) if whole else 0


def _maintenance_overdue(equipment: Dict[str, Any], now: datetime) -> bool:
    last = datetime.fromisoformat(equipment["lastMaintenance"])
    return last < now - timedelta(days=MAINTENANCE_INTERVAL_DAYS)


# ---------------------------------------------------
# Report
# ---------------------------------------------------
async def system_health_report(snapshot: Dict[str, Any], client: WatsonxClient, now: Optional[datetime] = None) -> Dict[str, Any]:
    now = now or datetime.utcnow()
    env = snapshot["environmental"]
    equipment = snapshot["equipment"]
    crops = snapshot["crops"]
    alerts = snapshot["alerts"]
    sensors = snapshot["sensors"]

    health = {
        "overall_health": "good",
        "environmental_status": environmental_status(env),
        "equipment_status": equipment_status(equipment),
        "crop_status": crop_status(crops),
        "alert_summary": alert_status(alerts),
    }

    ai_analysis = await client.analyze_environment(env)
    if ai_analysis is not None:
        health["ai_analysis"] = ai_analysis

    online = [e for e in equipment if e["status"] == "online"]
    active_alerts = [a for a in alerts if not a.get("resolved")]

    health["system_metrics"] = {
        "total_sensors": len(sensors),
        "active_sensors": sum(1 for s in sensors if s["readings"]),
        "total_equipment": len(equipment),
        "online_equipment": len(online),
        "total_crops": len(crops),
        "healthy_crops": sum(1 for c in crops if c["health"] >= HEALTHY_CROP_SCORE),
        "active_alerts": len(active_alerts),
        "critical_alerts": sum(1 for a in active_alerts if a["severity"] in ("critical", "high")),
    }

    stable = [
        65 <= env["temperature"] <= 75,
        60 <= env["moisture"] <= 70,
        6.0 <= env["ph"] <= 7.0,
        50 <= env["humidity"] <= 80,
    ]
    health["performance_summary"] = {
        "overall_efficiency": round(sum(e["performanceMetrics"]["efficiency"] for e in online) / len(online)) if online else 0,
        "environmental_stability": _pct(sum(stable), len(stable)),
        "equipment_reliability": _pct(len(online), len(equipment)),
        "crop_health_average": round(sum(c["health"] for c in crops) / len(crops)) if crops else 0,
    }

    priorities = []
    if health["alert_summary"]["critical"]:
        priorities.append("Address critical system alerts immediately")
    if any(e["status"] == "maintenance" for e in equipment):
        priorities.append("Schedule maintenance for offline equipment")
    if health["environmental_status"] == "needs_attention":
        priorities.append("Optimize environmental control settings")
    if any(c["health"] < HEALTHY_CROP_SCORE for c in crops):
        priorities.append("Monitor and improve crop health conditions")
    health["recommendations_priority"] = priorities

    next_actions = []
    if active_alerts:
        next_actions.append("Review and resolve active system alerts")
    if any(_maintenance_overdue(e, now) for e in equipment):
        next_actions.append("Schedule preventive maintenance for aging equipment")
    harvest_horizon = (now + timedelta(days=7)).date().isoformat()
    if any(c["expectedHarvest"] <= harvest_horizon for c in crops):
        next_actions.append("Prepare for upcoming harvest activities")
    next_actions.append("Run daily system optimization routines")
    next_actions.append("Update sensor calibration schedules")
    health["next_actions"] = next_actions

    insights = [
        f"Overall system health: {health['overall_health']}",
        f"Environmental status: {health['environmental_status']}",
        f"Equipment status: {health['equipment_status']}",
        f"Alert status: {health['alert_summary']['status']}",
    ]

    recommendations = []
    workflows = []
    if health["environmental_status"] == "needs_attention":
        recommendations.append("Review and adjust environmental control settings")
        workflows.append("Environmental Control Automation")
    if health["equipment_status"] == "needs_attention":
        recommendations.append("Schedule maintenance for offline equipment")
        workflows.append("Predictive Maintenance System")
    if health["alert_summary"]["critical"]:
        recommendations.append("Address critical alerts immediately")
        workflows.append("Intelligent Alert Processing")

    readings = [r for s in sensors for r in s["readings"]]
    data_quality = round(sum(r["quality_score"] for r in readings) / len(readings)) if readings else 0

    return {
        "data": health,
        "insights": insights,
        "recommendations": recommendations,
        "workflows": workflows,
        "confidence": 0.9,
        "metadata": {
            "farmId": snapshot["farmId"],
            "assessment_time": now.isoformat() + "Z",
            "data_quality": data_quality,
            "system_uptime": _pct(len(online), len(equipment)),
        },
    }
