# backend/verdanta/services/system_mock_service.py

from datetime import datetime, timedelta
from typing import Dict, Any, List, Optional
import copy
import random
import uuid

# NOTE:
# Reference vermiculture systems for the agricultural dashboard. Zone
# readings are synthesized around each zone's baseline (temperature,
# moisture, pH) so charts have plausible hourly data. POSTed systems and
# readings are echoed back with ids and are not stored.

MOCK_SYSTEMS: List[Dict[str, Any]] = [
    {
        "id": "sys_001",
        "name": "North Greenhouse Complex",
        "location": "Zone A - Building 1",
        "capacity": 5000,
        "currentLoad": 4200,
        "status": "active",
        "lastMaintenance": "2024-09-15",
        "nextMaintenance": "2024-10-15",
        "yieldToDate": 1250.5,
        "efficiency": 92.3,
        "zones": [
            {
                "id": "zone_001_a", "name": "Zone A1", "systemId": "sys_001",
                "temperature": 72.5, "moisture": 68.2, "ph": 6.4, "wormPopulation": 15000,
                "feedingSchedule": {
                    "id": "feed_001", "zoneId": "zone_001_a", "frequency": "weekly", "amount": 50,
                    "feedType": "Organic Compost Mix", "lastFed": "2024-09-20",
                    "nextFeeding": "2024-09-27", "automated": True,
                },
                "lastHarvest": "2024-09-01",
                "status": "optimal",
            },
            {
                "id": "zone_001_b", "name": "Zone A2", "systemId": "sys_001",
                "temperature": 74.1, "moisture": 65.8, "ph": 6.7, "wormPopulation": 12500,
                "feedingSchedule": {
                    "id": "feed_002", "zoneId": "zone_001_b", "frequency": "weekly", "amount": 45,
                    "feedType": "Vegetable Scraps", "lastFed": "2024-09-21",
                    "nextFeeding": "2024-09-28", "automated": True,
                },
                "lastHarvest": "2024-08-28",
                "status": "optimal",
            },
        ],
    },
    {
        "id": "sys_002",
        "name": "South Production Unit",
        "location": "Zone B - Building 2",
        "capacity": 3500,
        "currentLoad": 3100,
        "status": "active",
        "lastMaintenance": "2024-09-10",
        "nextMaintenance": "2024-10-10",
        "yieldToDate": 892.3,
        "efficiency": 88.7,
        "zones": [
            {
                "id": "zone_002_a", "name": "Zone B1", "systemId": "sys_002",
                "temperature": 71.8, "moisture": 72.5, "ph": 6.2, "wormPopulation": 11000,
                "feedingSchedule": {
                    "id": "feed_003", "zoneId": "zone_002_a", "frequency": "biweekly", "amount": 60,
                    "feedType": "Premium Organic Mix", "lastFed": "2024-09-18",
                    "nextFeeding": "2024-10-02", "automated": True,
                },
                "lastHarvest": "2024-08-30",
                "status": "attention",
            },
        ],
    },
    {
        "id": "sys_003",
        "name": "Research & Development",
        "location": "Zone C - Lab Building",
        "capacity": 1000,
        "currentLoad": 750,
        "status": "maintenance",
        "lastMaintenance": "2024-09-22",
        "nextMaintenance": "2024-10-22",
        "yieldToDate": 156.8,
        "efficiency": 75.2,
        "zones": [
            {
                "id": "zone_003_a", "name": "R&D Zone", "systemId": "sys_003",
                "temperature": 69.5, "moisture": 58.3, "ph": 6.8, "wormPopulation": 5500,
                "feedingSchedule": {
                    "id": "feed_004", "zoneId": "zone_003_a", "frequency": "daily", "amount": 10,
                    "feedType": "Experimental Feed A", "lastFed": "2024-09-22",
                    "nextFeeding": "2024-09-23", "automated": False,
                },
                "lastHarvest": "2024-09-15",
                "status": "critical",
            },
        ],
    },
]


def _now() -> datetime:
    return datetime.utcnow()


def generate_environmental_data(
    hours: int = 24,
    system_id: Optional[str] = None,
    zone: Optional[str] = None,
    now: Optional[datetime] = None,
    rng=None,
) -> List[Dict[str, Any]]:
    """hours + 1 hourly readings per zone, newest first."""
    rng = rng or random
    now = now or _now()
    hours = max(0, hours)

    data = []
    for system in MOCK_SYSTEMS:
        if system_id and system["id"] != system_id:
            continue
        for z in system["zones"]:
            if zone and z["name"] != zone:
                continue
            for i in range(hours, -1, -1):
                ts = now - timedelta(hours=i)
                data.append({
                    "id": f"env_{system['id']}_{z['id']}_{i}",
                    "timestamp": ts.isoformat() + "Z",
                    "temperature": round(z["temperature"] + (rng.random() - 0.5) * 4, 2),
                    "moisture": round(z["moisture"] + (rng.random() - 0.5) * 10, 2),
                    "ph": round(z["ph"] + (rng.random() - 0.5) * 0.6, 2),
                    "systemId": system["id"],
                    "zone": z["name"],
                    "sensorId": f"sensor_{z['id']}_{rng.randint(1, 3)}",
                })

    data.sort(key=lambda d: d["timestamp"], reverse=True)
    return data


def generate_performance_metrics(days: int = 30, now: Optional[datetime] = None, rng=None) -> List[Dict[str, Any]]:
    rng = rng or random
    now = now or _now()

    metrics = []
    for system in MOCK_SYSTEMS:
        for i in range(max(0, days), -1, -1):
            metrics.append({
                "systemId": system["id"],
                "date": (now - timedelta(days=i)).date().isoformat(),
                "yieldEfficiency": round(system["efficiency"] + (rng.random() - 0.5) * 10, 2),
                "energyUsage": round(150 + rng.random() * 50, 2),
                "waterUsage": round(200 + rng.random() * 100, 2),
                "uptime": round(95 + rng.random() * 5, 2),
                "qualityScore": round(7 + rng.random() * 2, 2),
                "costPerPound": round(2.5 + rng.random(), 2),
                "environmentalImpact": round(0.8 + rng.random() * 0.4, 3),
            })
    return metrics


def list_systems(rng=None) -> List[Dict[str, Any]]:
    """Each system with its newest zone reading and today's performance."""
    latest_env = generate_environmental_data(0, rng=rng)
    today_perf = generate_performance_metrics(0, rng=rng)

    systems = []
    for system in MOCK_SYSTEMS:
        rec = copy.deepcopy(system)
        rec["currentEnvironmentalData"] = next((e for e in latest_env if e["systemId"] == system["id"]), None)
        rec["recentPerformance"] = next((p for p in today_perf if p["systemId"] == system["id"]), None)
        systems.append(rec)
    return systems


def create_system(name: str, location: str, capacity: Optional[float]) -> Dict[str, Any]:
    now = _now()
    return {
        "id": f"sys_{uuid.uuid4().hex[:12]}",
        "name": name,
        "location": location,
        "capacity": capacity,
        "currentLoad": 0,
        "status": "active",
        "lastMaintenance": now.date().isoformat(),
        "nextMaintenance": (now + timedelta(days=30)).date().isoformat(),
        "yieldToDate": 0,
        "efficiency": 100,
        "zones": [],
    }


def record_reading(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": f"env_{uuid.uuid4().hex[:12]}",
        "timestamp": _now().isoformat() + "Z",
        "temperature": payload.get("temperature"),
        "moisture": payload.get("moisture"),
        "ph": payload.get("ph"),
        "systemId": payload.get("systemId"),
        "zone": payload.get("zone"),
        "sensorId": payload.get("sensorId"),
    }
