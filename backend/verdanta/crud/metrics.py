# backend/verdanta/crud/metrics.py

import random
from datetime import datetime, timedelta
from typing import Any, Dict

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from verdanta.crud.serializers import maintenance_to_dict, reading_to_dict
from verdanta.models import (
    Alert,
    Device,
    MaintenanceLog,
    PlantSystem,
    SensorReading,
    VermicultureProduction,
    VermicultureSystem,
)

RECENT_READINGS = 100
UPCOMING_MAINTENANCE = 10


async def _count(db: AsyncSession, model, *where) -> int:
    stmt = select(func.count()).select_from(model)
    for clause in where:
        stmt = stmt.where(clause)
    return (await db.scalar(stmt)) or 0


def _pct(part: int, whole: int, empty: int = 100) -> int:
    return round(part / whole * 100) if whole else empty


# ------------------------------------------------
# Dashboard
# ------------------------------------------------
async def dashboard_summary(db: AsyncSession) -> Dict[str, Any]:
    # one AsyncSession cannot run statements concurrently, so counts run in sequence
    now = datetime.utcnow()

    total_devices = await _count(db, Device)
    active_devices = await _count(db, Device, Device.status == "active")
    open_alerts = await _count(db, Alert, Alert.status == "open")
    critical_alerts = await _count(db, Alert, Alert.status == "open", Alert.severity == "critical")
    vermi_systems = await _count(db, VermicultureSystem)
    plant_systems = await _count(db, PlantSystem)

    production_yield = await db.scalar(
        select(func.coalesce(func.sum(VermicultureProduction.actual_yield), 0))
        .where(VermicultureProduction.actual_harvest >= now - timedelta(days=30))
    )

    readings = (await db.scalars(
        select(SensorReading)
        .options(selectinload(SensorReading.device))
        .where(SensorReading.timestamp >= now - timedelta(hours=24))
        .order_by(SensorReading.timestamp.desc())
        .limit(RECENT_READINGS)
    )).all()

    return {
        "metrics": {
            "totalDevices": total_devices,
            "activeDevices": active_devices,
            "totalAlerts": open_alerts,
            "criticalAlerts": critical_alerts,
            "vermicultureSystems": vermi_systems,
            "plantSystems": plant_systems,
            "productionYield": production_yield or 0,
            "systemHealth": _pct(active_devices, total_devices),
        },
        "recentReadings": [
            reading_to_dict(r, r.device.name if r.device else None) for r in readings
        ],
    }


# ------------------------------------------------
# Performance
# ------------------------------------------------
async def performance_summary(db: AsyncSession, rng=None) -> Dict[str, Any]:
    rng = rng or random
    now = datetime.utcnow()

    total_devices = await _count(db, Device)
    active_devices = await _count(db, Device, Device.status == "active")
    recent_alerts = await _count(db, Alert, Alert.created_at >= now - timedelta(days=7))

    logs = (await db.scalars(
        select(MaintenanceLog)
        .options(selectinload(MaintenanceLog.system))
        .where(MaintenanceLog.scheduled_date >= now - timedelta(days=30))
        .order_by(MaintenanceLog.scheduled_date.desc())
    )).all()

    completed = sum(1 for log in logs if log.status == "completed")

    maintenance = []
    for log in logs:
        row = maintenance_to_dict(log)
        row["system"] = {"name": log.system.name, "location": log.system.location} if log.system else None
        maintenance.append(row)

    upcoming = [
        row for row, log in zip(maintenance, logs)
        if log.status == "scheduled" and log.scheduled_date > now
    ][:UPCOMING_MAINTENANCE]

    return {
        "metrics": {
            "uptime": _pct(active_devices, total_devices),
            # placeholders until request metrics are exported from the gateway
            "responseTime": round(350 + rng.random() * 150),
            "throughput": round(150 + rng.random() * 50),
            "errorRate": round(recent_alerts / 100, 2),
            "maintenanceEfficiency": _pct(completed, len(logs)),
            "activeDevices": active_devices,
            "totalDevices": total_devices,
        },
        "maintenanceLogs": maintenance,
        "upcomingMaintenance": upcoming,
    }
