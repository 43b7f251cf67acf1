# backend/verdanta/crud/environmental.py

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from verdanta.models import SensorReading
from verdanta.schemas.farm import SensorReadingCreate

MAX_READINGS = 1000


async def list_readings(
    db: AsyncSession,
    hours: int = 24,
    sensor_type: Optional[str] = None,
    location: Optional[str] = None,
    limit: int = MAX_READINGS,
) -> List[SensorReading]:
    since = datetime.utcnow() - timedelta(hours=hours)
    stmt = (
        select(SensorReading)
        .options(selectinload(SensorReading.device))
        .where(SensorReading.timestamp >= since)
    )
    if sensor_type:
        stmt = stmt.where(SensorReading.sensor_type == sensor_type)
    if location:
        stmt = stmt.where(SensorReading.location == location)

    stmt = stmt.order_by(SensorReading.timestamp.desc()).limit(limit)
    result = await db.scalars(stmt)
    return result.all()


def group_by_sensor_type(readings: List[SensorReading]) -> Dict[str, List[Dict[str, Any]]]:
    """Chart-friendly grouping; keeps the newest-first order inside each group."""
    grouped: Dict[str, List[Dict[str, Any]]] = {}
    for r in readings:
        grouped.setdefault(r.sensor_type, []).append({
            "timestamp": r.timestamp.isoformat() if r.timestamp else None,
            "value": r.value,
            "unit": r.unit,
            "location": r.location,
            "deviceName": r.device.name if r.device else None,
        })
    return grouped


async def create_reading(db: AsyncSession, payload: SensorReadingCreate) -> SensorReading:
    timestamp = payload.timestamp or datetime.utcnow()
    if timestamp.tzinfo is not None:
        # stored as naive UTC
        timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)

    reading = SensorReading(
        device_id=payload.device_id,
        sensor_type=payload.sensor_type.lower(),
        value=payload.value,
        unit=payload.unit,
        location=payload.location,
        timestamp=timestamp,
    )
    db.add(reading)
    await db.commit()
    await db.refresh(reading)
    return reading
