# backend/verdanta/crud/devices.py

from datetime import datetime
from typing import List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.models import Alert, Device, SensorReading
from verdanta.schemas.farm import DeviceCreate


async def list_devices_with_counts(db: AsyncSession) -> List[Tuple[Device, int, int]]:
    """(device, readings_count, alerts_count), most recently updated first."""
    readings_count = (
        select(func.count(SensorReading.id))
        .where(SensorReading.device_id == Device.id)
        .correlate(Device)
        .scalar_subquery()
    )
    alerts_count = (
        select(func.count(Alert.id))
        .where(Alert.device_id == Device.id)
        .correlate(Device)
        .scalar_subquery()
    )

    stmt = (
        select(Device, readings_count.label("readings"), alerts_count.label("alerts"))
        .order_by(Device.updated_at.desc())
    )
    rows = (await db.execute(stmt)).all()
    return [(row[0], row[1] or 0, row[2] or 0) for row in rows]


async def get_device(db: AsyncSession, device_id: str) -> Optional[Device]:
    return await db.get(Device, device_id)


async def get_device_by_mac(db: AsyncSession, mac_address: str) -> Optional[Device]:
    result = await db.scalars(select(Device).where(Device.mac_address == mac_address))
    return result.first()


async def create_device(db: AsyncSession, payload: DeviceCreate) -> Device:
    now = datetime.utcnow()
    device = Device(
        name=payload.name,
        device_type=payload.device_type,
        location=payload.location,
        mac_address=payload.mac_address,
        ip_address=payload.ip_address,
        firmware=payload.firmware,
        status="active",
        last_seen=now,
        created_at=now,
        updated_at=now,
    )
    db.add(device)
    await db.commit()
    await db.refresh(device)
    return device
