# backend/verdanta/api/farm/devices.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.core.auth import require_editor, require_user
from verdanta.core.database import get_db
from verdanta.core.envelope import InvalidParameterError, ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.core.utils_logging import log_user_action
from verdanta.crud import devices as device_crud
from verdanta.crud.serializers import device_to_dict
from verdanta.schemas.farm import DeviceCreate

router = APIRouter(prefix="/devices", tags=["Devices"])


@router.get("")
async def list_devices(db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    try:
        rows = await device_crud.list_devices_with_counts(db)
        devices = [device_to_dict(d, readings, alerts) for d, readings, alerts in rows]
        return ok(devices, metadata={"total": len(devices)})

    except Exception as exc:
        logger.exception("Devices API error")
        return failure("Failed to fetch devices", exc)


@router.post("")
async def create_device(body: DeviceCreate, db: AsyncSession = Depends(get_db), user=Depends(require_editor)):
    """Register a sensor or controller; viewers may not add devices."""
    require_fields(
        name=body.name,
        deviceType=body.device_type,
        location=body.location,
        macAddress=body.mac_address,
    )
    if await device_crud.get_device_by_mac(db, body.mac_address):
        raise InvalidParameterError("Device with this MAC address already exists")

    try:
        device = await device_crud.create_device(db, body)
        log_user_action(str(user.get("sub", "unknown")), "device_created", device.id)
        return ok(device_to_dict(device, 0, 0))

    except Exception as exc:
        logger.exception("Device creation error")
        return failure("Failed to create device", exc)
