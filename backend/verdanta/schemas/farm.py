# backend/verdanta/schemas/farm.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True


# ============================================================
# ALERTS
# ============================================================

class AlertCreate(_CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    alert_type: Optional[str] = Field(None, alias="alertType")
    severity: Optional[str] = None
    device_id: Optional[str] = Field(None, alias="deviceId")


# ============================================================
# DEVICES
# ============================================================

class DeviceCreate(_CamelModel):
    name: Optional[str] = None
    device_type: Optional[str] = Field(None, alias="deviceType")
    location: Optional[str] = None
    mac_address: Optional[str] = Field(None, alias="macAddress")
    ip_address: Optional[str] = Field(None, alias="ipAddress")
    firmware: Optional[str] = None


# ============================================================
# SENSOR READINGS
# ============================================================

class SensorReadingCreate(_CamelModel):
    device_id: Optional[str] = Field(None, alias="deviceId")
    sensor_type: Optional[str] = Field(None, alias="sensorType")
    value: Optional[float] = None
    unit: Optional[str] = None
    location: Optional[str] = None
    timestamp: Optional[datetime] = None


# ============================================================
# VERMICULTURE
# ============================================================

class VermicultureSystemCreate(_CamelModel):
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[float] = None
