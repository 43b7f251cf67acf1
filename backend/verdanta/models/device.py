# backend/verdanta/models/device.py

from sqlalchemy import Column, String, Float, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime

from verdanta.core.database import Base
from verdanta.models._ids import gen_uuid


# ============================================================
# DEVICE (sensor gateways, pumps, controllers)
# ============================================================
class Device(Base):
    __tablename__ = "devices"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    name = Column(String, nullable=False)
    device_type = Column(String, nullable=False)
    location = Column(String, nullable=True)
    mac_address = Column(String, nullable=False, unique=True)
    ip_address = Column(String, nullable=True)
    firmware = Column(String, nullable=True)

    status = Column(String, default="active", index=True)   # active, inactive, maintenance, error
    last_seen = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    readings = relationship("SensorReading", back_populates="device", cascade="all, delete-orphan")
    alerts = relationship("Alert", back_populates="device")


# ============================================================
# SENSOR READING
# ============================================================
class SensorReading(Base):
    __tablename__ = "sensor_readings"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    device_id = Column(String(36), ForeignKey("devices.id"), nullable=False, index=True)
    sensor_type = Column(String, nullable=False, index=True)   # temperature, moisture, ph, humidity ...
    value = Column(Float, nullable=False)
    unit = Column(String, nullable=True)
    location = Column(String, nullable=True)
    timestamp = Column(DateTime, default=datetime.utcnow, index=True)

    device = relationship("Device", back_populates="readings")
