# backend/verdanta/schemas/agricultural.py

from typing import Optional
from pydantic import BaseModel, Field


class ZoneReadingCreate(BaseModel):
    temperature: Optional[float] = None
    moisture: Optional[float] = None
    ph: Optional[float] = None
    system_id: Optional[str] = Field(None, alias="systemId")
    zone: Optional[str] = None
    sensor_id: Optional[str] = Field(None, alias="sensorId")

    class Config:
        populate_by_name = True


class MockSystemCreate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    capacity: Optional[float] = None
