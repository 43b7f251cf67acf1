from .device import Device, SensorReading
from .alert import Alert
from .vermiculture import VermicultureSystem, VermicultureProduction, MaintenanceLog
from .plant import PlantSystem, PlantYield
from ..core.database import Base

__all__ = [
    "Device",
    "SensorReading",
    "Alert",
    "VermicultureSystem",
    "VermicultureProduction",
    "MaintenanceLog",
    "PlantSystem",
    "PlantYield",
    "Base",
]
