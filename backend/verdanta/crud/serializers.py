# backend/verdanta/crud/serializers.py

from datetime import datetime
from typing import Any, Dict, Optional

from verdanta.models import (
    Alert,
    Device,
    MaintenanceLog,
    SensorReading,
    VermicultureProduction,
    VermicultureSystem,
)

# NOTE: API payloads are camelCase; ORM attributes stay snake_case.


def iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def device_summary(device: Optional[Device]) -> Optional[Dict[str, Any]]:
    if device is None:
        return None
    return {"name": device.name, "location": device.location, "deviceType": device.device_type, "status": device.status}


def alert_to_dict(alert: Alert, include_device: bool = True) -> Dict[str, Any]:
    data = {
        "id": alert.id,
        "title": alert.title,
        "description": alert.description,
        "alertType": alert.alert_type,
        "severity": alert.severity,
        "status": alert.status,
        "deviceId": alert.device_id,
        "assignedTo": alert.assigned_to,
        "createdAt": iso(alert.created_at),
        "acknowledgedAt": iso(alert.acknowledged_at),
        "resolvedAt": iso(alert.resolved_at),
    }
    if include_device:
        data["device"] = device_summary(alert.device)
    return data


def device_to_dict(device: Device, readings_count: Optional[int] = None, alerts_count: Optional[int] = None) -> Dict[str, Any]:
    data = {
        "id": device.id,
        "name": device.name,
        "deviceType": device.device_type,
        "location": device.location,
        "macAddress": device.mac_address,
        "ipAddress": device.ip_address,
        "status": device.status,
        "lastSeen": iso(device.last_seen),
        "firmware": device.firmware,
        "createdAt": iso(device.created_at),
    }
    if readings_count is not None:
        data["readingsCount"] = readings_count
    if alerts_count is not None:
        data["alertsCount"] = alerts_count
    return data


def reading_to_dict(reading: SensorReading, device_name: Optional[str] = None) -> Dict[str, Any]:
    return {
        "id": reading.id,
        "deviceId": reading.device_id,
        "deviceName": device_name,
        "sensorType": reading.sensor_type,
        "value": reading.value,
        "unit": reading.unit,
        "location": reading.location,
        "timestamp": iso(reading.timestamp),
    }


def production_to_dict(prod: VermicultureProduction) -> Dict[str, Any]:
    return {
        "id": prod.id,
        "batchNumber": prod.batch_number,
        "startDate": iso(prod.start_date),
        "expectedHarvest": iso(prod.expected_harvest),
        "actualHarvest": iso(prod.actual_harvest),
        "expectedYield": prod.expected_yield,
        "actualYield": prod.actual_yield,
        "quality": prod.quality,
    }


def maintenance_to_dict(log: MaintenanceLog) -> Dict[str, Any]:
    return {
        "id": log.id,
        "title": log.title,
        "description": log.description,
        "type": log.maintenance_type,
        "status": log.status,
        "scheduledDate": iso(log.scheduled_date),
        "completedDate": iso(log.completed_date),
        "duration": log.duration,
        "cost": log.cost,
        "performedBy": log.performed_by,
    }


def system_to_dict(system: VermicultureSystem) -> Dict[str, Any]:
    load_pct = round(system.current_load / system.capacity * 100) if system.capacity else 0
    return {
        "id": system.id,
        "name": system.name,
        "location": system.location,
        "capacity": system.capacity,
        "currentLoad": system.current_load,
        "loadPercentage": load_pct,
        "temperature": system.temperature,
        "moisture": system.moisture,
        "ph": system.ph,
        "status": system.status,
        "lastFeedTime": iso(system.last_feed_time),
        "lastHarvestTime": iso(system.last_harvest_time),
        "createdAt": iso(system.created_at),
    }
