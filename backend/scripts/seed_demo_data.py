import asyncio
import random
from datetime import datetime, timedelta

from verdanta.core.database import AsyncSessionLocal, create_tables
from verdanta.models import (
    Alert,
    Device,
    MaintenanceLog,
    PlantSystem,
    PlantYield,
    SensorReading,
    VermicultureProduction,
    VermicultureSystem,
)

# ------------------------------------------------------------
# CONFIG
# ------------------------------------------------------------
READING_HOURS = 24
BATCHES_PER_SYSTEM = (2, 4)
HARVESTS_PER_PLANT_SYSTEM = (2, 5)

DEVICES = [
    ("North Greenhouse Sensor Hub", "sensor_hub", "North Greenhouse"),
    ("South Irrigation Controller", "controller", "South Production Area"),
    ("Vermiculture Bed Probe", "probe", "Zone A - Building 1"),
]

SENSORS = [
    ("temperature", "°F", 72.0, 4.0),
    ("moisture", "%", 65.0, 8.0),
    ("ph", "pH", 6.6, 0.4),
    ("humidity", "%", 70.0, 10.0),
]

ALERTS = [
    ("High temperature", "Greenhouse temperature above 85°F", "environmental", "high"),
    ("Low moisture", "Soil moisture below 40% in bed 2", "environmental", "medium"),
    ("Pump vibration", "Irrigation pump vibration outside tolerance", "equipment", "critical"),
    ("Firmware update", "Sensor hub firmware update available", "system", "low"),
]

VERMI_SYSTEMS = [
    ("North Worm Bed", "Zone A - Building 1", 5000),
    ("South Worm Bed", "Zone B - Building 2", 3500),
]

PLANT_SYSTEMS = [
    ("Hydroponic Lettuce Rack", "lettuce", "North Greenhouse"),
    ("Tomato Vine Row", "tomatoes", "South Production Area"),
]


# ------------------------------------------------------------
# Builders
# ------------------------------------------------------------
def build_devices(now, rng):
    devices = []
    for i, (name, device_type, location) in enumerate(DEVICES):
        devices.append(Device(
            name=name,
            device_type=device_type,
            location=location,
            mac_address=f"AA:BB:CC:00:00:{i + 1:02X}",
            ip_address=f"10.0.0.{10 + i}",
            firmware="1.4.2",
            status="active" if i else rng.choice(["active", "maintenance"]),
            last_seen=now,
            created_at=now - timedelta(days=90),
            updated_at=now,
        ))
    return devices


def build_readings(device, now, rng):
    readings = []
    for sensor_type, unit, base, spread in SENSORS:
        for h in range(READING_HOURS):
            readings.append(SensorReading(
                device=device,
                sensor_type=sensor_type,
                value=round(base + (rng.random() - 0.5) * spread, 2),
                unit=unit,
                location=device.location,
                timestamp=now - timedelta(hours=h),
            ))
    return readings


def build_alerts(devices, now, rng):
    return [
        Alert(
            title=title,
            description=description,
            alert_type=alert_type,
            severity=severity,
            status="open",
            device=rng.choice(devices),
            created_at=now - timedelta(hours=rng.randint(1, 48)),
        )
        for title, description, alert_type, severity in ALERTS
    ]


def build_vermiculture(now, rng):
    systems = []
    for name, location, capacity in VERMI_SYSTEMS:
        system = VermicultureSystem(
            name=name,
            location=location,
            capacity=capacity,
            current_load=round(capacity * (0.6 + rng.random() * 0.3)),
            temperature=round(70 + rng.random() * 5, 1),
            moisture=round(60 + rng.random() * 10, 1),
            ph=round(6.2 + rng.random() * 0.6, 2),
            status="optimal",
            last_feed_time=now - timedelta(days=rng.randint(1, 6)),
            last_harvest_time=now - timedelta(days=rng.randint(7, 30)),
            created_at=now - timedelta(days=120),
            updated_at=now,
        )

        for b in range(rng.randint(*BATCHES_PER_SYSTEM)):
            start = now - timedelta(days=rng.randint(1, 25))
            harvested = rng.random() < 0.5
            expected = round(100 + rng.random() * 150, 1)
            system.productions.append(VermicultureProduction(
                batch_number=f"{name[:1]}-{b + 1:03d}",
                start_date=start,
                expected_harvest=start + timedelta(days=60),
                actual_harvest=start + timedelta(days=rng.randint(1, 5)) if harvested else None,
                expected_yield=expected,
                actual_yield=round(expected * (0.8 + rng.random() * 0.3), 1) if harvested else None,
                quality=rng.choice(["A", "B", "C"]) if harvested else None,
            ))

        system.maintenance_logs.append(MaintenanceLog(
            title="Bedding replacement",
            maintenance_type="routine",
            status="completed",
            scheduled_date=now - timedelta(days=10),
            completed_date=now - timedelta(days=10),
            duration=90,
            cost=45.0,
            performed_by="Field team",
            created_at=now - timedelta(days=12),
        ))
        system.maintenance_logs.append(MaintenanceLog(
            title="Moisture sensor calibration",
            maintenance_type="calibration",
            status="scheduled",
            scheduled_date=now + timedelta(days=5),
            created_at=now - timedelta(days=1),
        ))
        systems.append(system)
    return systems


def build_plant_systems(now, rng):
    systems = []
    for name, crop_type, location in PLANT_SYSTEMS:
        system = PlantSystem(name=name, crop_type=crop_type, location=location, created_at=now - timedelta(days=60))
        for _ in range(rng.randint(*HARVESTS_PER_PLANT_SYSTEM)):
            system.yields.append(PlantYield(
                harvest_date=now - timedelta(days=rng.randint(1, 28)),
                quantity=round(20 + rng.random() * 60, 1),
                quality=rng.choice(["A", "B"]),
            ))
        systems.append(system)
    return systems


# ------------------------------------------------------------
# Main generator
# ------------------------------------------------------------
async def seed_demo_data(db, rng=None, now=None):
    """Insert one demo farm's worth of records; returns counts per table."""
    rng = rng or random
    now = now or datetime.utcnow()

    devices = build_devices(now, rng)
    readings = [r for d in devices for r in build_readings(d, now, rng)]
    alerts = build_alerts(devices, now, rng)
    vermi = build_vermiculture(now, rng)
    plants = build_plant_systems(now, rng)

    db.add_all(devices + readings + alerts + vermi + plants)
    await db.commit()

    return {
        "devices": len(devices),
        "sensor_readings": len(readings),
        "alerts": len(alerts),
        "vermiculture_systems": len(vermi),
        "plant_systems": len(plants),
    }


async def main():
    await create_tables()
    async with AsyncSessionLocal() as db:
        counts = await seed_demo_data(db)
    for table, count in counts.items():
        print(f"Created {count} {table}")


# ------------------------------------------------------------
# Script Entrypoint
# ------------------------------------------------------------
if __name__ == "__main__":
    print("\n=== VERDANTAIQ DEMO DATA SEEDER ===")
    asyncio.run(main())
    print("\nDone! Demo data inserted successfully.\n")
