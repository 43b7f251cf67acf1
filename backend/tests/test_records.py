"""Tests for the session-gated farm record endpoints."""
import asyncio
import os
import random
import tempfile
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from verdanta.core.database import Base
from verdanta.models import SensorReading, VermicultureProduction
from verdanta.services.query_params import MAX_HOURS

from scripts.seed_demo_data import seed_demo_data

GATED = [
    ("get", "/api/alerts"),
    ("post", "/api/alerts"),
    ("post", "/api/alerts/some-id/acknowledge"),
    ("post", "/api/alerts/some-id/resolve"),
    ("get", "/api/devices"),
    ("post", "/api/devices"),
    ("get", "/api/environmental"),
    ("post", "/api/environmental"),
    ("get", "/api/production"),
    ("get", "/api/vermiculture"),
    ("post", "/api/vermiculture"),
    ("get", "/api/dashboard"),
    ("get", "/api/performance"),
]


def _mac():
    return ":".join(uuid.uuid4().hex[i:i + 2] for i in range(0, 12, 2))


def _create_device(client, headers, **overrides):
    payload = {"name": "Probe", "deviceType": "probe", "location": "North Greenhouse", "macAddress": _mac()}
    payload.update(overrides)
    return client.post("/api/devices", json=payload, headers=headers)


# ------------------------------------------------------------
# Auth
# ------------------------------------------------------------
@pytest.mark.parametrize("method,path", GATED)
def test_requires_session(client, method, path):
    kwargs = {"json": {}} if method == "post" else {}
    res = getattr(client, method)(path, **kwargs)
    assert res.status_code == 401
    body = res.json()
    assert body["success"] is False
    assert "data" not in body


def test_invalid_token(client):
    res = client.get("/api/alerts", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json()["error"] == "Invalid token"


@pytest.mark.parametrize("path", ["/api/devices", "/api/vermiculture"])
def test_viewer_cannot_create(client, viewer_headers, path):
    res = client.post(path, json={"name": "x", "location": "y", "capacity": 10}, headers=viewer_headers)
    assert res.status_code == 401


# ------------------------------------------------------------
# Devices / readings
# ------------------------------------------------------------
def test_create_and_list_device(client, auth_headers):
    res = _create_device(client, auth_headers, name="Hub 42")
    assert res.status_code == 200
    device = res.json()["data"]
    assert device["status"] == "active"
    assert device["readingsCount"] == 0

    listed = client.get("/api/devices", headers=auth_headers).json()["data"]
    assert device["id"] in [d["id"] for d in listed]


def test_duplicate_mac_rejected(client, auth_headers):
    mac = _mac()
    assert _create_device(client, auth_headers, macAddress=mac).status_code == 200
    res = _create_device(client, auth_headers, macAddress=mac)
    assert res.status_code == 400
    assert res.json()["error"] == "Device with this MAC address already exists"


def test_create_device_missing_fields(client, auth_headers):
    res = client.post("/api/devices", json={"name": "Half"}, headers=auth_headers)
    assert res.status_code == 400
    assert "macAddress" in res.json()["error"]


def test_record_and_read_environmental(client, auth_headers):
    device = _create_device(client, auth_headers, name="Temp probe").json()["data"]
    res = client.post(
        "/api/environmental",
        json={"deviceId": device["id"], "sensorType": "Temperature", "value": 71.5, "unit": "°F"},
        headers=auth_headers,
    )
    assert res.status_code == 200
    assert res.json()["data"]["sensorType"] == "temperature"

    body = client.get("/api/environmental", params={"sensorType": "temperature"}, headers=auth_headers).json()
    values = [r["value"] for r in body["data"]["readings"]["temperature"]]
    assert 71.5 in values
    assert body["data"]["timeRange"] == "24 hours"


def test_environmental_lookback_is_capped(client, auth_headers):
    res = client.get("/api/environmental", params={"hours": "10000000000"}, headers=auth_headers)
    assert res.status_code == 200
    assert res.json()["data"]["timeRange"] == f"{MAX_HOURS} hours"


def test_reading_for_unknown_device(client, auth_headers):
    res = client.post(
        "/api/environmental",
        json={"deviceId": "missing", "sensorType": "ph", "value": 6.5, "unit": "pH"},
        headers=auth_headers,
    )
    assert res.status_code == 400


# ------------------------------------------------------------
# Alerts
# ------------------------------------------------------------
def test_alert_lifecycle(client, auth_headers):
    res = client.post(
        "/api/alerts",
        json={"title": "Pump stall", "description": "Pump 2 stalled", "alertType": "Equipment", "severity": "CRITICAL"},
        headers=auth_headers,
    )
    alert = res.json()["data"]
    assert alert["severity"] == "critical"
    assert alert["status"] == "open"

    open_alerts = client.get("/api/alerts", headers=auth_headers).json()["data"]
    assert open_alerts[0]["severity"] == "critical"

    acked = client.post(f"/api/alerts/{alert['id']}/acknowledge", headers=auth_headers).json()["data"]
    assert acked["status"] == "acknowledged"
    assert acked["assignedTo"] == "farm-manager-1"

    resolved = client.post(f"/api/alerts/{alert['id']}/resolve", headers=auth_headers).json()["data"]
    assert resolved["status"] == "resolved"
    assert resolved["resolvedAt"] is not None

    still_open = client.get("/api/alerts", headers=auth_headers).json()["data"]
    assert alert["id"] not in [a["id"] for a in still_open]
    everything = client.get("/api/alerts", params={"status": "all"}, headers=auth_headers).json()["data"]
    assert alert["id"] in [a["id"] for a in everything]


def test_alert_requires_fields(client, auth_headers):
    res = client.post("/api/alerts", json={"title": "t"}, headers=auth_headers)
    assert res.status_code == 400
    assert "description" in res.json()["error"]


def test_alert_invalid_severity(client, auth_headers):
    res = client.post(
        "/api/alerts",
        json={"title": "t", "description": "d", "alertType": "crop", "severity": "apocalyptic"},
        headers=auth_headers,
    )
    assert res.status_code == 400


@pytest.mark.parametrize("action", ["acknowledge", "resolve"])
def test_unknown_alert_is_404(client, auth_headers, action):
    res = client.post(f"/api/alerts/{uuid.uuid4()}/{action}", headers=auth_headers)
    assert res.status_code == 404


# ------------------------------------------------------------
# Vermiculture / production / dashboard
# ------------------------------------------------------------
def test_create_vermiculture_system(client, auth_headers):
    res = client.post(
        "/api/vermiculture",
        json={"name": "East Bed", "location": "Zone E", "capacity": 1200},
        headers=auth_headers,
    )
    system = res.json()["data"]
    assert system["status"] == "optimal"
    assert system["loadPercentage"] == 0

    systems = client.get("/api/vermiculture", headers=auth_headers).json()["data"]
    listed = next(s for s in systems if s["id"] == system["id"])
    assert listed["recentProductions"] == []


def test_production_report_shape(client, auth_headers):
    body = client.get("/api/production", params={"days": "7"}, headers=auth_headers).json()
    metrics = body["data"]["metrics"]
    assert metrics["totalProduction"] == pytest.approx(metrics["vermicultureYield"] + metrics["plantYield"])
    assert body["metadata"]["days"] == 7


def test_dashboard_and_performance(client, auth_headers):
    dashboard = client.get("/api/dashboard", headers=auth_headers)
    assert dashboard.status_code == 200
    assert dashboard.json()["success"] is True

    performance = client.get("/api/performance", headers=auth_headers).json()["data"]
    assert 0 <= performance["metrics"]["uptime"] <= 100


# ------------------------------------------------------------
# Seed script
# ------------------------------------------------------------
def test_seed_demo_data():
    async def run(url):
        engine = create_async_engine(url)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        Session = sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)
        async with Session() as db:
            counts = await seed_demo_data(db, rng=random.Random(7))
            readings = await db.scalar(select(func.count()).select_from(SensorReading))
            batches = await db.scalar(select(func.count()).select_from(VermicultureProduction))

        await engine.dispose()
        return counts, readings, batches

    path = os.path.join(tempfile.mkdtemp(), "seed.db")
    counts, readings, batches = asyncio.run(run(f"sqlite+aiosqlite:///{path}"))
    assert counts["devices"] == 3
    assert readings == counts["sensor_readings"] == 3 * 4 * 24
    assert batches >= 4
