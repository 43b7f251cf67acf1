"""Tests for mock vermiculture systems and zone readings."""
import random
from datetime import datetime

from verdanta.services import system_mock_service
from verdanta.services.query_params import MAX_HOURS

NOW = datetime(2024, 9, 25, 12, 0, 0)


def test_environmental_data_counts():
    data = system_mock_service.generate_environmental_data(4, now=NOW, rng=random.Random(0))
    # 4 zones across 3 systems, hours + 1 readings each
    assert len(data) == 4 * 5
    stamps = [d["timestamp"] for d in data]
    assert stamps == sorted(stamps, reverse=True)


def test_environmental_data_filters():
    data = system_mock_service.generate_environmental_data(2, system_id="sys_001", zone="Zone A2", now=NOW, rng=random.Random(0))
    assert len(data) == 3
    assert {d["zone"] for d in data} == {"Zone A2"}


def test_list_systems_does_not_mutate_reference():
    systems = system_mock_service.list_systems(rng=random.Random(0))
    systems[0]["zones"].clear()
    assert system_mock_service.MOCK_SYSTEMS[0]["zones"]
    assert systems[1]["currentEnvironmentalData"]["systemId"] == "sys_002"


def test_environmental_endpoint(client):
    body = client.get("/api/agricultural/environmental", params={"hours": "1", "systemId": "sys_002"}).json()
    assert body["metadata"]["total"] == 2
    assert all(d["systemId"] == "sys_002" for d in body["data"])


def test_record_zone_reading(client):
    res = client.post(
        "/api/agricultural/environmental",
        json={"temperature": 71.2, "moisture": 66, "ph": 6.5, "systemId": "sys_001", "zone": "Zone A1"},
    )
    data = res.json()["data"]
    assert data["systemId"] == "sys_001"
    assert data["id"].startswith("env_")


def test_record_zone_reading_missing_fields(client):
    res = client.post("/api/agricultural/environmental", json={"temperature": 71.2})
    assert res.status_code == 400
    assert "systemId" in res.json()["error"]


def test_systems_endpoint_with_metrics(client):
    body = client.get("/api/agricultural/systems", params={"includeMetrics": "true", "days": "2"}).json()
    assert body["metadata"]["total"] == 3
    # 3 systems x (days + 1)
    assert len(body["performanceMetrics"]) == 9


def test_create_system(client):
    res = client.post("/api/agricultural/systems", json={"name": "West Bed", "location": "Zone D", "capacity": 800})
    data = res.json()["data"]
    assert data["currentLoad"] == 0
    assert data["zones"] == []


def test_create_system_requires_name(client):
    res = client.post("/api/agricultural/systems", json={"location": "Zone D"})
    assert res.status_code == 400


def test_environmental_endpoint_caps_hours(client):
    res = client.get("/api/agricultural/environmental", params={"hours": "1000000000", "systemId": "sys_003"})
    assert res.status_code == 200
    body = res.json()
    assert body["metadata"]["hours"] == MAX_HOURS
    assert body["metadata"]["total"] == MAX_HOURS + 1
