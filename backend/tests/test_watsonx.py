"""Tests for the watsonx client and the system health endpoint."""
import asyncio
import json

import httpx
import pytest

from verdanta.main import app
from verdanta.services.farm_health import (
    alert_status,
    build_farm_snapshot,
    crop_status,
    environmental_status,
    equipment_status,
)
from verdanta.services.watsonx_client import WatsonxClient, WatsonxError, get_watsonx_client


def _mock_client(handler):
    return WatsonxClient(base_url="http://watsonx.test", api_key="k", transport=httpx.MockTransport(handler))


# ------------------------------------------------------------
# Client
# ------------------------------------------------------------
def test_local_yield_optimization_when_disabled():
    result = asyncio.run(WatsonxClient().optimize_yield_prediction("farm", "lettuce"))
    assert result["success"] is True
    assert result["data"]["yieldAnalytics"]["yieldProjection"]["projected"] == 125.5
    assert result["recommendations"] == [
        "Focus on improving nutrient timing",
        "Focus on improving irrigation scheduling",
        "Focus on improving light exposure",
    ]


def test_remote_yield_optimization_posts_once():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"confidence": 0.9, "data": {}})

    result = asyncio.run(_mock_client(handler).optimize_yield_prediction("farm-7", "tomatoes"))
    assert len(calls) == 1
    assert calls[0].url.path == "/v1/yield/optimize"
    assert calls[0].headers["Authorization"] == "Bearer k"
    assert json.loads(calls[0].content) == {"farmId": "farm-7", "cropType": "tomatoes"}
    assert result["success"] is True


def test_remote_http_error_propagates():
    client = _mock_client(lambda request: httpx.Response(502))
    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(client.handle_query("status?"))


def test_non_object_response_is_rejected():
    client = _mock_client(lambda request: httpx.Response(200, json=[1, 2, 3]))
    with pytest.raises(WatsonxError):
        asyncio.run(client.analyze_environment({"temperature": 72}))


def test_analyze_environment_disabled_returns_none():
    assert asyncio.run(WatsonxClient().analyze_environment({})) is None


# ------------------------------------------------------------
# Health assessment helpers
# ------------------------------------------------------------
def test_reference_snapshot_statuses():
    snapshot = build_farm_snapshot("farm-1")
    assert environmental_status(snapshot["environmental"]) == "optimal"
    # heater is in maintenance: 3 of 4 online
    assert equipment_status(snapshot["equipment"]) == "needs_attention"
    assert crop_status(snapshot["crops"]) == "good"
    assert alert_status(snapshot["alerts"]) == {"total_active": 2, "critical": 0, "high": 1, "status": "warning"}


def test_environmental_status_bands():
    assert environmental_status({"temperature": 78, "moisture": 55, "ph": 7.2}) == "good"
    assert environmental_status({"temperature": 90, "moisture": 55, "ph": 7.2}) == "needs_attention"


def test_empty_equipment_and_crops():
    assert equipment_status([]) == "no_data"
    assert crop_status([]) == "no_data"


# ------------------------------------------------------------
# Endpoints
# ------------------------------------------------------------
def test_health_endpoint_offline(client):
    body = client.get("/api/watsonx/health", params={"farmId": "farm-9"}).json()
    assert body["success"] is True
    assert body["metadata"]["farmId"] == "farm-9"
    assert body["metadata"]["system_uptime"] == 75
    assert "ai_analysis" not in body["data"]
    assert "Schedule maintenance for offline equipment" in body["data"]["recommendations_priority"]
    assert "Schedule preventive maintenance for aging equipment" in body["data"]["next_actions"]
    assert body["workflows"] == ["Predictive Maintenance System"]


def test_health_endpoint_with_ai_analysis(client):
    def handler(request):
        assert request.url.path == "/v1/environment/analyze"
        return httpx.Response(200, json={"score": 0.93})

    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(handler)
    body = client.get("/api/watsonx/health").json()
    assert body["data"]["ai_analysis"] == {"score": 0.93}
    assert body["metadata"]["farmId"] == "default_farm"


def test_yield_endpoint_with_remote_projection(client):
    def handler(request):
        return httpx.Response(200, json={
            "data": {"yieldAnalytics": {"yieldProjection": {"projected": 200.0, "confidence": 0.9}}},
            "confidence": 0.91,
            "insights": ["remote"],
            "recommendations": [],
        })

    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(handler)
    body = client.get("/api/ai-ml/predictions/yield", params={"timeframe": "7d"}).json()
    assert len(body["data"]) == 7
    assert body["metadata"]["confidence"] == 0.91
    assert body["metadata"]["insights"] == ["remote"]


def test_yield_endpoint_remote_failure_is_500(client):
    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(lambda request: httpx.Response(503))
    res = client.get("/api/ai-ml/predictions/yield")
    assert res.status_code == 500
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "Failed to fetch yield predictions"
    assert "message" in body


def test_insight_query_remote(client):
    def handler(request):
        payload = json.loads(request.content)
        return httpx.Response(200, json={"data": {"answer": payload["query"].upper()}, "confidence": 0.7})

    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(handler)
    body = client.post("/api/ai-ml/predictions/insights", json={"query": "ph?"}).json()
    assert body["data"] == {"answer": "PH?"}
    assert body["confidence"] == 0.7
