"""Tests for prediction services and endpoints."""
import random
from datetime import date, datetime, timedelta

import pytest

from verdanta.services import prediction_service
from verdanta.services.summary import SEVERITY_RANK

NOW = datetime(2024, 10, 15, 12, 0, 0)
OCTOBER = date(2024, 10, 15)


# ------------------------------------------------------------
# Insights
# ------------------------------------------------------------
def test_insights_cutoff_for_known_timeframe():
    # every seeded insight is under two hours old
    assert len(prediction_service.get_insights("24h", now=NOW)) == 5


def test_insights_sorted_by_confidence():
    insights = prediction_service.get_insights("7d", now=NOW)
    confidences = [i["confidence"] for i in insights]
    assert confidences == sorted(confidences, reverse=True)
    assert insights[0]["id"] == "insight_003"
    assert insights[0]["timestamp"].endswith("Z")


def test_insights_filters():
    assert [i["id"] for i in prediction_service.get_insights("7d", insight_type="pest", now=NOW)] == ["insight_002"]
    high = prediction_service.get_insights("7d", impact="high", now=NOW)
    assert {i["impact"] for i in high} == {"high"}


def test_insights_endpoint(client):
    body = client.get("/api/ai-ml/predictions/insights", params={"type": "weather"}).json()
    assert body["success"] is True
    assert [i["type"] for i in body["data"]] == ["weather"]


def test_insight_query_requires_query(client):
    res = client.post("/api/ai-ml/predictions/insights", json={"systemData": {}})
    assert res.status_code == 400
    assert "query" in res.json()["error"]


def test_insight_query_when_assistant_disabled(client):
    res = client.post("/api/ai-ml/predictions/insights", json={"query": "How are my tomatoes?"})
    assert res.status_code == 503
    assert res.json()["error"] == "Watson Assistant is not enabled"


# ------------------------------------------------------------
# Market
# ------------------------------------------------------------
def test_market_predictions_sorted_by_change():
    predictions = prediction_service.get_market_predictions(
        "30d", ["lettuce", "tomatoes", "herbs"], today=OCTOBER, rng=random.Random(1)
    )
    assert {p["crop"] for p in predictions} == {"Lettuce", "Tomatoes", "Herbs"}
    changes = [p["price_change"] for p in predictions]
    assert changes == sorted(changes, reverse=True)
    for p in predictions:
        window = p["optimal_harvest_window"]
        assert window["start"] <= window["end"]


def test_market_crop_filter():
    predictions = prediction_service.get_market_predictions(
        "7d", ["lettuce", "tomatoes"], crop_filter="tom", today=OCTOBER, rng=random.Random(1)
    )
    assert [p["crop"] for p in predictions] == ["Tomatoes"]


def test_market_endpoint_default_crops(client):
    body = client.get("/api/ai-ml/predictions/market").json()
    assert len(body["data"]) == 3
    assert body["metadata"]["model"] == "Market Analysis AI v2.0"


# ------------------------------------------------------------
# Pest risk
# ------------------------------------------------------------
def test_pest_risk_week_tomatoes_in_october():
    risks = prediction_service.get_pest_risk("7d", "tomatoes", today=OCTOBER, rng=random.Random(3))
    assert [r["pest_type"] for r in risks] == ["Fungus Gnats", "Whiteflies", "Aphids", "Spider Mites"]
    assert all(r["probability"] > 10 for r in risks)


@pytest.mark.parametrize("month", range(1, 13))
def test_pest_risk_ordering_all_year(month):
    risks = prediction_service.get_pest_risk(
        "90d", "peppers", today=date(2024, month, 1), rng=random.Random(month)
    )
    keys = [(SEVERITY_RANK[r["risk_level"]], r["probability"]) for r in risks]
    assert keys == sorted(keys, reverse=True)
    assert all(r["probability"] > 10 for r in risks)


def test_pest_risk_level_filter():
    risks = prediction_service.get_pest_risk("90d", "herbs", risk_level="HIGH", today=OCTOBER, rng=random.Random(3))
    assert all(r["risk_level"] == "high" for r in risks)


def test_pest_risk_endpoint(client):
    body = client.get("/api/ai-ml/predictions/pest-risk", params={"timeframe": "7d", "cropType": "tomatoes"}).json()
    risks = body["data"]
    assert all(r["probability"] > 10 for r in risks)
    keys = [(SEVERITY_RANK[r["risk_level"]], r["probability"]) for r in risks]
    assert keys == sorted(keys, reverse=True)
    assert body["metadata"]["totalRisks"] == len(risks)


# ------------------------------------------------------------
# Weather / yield
# ------------------------------------------------------------
@pytest.mark.parametrize("timeframe,expected", [("24h", 1), ("7d", 7), ("30d", 30), ("90d", 90), ("bogus", 7)])
def test_weather_forecast_lengths(client, timeframe, expected):
    body = client.get("/api/ai-ml/predictions/weather", params={"timeframe": timeframe}).json()
    assert len(body["data"]) == expected


def test_yield_endpoint_uses_local_optimizer(client):
    body = client.get("/api/ai-ml/predictions/yield", params={"timeframe": "30d"}).json()
    assert len(body["data"]) == 30
    assert body["metadata"]["confidence"] == 0.85
    assert body["metadata"]["recommendations"][0].startswith("Focus on improving")


def test_yield_forecast_propagates_optimizer_failure():
    class FailingClient:
        async def optimize_yield_prediction(self, farm_id, crop_type):
            return {"success": False, "error": "model offline"}

    import asyncio

    with pytest.raises(RuntimeError, match="model offline"):
        asyncio.run(prediction_service.get_yield_forecast(FailingClient(), "7d", "farm", "lettuce"))
