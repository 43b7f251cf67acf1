"""Tests for the enhanced intelligence report and its multi-commodity analyses."""
import asyncio
import json
import random

import httpx
import pytest

from verdanta.main import app
from verdanta.services import enhanced_intelligence
from verdanta.services.watsonx_client import WatsonxClient, get_watsonx_client

URL = "/api/watsonx/enhanced-intelligence"


def _mock_client(handler):
    return WatsonxClient(base_url="http://watsonx.test", api_key="k", transport=httpx.MockTransport(handler))


def _report(days=(), market=()):
    return {"government_data": {"weather_forecast": list(days), "market_analysis": list(market)}}


def _day(t_max, precipitation=0.0):
    return {"temperature": {"min": 60, "max": t_max, "avg": 70}, "precipitation": precipitation}


# ------------------------------------------------------------
# Scoring helpers
# ------------------------------------------------------------
def test_risk_score_counts_hot_and_wet_days():
    days = [_day(86), _day(80, precipitation=1.6), _day(80), _day(88, precipitation=2.1)]
    assert enhanced_intelligence.risk_score(_report(days)) == 65


def test_risk_score_is_capped():
    assert enhanced_intelligence.risk_score(_report([_day(95)] * 20)) == 100
    assert enhanced_intelligence.risk_score(_report()) == 50


@pytest.mark.parametrize("scores,level", [([80, 75], "high"), ([50], "medium"), ([30, 40], "low"), ([], "low")])
def test_overall_risk(scores, level):
    assert enhanced_intelligence.overall_risk(scores) == level


def test_risk_factors():
    report = _report([_day(95)], [{"trend": "down"}])
    assert [r["type"] for r in enhanced_intelligence.risk_factors(report)] == ["weather", "market"]
    assert enhanced_intelligence.risk_factors(_report([_day(80)], [{"trend": "stable"}])) == []


def test_rank_opportunities_orders_by_score():
    ranked = enhanced_intelligence.rank_opportunities(
        [{"commodity": c} for c in ("CORN", "SOYBEANS", "WHEAT")], rng=random.Random(3)
    )
    assert [o["rank"] for o in ranked] == [1, 2, 3]
    scores = [o["score"] for o in ranked]
    assert scores == sorted(scores, reverse=True)
    assert all(75 <= s <= 95 for s in scores)


def test_report_without_ai_uses_base_confidence(rng):
    result = asyncio.run(
        enhanced_intelligence.get_enhanced_intelligence(WatsonxClient(), "SOYBEANS", "IOWA", include_market=False, rng=rng)
    )
    report = result["data"]
    assert result["confidence"] == 0.75
    assert set(report["government_data"]) == {"yield_prediction", "weather_forecast"}
    assert len(report["government_data"]["weather_forecast"]) == 7
    assert report["overview"]["dataQuality"]["sources"] == ["USDA_NASS", "DATA_GOV"]
    assert report["recommendations"][-1] == "Consider optimizing planting density for maximum yield"


# ------------------------------------------------------------
# GET
# ------------------------------------------------------------
def test_get_defaults(client):
    body = client.get(URL).json()
    assert body["success"] is True
    assert body["data"]["overview"]["commodity"] == "CORN"
    assert body["data"]["overview"]["location"] == "ILLINOIS"
    assert body["metadata"]["source"] == "watsonx-enhanced-intelligence"
    assert body["metadata"]["parameters"]["includePredictions"] is True
    assert "ai_analysis" not in body["data"]


def test_get_without_weather(client):
    body = client.get(URL, params={"includeWeatherData": "false", "commodity": "WHEAT"}).json()
    assert "weather_forecast" not in body["data"]["government_data"]
    assert body["data"]["government_data"]["yield_prediction"]["commodity"] == "WHEAT"


def test_get_with_ai_enrichment(client):
    def handler(request):
        assert request.url.path == "/v1/intelligence/enhance"
        assert "yield_prediction" in json.loads(request.content)["governmentData"]
        return httpx.Response(200, json={"outlook": "bullish"})

    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(handler)
    body = client.get(URL).json()
    assert body["data"]["ai_analysis"] == {"outlook": "bullish"}
    assert body["metadata"]["confidence"] == 0.85
    assert "WATSON_AI" in body["data"]["overview"]["dataQuality"]["sources"]


def test_get_falls_back_when_ai_fails(client):
    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(lambda request: httpx.Response(503))
    res = client.get(URL, params={"commodity": "SOYBEANS"})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["metadata"]["source"] == "mock-enhanced-intelligence"
    assert body["metadata"]["confidence"] == 0.75
    assert body["data"]["government_data"]["yield_prediction"]["predictedYield"] == 185.5
    assert body["data"]["overview"]["commodity"] == "SOYBEANS"


# ------------------------------------------------------------
# POST
# ------------------------------------------------------------
def test_post_defaults_to_comprehensive(client):
    body = client.post(URL, json={"commodities": ["CORN", "WHEAT"]}).json()
    assert body["analysis_type"] == "comprehensive"
    results = body["data"]
    assert [a["commodity"] for a in results["analyses"]] == ["CORN", "WHEAT"]
    assert results["executive_summary"]["confidence_level"] == "medium"
    assert body["metadata"] == {"commodities_analyzed": 2, "locations_analyzed": 1}


def test_post_comparative_covers_every_location(client):
    body = client.post(
        URL,
        json={"commodities": ["CORN", "SOYBEANS"], "locations": ["ILLINOIS", "IOWA"], "analysis_type": "comparative"},
    ).json()
    results = body["data"]
    for comparison in results["comparisons"]:
        assert [e["location"] for e in comparison["location_analyses"]] == ["ILLINOIS", "IOWA"]
    assert results["summary"]["total_commodities"] == 2
    assert results["summary"]["highest_yield_potential"] in ("CORN", "SOYBEANS")
    assert body["metadata"]["locations_analyzed"] == 2


def test_post_risk_assessment(client):
    body = client.post(URL, json={"commodities": ["CORN"], "analysis_type": "risk_assessment"}).json()
    results = body["data"]
    assert results["time_horizon"] == "30_days"
    analysis = results["risk_analyses"][0]
    assert 50 <= analysis["risk_score"] <= 100
    assert analysis["mitigation_strategies"][0] == "Implement diversified cropping strategy"
    assert results["overall_risk"] in ("medium", "high")


def test_post_market_opportunity(client):
    body = client.post(URL, json={"commodities": ["CORN", "WHEAT"], "analysis_type": "market_opportunity"}).json()
    results = body["data"]
    assert [o["commodity"] for o in results["opportunities"]] == ["CORN", "WHEAT"]
    # weather is not fetched for market analyses
    assert "Weather conditions favorable for growth" in results["opportunities"][0]["opportunities"]
    assert sorted(o["rank"] for o in results["best_opportunities"]) == [1, 2]


@pytest.mark.parametrize("payload,error", [
    ({}, "Missing required field: commodities"),
    ({"commodities": "CORN"}, "commodities must be an array"),
    ({"commodities": ["CORN"], "locations": "IOWA"}, "locations must be an array"),
])
def test_post_rejects_bad_bodies(client, payload, error):
    res = client.post(URL, json=payload)
    assert res.status_code == 400
    assert res.json()["error"] == error


def test_post_unknown_analysis_type(client):
    res = client.post(URL, json={"commodities": ["CORN"], "analysis_type": "astrology"})
    assert res.status_code == 400
    assert "comparative" in res.json()["error"]


def test_post_ai_failure_is_500(client):
    app.dependency_overrides[get_watsonx_client] = lambda: _mock_client(lambda request: httpx.Response(502))
    res = client.post(URL, json={"commodities": ["CORN"]})
    assert res.status_code == 500
    assert res.json()["error"] == "Failed to process enhanced intelligence request"
