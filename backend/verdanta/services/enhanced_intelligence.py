# backend/verdanta/services/enhanced_intelligence.py
"""
Enhanced agricultural intelligence.

One report combines USDA yield and market data with a weather outlook for a
commodity/location pair, and is enriched by the watsonx service when it is
configured. Multi-commodity analyses (comparative, risk assessment, market
opportunity, comprehensive) fan the single report out with asyncio.gather;
any failing sub-call fails the whole analysis.
"""

import asyncio
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from verdanta.services import usda_service, weather_service
from verdanta.services.query_params import DEFAULT_COMMODITY, DEFAULT_LOCATION
from verdanta.services.watsonx_client import WatsonxClient

ANALYSIS_TYPES = ("comparative", "risk_assessment", "market_opportunity", "comprehensive")
DEFAULT_ANALYSIS_TYPE = "comprehensive"
DEFAULT_TIME_HORIZON = "30_days"

OUTLOOK_DAYS = 7
BASE_CONFIDENCE = 0.75
AI_CONFIDENCE = 0.85

# weather thresholds (F / inches)
EXTREME_TEMP = 90
EXTREME_PRECIP = 2.0
RISKY_TEMP = 85
RISKY_PRECIP = 1.5

BASE_RISK_SCORE = 50
RISK_PER_BAD_DAY = 5

MITIGATION_STRATEGIES = [
    "Implement diversified cropping strategy",
    "Monitor weather patterns closely",
    "Consider crop insurance options",
    "Maintain flexible planting schedules",
]


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


# ---------------------------------------------------
# Single report
# ---------------------------------------------------
def _recommendations(government_data: Dict[str, Any]) -> List[str]:
    recs = []

    prediction = government_data.get("yield_prediction")
    if prediction:
        if prediction["predictedYield"] >= prediction["historicalAverage"]:
            recs.append("Current yield predictions are above historical average")
        else:
            recs.append("Current yield predictions are below historical average")

    market = government_data.get("market_analysis")
    if market:
        if any(item.get("trend") == "down" for item in market):
            recs.append("Market prices are softening; consider forward contracts")
        else:
            recs.append("Market conditions are stable with moderate pricing")

    weather = government_data.get("weather_forecast")
    if weather:
        if _extreme_weather(weather):
            recs.append("Extreme weather forecasted; protect sensitive crops")
        else:
            recs.append("Weather conditions are favorable for crop development")

    recs.append("Consider optimizing planting density for maximum yield")
    return recs


async def get_enhanced_intelligence(
    client: WatsonxClient,
    commodity: str,
    location: str,
    include_market: bool = True,
    include_weather: bool = True,
    include_predictions: bool = True,
    rng=None,
) -> Dict[str, Any]:
    """Returns {"data": report, "confidence": float}. AI service errors propagate."""
    calls = {}
    if include_predictions:
        calls["yield_prediction"] = usda_service.get_yield_prediction(commodity, location, rng=rng)
    if include_market:
        calls["market_analysis"] = usda_service.get_market_prices(commodity, "weekly", rng=rng)
    if include_weather:
        calls["weather_forecast"] = weather_service.get_weather_data(location, OUTLOOK_DAYS, rng=rng)

    results = await asyncio.gather(*calls.values())
    government_data = dict(zip(calls.keys(), results))

    ai_analysis = await client.enhance_intelligence(government_data)

    sources = [usda_service.SOURCE, "DATA_GOV"]
    if ai_analysis is not None:
        sources.append("WATSON_AI")
    confidence = AI_CONFIDENCE if ai_analysis is not None else BASE_CONFIDENCE

    report = {
        "overview": {
            "commodity": commodity,
            "location": location,
            "analysisDate": _now_iso(),
            "dataQuality": {"sources": sources, "lastUpdated": _now_iso(), "confidence": confidence},
        },
        "government_data": government_data,
        "recommendations": _recommendations(government_data),
    }
    if ai_analysis is not None:
        report["ai_analysis"] = ai_analysis

    return {"data": report, "confidence": confidence}


def fallback_intelligence(commodity: str = DEFAULT_COMMODITY, location: str = DEFAULT_LOCATION) -> Dict[str, Any]:
    """Static report served when the live report cannot be built."""
    now = _now_iso()
    return {
        "overview": {
            "commodity": commodity,
            "location": location,
            "analysisDate": now,
            "dataQuality": {"sources": [usda_service.SOURCE, "DATA_GOV", "WATSON_AI"], "lastUpdated": now, "confidence": 0.85},
        },
        "government_data": {
            "yield_prediction": {
                "commodity": commodity,
                "predictedYield": 185.5,
                "confidence": 0.82,
                "historicalAverage": 175.2,
            },
            "market_analysis": [
                {"commodity": commodity, "date": now, "price": 6.25, "unit": "USD/BU", "trend": "stable"},
            ],
            "weather_forecast": [
                {
                    "location": location,
                    "date": now,
                    "temperature": {"min": 65, "max": 78, "avg": 71},
                    "precipitation": 0.2,
                    "conditions": "Partly Cloudy",
                },
            ],
        },
        "recommendations": [
            "Current yield predictions are above historical average",
            "Market conditions are stable with moderate pricing",
            "Weather conditions are favorable for crop development",
            "Consider optimizing planting density for maximum yield",
        ],
    }


# ---------------------------------------------------
# Risk scoring
# ---------------------------------------------------
def _extreme_weather(weather: List[Dict[str, Any]]) -> bool:
    return any(
        (day.get("temperature") or {}).get("max", 0) > EXTREME_TEMP or day.get("precipitation", 0) > EXTREME_PRECIP
        for day in weather
    )


def risk_factors(report: Dict[str, Any]) -> List[Dict[str, str]]:
    government_data = report.get("government_data") or {}
    risks = []

    if government_data.get("weather_forecast") and _extreme_weather(government_data["weather_forecast"]):
        risks.append({"type": "weather", "severity": "medium", "description": "Extreme weather conditions forecasted"})

    if any(item.get("trend") == "down" for item in government_data.get("market_analysis") or []):
        risks.append({"type": "market", "severity": "medium", "description": "Market price volatility detected"})

    return risks


def risk_score(report: Dict[str, Any]) -> int:
    """50 plus 5 per hot (> 85F) or wet (> 1.5in) forecast day, within 0..100."""
    weather = (report.get("government_data") or {}).get("weather_forecast") or []
    bad_days = sum(
        1 for day in weather
        if (day.get("temperature") or {}).get("max", 0) > RISKY_TEMP or day.get("precipitation", 0) > RISKY_PRECIP
    )
    return min(100, max(0, BASE_RISK_SCORE + bad_days * RISK_PER_BAD_DAY))


def overall_risk(scores: List[float]) -> str:
    if not scores:
        return "low"
    avg = sum(scores) / len(scores)
    if avg > 70:
        return "high"
    if avg > 40:
        return "medium"
    return "low"


# ---------------------------------------------------
# Market opportunity
# ---------------------------------------------------
def _market_trend(report: Dict[str, Any]) -> str:
    market = (report.get("government_data") or {}).get("market_analysis") or []
    return market[0]["trend"] if market else "stable"


def market_outlook(report: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "trend": _market_trend(report),
        "confidence": BASE_CONFIDENCE,
        "factors": ["Seasonal demand patterns", "Weather impact on supply"],
    }


def price_trends(report: Dict[str, Any]) -> Dict[str, str]:
    prediction = (report.get("government_data") or {}).get("yield_prediction")
    # a below-average harvest tightens supply
    tight_supply = bool(prediction) and prediction["predictedYield"] < prediction["historicalAverage"]
    return {
        "current_trend": _market_trend(report),
        "projected_direction": "up" if tight_supply else "slightly_up",
        "volatility": "moderate",
    }


def identify_opportunities(report: Dict[str, Any]) -> List[str]:
    opportunities = ["Optimal planting window approaching", "Market demand expected to increase"]
    weather = (report.get("government_data") or {}).get("weather_forecast")
    if not weather or not _extreme_weather(weather):
        opportunities.append("Weather conditions favorable for growth")
    return opportunities


TIMING_RECOMMENDATIONS = {
    "planting": "Optimal window: Next 2-3 weeks",
    "harvesting": "Monitor market conditions",
    "selling": "Consider staged selling approach",
}


def rank_opportunities(opportunities: List[Dict[str, Any]], rng=None) -> List[Dict[str, Any]]:
    rng = rng or random
    scored = [
        {
            "commodity": opp["commodity"],
            "score": round(75 + rng.random() * 20, 1),
            "rationale": "Strong market fundamentals and favorable conditions",
        }
        for opp in opportunities
    ]
    scored.sort(key=lambda o: o["score"], reverse=True)
    for rank, opp in enumerate(scored, start=1):
        opp["rank"] = rank
    return scored


# ---------------------------------------------------
# Fan-out analyses
# ---------------------------------------------------
def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _comparative_summary(comparisons: List[Dict[str, Any]]) -> Dict[str, Any]:
    yields, prices = {}, {}
    for comparison in comparisons:
        reports = [entry["data"]["government_data"] for entry in comparison["location_analyses"]]
        yields[comparison["commodity"]] = _mean([r["yield_prediction"]["predictedYield"] for r in reports])
        prices[comparison["commodity"]] = _mean([m["price"] for r in reports for m in r["market_analysis"]])

    return {
        "total_commodities": len(comparisons),
        "highest_yield_potential": max(yields, key=yields.get) if yields else None,
        "best_market_conditions": max(prices, key=prices.get) if prices else None,
        "recommended_focus": "Diversified portfolio approach",
    }


def _executive_summary(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    confidence = _mean([r["confidence"] for r in results])
    return {
        "key_insights": [
            "Government data integration provides enhanced market visibility",
            "Weather patterns indicate favorable growing conditions",
            "Market opportunities exist for diversified crop portfolio",
        ],
        "recommendations": [
            "Leverage government data for strategic planning",
            "Monitor real-time conditions alongside historical trends",
            "Implement data-driven decision making processes",
        ],
        "confidence_level": "high" if confidence >= 0.8 else "medium",
    }


async def comparative_analysis(client: WatsonxClient, commodities: List[str], locations: List[str], rng=None) -> Dict[str, Any]:
    async def _for_commodity(commodity: str) -> Dict[str, Any]:
        results = await asyncio.gather(*[
            get_enhanced_intelligence(client, commodity, location, rng=rng) for location in locations
        ])
        return {
            "commodity": commodity,
            "location_analyses": [
                {"location": location, "data": result["data"], "confidence": result["confidence"]}
                for location, result in zip(locations, results)
            ],
        }

    comparisons = list(await asyncio.gather(*[_for_commodity(c) for c in commodities]))
    return {"type": "comparative", "comparisons": comparisons, "summary": _comparative_summary(comparisons)}


async def risk_assessment(client: WatsonxClient, commodities: List[str], location: str, time_horizon: str, rng=None) -> Dict[str, Any]:
    results = await asyncio.gather(*[
        get_enhanced_intelligence(client, commodity, location, rng=rng) for commodity in commodities
    ])

    analyses = [
        {
            "commodity": commodity,
            "risk_factors": risk_factors(result["data"]),
            "mitigation_strategies": list(MITIGATION_STRATEGIES),
            "risk_score": risk_score(result["data"]),
        }
        for commodity, result in zip(commodities, results)
    ]
    return {
        "type": "risk_assessment",
        "time_horizon": time_horizon,
        "risk_analyses": analyses,
        "overall_risk": overall_risk([a["risk_score"] for a in analyses]),
    }


async def market_opportunity(client: WatsonxClient, commodities: List[str], location: str, rng=None) -> Dict[str, Any]:
    results = await asyncio.gather(*[
        get_enhanced_intelligence(client, commodity, location, include_weather=False, rng=rng)
        for commodity in commodities
    ])

    opportunities = [
        {
            "commodity": commodity,
            "market_outlook": market_outlook(result["data"]),
            "price_trends": price_trends(result["data"]),
            "opportunities": identify_opportunities(result["data"]),
            "timing_recommendations": dict(TIMING_RECOMMENDATIONS),
        }
        for commodity, result in zip(commodities, results)
    ]
    return {
        "type": "market_opportunity",
        "opportunities": opportunities,
        "best_opportunities": rank_opportunities(opportunities, rng=rng),
    }


async def comprehensive_analysis(client: WatsonxClient, commodities: List[str], location: str, rng=None) -> Dict[str, Any]:
    results = list(await asyncio.gather(*[
        get_enhanced_intelligence(client, commodity, location, rng=rng) for commodity in commodities
    ]))
    return {
        "type": "comprehensive",
        "analyses": [
            {"commodity": commodity, "intelligence": result["data"], "confidence": result["confidence"]}
            for commodity, result in zip(commodities, results)
        ],
        "executive_summary": _executive_summary(results),
    }


async def run_analysis(
    client: WatsonxClient,
    analysis_type: str,
    commodities: List[str],
    locations: Optional[List[str]] = None,
    time_horizon: str = DEFAULT_TIME_HORIZON,
    rng=None,
) -> Dict[str, Any]:
    """Comparative covers every location; the others use the first one."""
    locations = locations or [DEFAULT_LOCATION]

    if analysis_type == "comparative":
        return await comparative_analysis(client, commodities, locations, rng=rng)
    if analysis_type == "risk_assessment":
        return await risk_assessment(client, commodities, locations[0], time_horizon, rng=rng)
    if analysis_type == "market_opportunity":
        return await market_opportunity(client, commodities, locations[0], rng=rng)
    if analysis_type == "comprehensive":
        return await comprehensive_analysis(client, commodities, locations[0], rng=rng)

    raise ValueError(f"Unsupported analysis_type: {analysis_type}")
