# backend/verdanta/services/usda_service.py

import asyncio
import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from verdanta.services.synthesizer import generate_daily_weather

# NOTE:
# Stand-in for the USDA NASS quick-stats feed. Values are drawn around
# realistic Illinois corn numbers; calls are async so bulk requests can fan
# out with asyncio.gather the same way a real HTTP client would.

SOURCE = "USDA_NASS"


async def get_statistics(commodity: str, state: str, year: Optional[int] = None, rng=None) -> List[Dict[str, Any]]:
    rng = rng or random
    return [{
        "commodity": commodity,
        "year": year or datetime.utcnow().year,
        "state": state,
        "value": round(180 + rng.random() * 40, 2),
        "unit": "BU / ACRE",
        "category": "yield",
        "source": SOURCE,
    }]


async def get_yield_prediction(commodity: str, state: Optional[str], rng=None) -> Dict[str, Any]:
    rng = rng or random
    return {
        "commodity": commodity,
        "state": state,
        "predictedYield": round(185 + rng.random() * 20, 2),
        "confidence": round(0.75 + rng.random() * 0.2, 3),
        "historicalAverage": round(175 + rng.random() * 15, 2),
        "trends": [],
    }


async def get_market_prices(commodity: str, timeframe: str = "weekly", rng=None) -> List[Dict[str, Any]]:
    rng = rng or random
    return [{
        "commodity": commodity,
        "date": datetime.utcnow().date().isoformat(),
        "timeframe": timeframe,
        "price": round(5.50 + rng.random() * 2, 2),
        "unit": "USD/BU",
        "market": "Chicago Board of Trade",
        "trend": "stable",
        "source": SOURCE,
    }]


async def get_intelligence_report(
    commodity: str,
    state: str,
    include_weather: bool = True,
    include_market: bool = True,
    rng=None,
) -> Dict[str, Any]:
    prediction = await get_yield_prediction(commodity, state, rng=rng)
    market = await get_market_prices(commodity, "weekly", rng=rng) if include_market else []
    weather = generate_daily_weather(state, 1, rng=rng) if include_weather else []

    recommendations = []
    if prediction["predictedYield"] >= prediction["historicalAverage"]:
        recommendations.append("Current yield predictions are above historical average")
    else:
        recommendations.append("Current yield predictions are below historical average")
    if include_market:
        recommendations.append("Market conditions are stable with moderate pricing")
    if include_weather:
        recommendations.append("Weather conditions are favorable for crop development")

    return {
        "commodity": commodity,
        "region": state,
        "yieldPrediction": prediction,
        "marketAnalysis": market,
        "weatherForecast": weather,
        "recommendations": recommendations,
        "dataQuality": {
            "sources": [SOURCE, "DATA_GOV"],
            "lastUpdated": datetime.utcnow().isoformat() + "Z",
            "confidence": 0.85,
        },
    }


# ---------------------------------------------------
# Fan-out operations
# ---------------------------------------------------
async def bulk_statistics(commodities: List[str], states: Optional[List[str]] = None, years: Optional[List[int]] = None) -> List[Dict[str, Any]]:
    """
    One entry per commodity, each holding the statistics of every state.
    Any failing sub-call fails the whole batch.
    """
    states = states or ["ILLINOIS"]
    year = years[0] if years else None

    async def _for_commodity(commodity: str) -> Dict[str, Any]:
        per_state = await asyncio.gather(*[get_statistics(commodity, s, year) for s in states])
        return {"commodity": commodity, "data": [row for rows in per_state for row in rows]}

    return list(await asyncio.gather(*[_for_commodity(c) for c in commodities]))


async def comparative_analysis(compare_by: str, items: List[str], commodity: Optional[str] = None, state: Optional[str] = None) -> List[Dict[str, Any]]:
    if compare_by == "commodity":
        async def _by_commodity(item: str) -> Dict[str, Any]:
            prediction, market = await asyncio.gather(
                get_yield_prediction(item, state),
                get_market_prices(item, "weekly"),
            )
            return {"commodity": item, "prediction": prediction, "market": market}

        return list(await asyncio.gather(*[_by_commodity(i) for i in items]))

    if compare_by == "region":
        async def _by_region(item: str) -> Dict[str, Any]:
            return {"state": item, "prediction": await get_yield_prediction(commodity, item)}

        return list(await asyncio.gather(*[_by_region(i) for i in items]))

    raise ValueError(f"Unsupported compareBy: {compare_by}")
