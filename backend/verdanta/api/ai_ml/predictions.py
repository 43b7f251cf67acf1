# backend/verdanta/api/ai_ml/predictions.py

from typing import Optional

from fastapi import APIRouter, Depends

from verdanta.core.envelope import ok, failure, require_fields, utc_timestamp
from verdanta.core.logger import logger
from verdanta.schemas.ai_ml import InsightQueryRequest
from verdanta.services import prediction_service
from verdanta.services.query_params import (
    DEFAULT_CROP_TYPE,
    DEFAULT_FARM_ID,
    DEFAULT_FORECAST_LOCATION,
    DEFAULT_MARKET_CROPS,
    normalize_timeframe,
    split_csv,
)
from verdanta.services.watsonx_client import WatsonxClient, get_watsonx_client

router = APIRouter(prefix="/ai-ml/predictions", tags=["AI/ML Predictions"])

MARKET_MODEL = "Market Analysis AI v2.0"
PEST_MODEL = "Pest Detection Classifier v1.8"
WEATHER_MODEL = "Weather Prediction Model v4.1"
YIELD_MODEL = "Tomato Yield Predictor v2.1"


# ============================================================
# INSIGHTS
# ============================================================

@router.get("/insights")
async def predictive_insights(
    timeframe: Optional[str] = None,
    type: Optional[str] = None,
    impact: Optional[str] = None,
):
    timeframe = normalize_timeframe(timeframe)
    try:
        insights = prediction_service.get_insights(timeframe, insight_type=type, impact=impact)
        return ok(insights, metadata={"timeframe": timeframe, "total": len(insights)})

    except Exception as exc:
        logger.exception("Predictive insights API error")
        return failure("Failed to fetch predictive insights", exc)


@router.post("/insights")
async def query_insights(body: InsightQueryRequest, client: WatsonxClient = Depends(get_watsonx_client)):
    require_fields(query=body.query)

    try:
        result = await client.handle_query(body.query, body.system_data)
        if not result.get("success"):
            return failure(result.get("error") or "Query processing failed", status_code=503)

        return ok(
            result.get("data"),
            insights=result.get("insights", []),
            recommendations=result.get("recommendations", []),
            workflows=result.get("workflows", []),
            confidence=result.get("confidence"),
        )

    except Exception as exc:
        logger.exception("Insight query API error")
        return failure("Query processing failed", exc)


# ============================================================
# MARKET
# ============================================================

@router.get("/market")
async def market_predictions(
    timeframe: Optional[str] = None,
    crops: Optional[str] = None,
    crop: Optional[str] = None,
):
    timeframe = normalize_timeframe(timeframe)
    crop_list = split_csv(crops, DEFAULT_MARKET_CROPS)

    try:
        predictions = prediction_service.get_market_predictions(timeframe, crop_list, crop_filter=crop)
        return ok(
            predictions,
            metadata={
                "timeframe": timeframe,
                "model": MARKET_MODEL,
                "lastUpdated": utc_timestamp(),
                "dataSource": "USDA Market Data + ML Analysis",
                "totalPredictions": len(predictions),
            },
        )

    except Exception as exc:
        logger.exception("Market predictions API error")
        return failure("Failed to fetch market predictions", exc)


# ============================================================
# PEST RISK
# ============================================================

@router.get("/pest-risk")
async def pest_risk(
    timeframe: Optional[str] = None,
    cropType: Optional[str] = None,
    risk_level: Optional[str] = None,
    crop: Optional[str] = None,
):
    timeframe = normalize_timeframe(timeframe)
    crop_type = cropType or DEFAULT_CROP_TYPE

    try:
        risks = prediction_service.get_pest_risk(timeframe, crop_type, risk_level=risk_level, crop_filter=crop)
        return ok(
            risks,
            metadata={
                "timeframe": timeframe,
                "cropType": crop_type,
                "model": PEST_MODEL,
                "lastUpdated": utc_timestamp(),
                "totalRisks": len(risks),
            },
        )

    except Exception as exc:
        logger.exception("Pest risk API error")
        return failure("Failed to fetch pest risk assessment", exc)


# ============================================================
# WEATHER
# ============================================================

@router.get("/weather")
async def weather_forecast(timeframe: Optional[str] = None, location: Optional[str] = None):
    timeframe = normalize_timeframe(timeframe)
    location = location or DEFAULT_FORECAST_LOCATION

    try:
        forecast = prediction_service.get_weather_forecast(timeframe)
        return ok(
            forecast,
            metadata={
                "timeframe": timeframe,
                "location": location,
                "model": WEATHER_MODEL,
                "lastUpdated": utc_timestamp(),
                "dataSource": "NOAA + ML Enhancement",
            },
        )

    except Exception as exc:
        logger.exception("Weather forecast API error")
        return failure("Failed to fetch weather forecast", exc)


# ============================================================
# YIELD
# ============================================================

@router.get("/yield")
async def yield_predictions(
    timeframe: Optional[str] = None,
    farmId: Optional[str] = None,
    cropType: Optional[str] = None,
    client: WatsonxClient = Depends(get_watsonx_client),
):
    timeframe = normalize_timeframe(timeframe)
    farm_id = farmId or DEFAULT_FARM_ID
    crop_type = cropType or DEFAULT_CROP_TYPE

    try:
        forecast = await prediction_service.get_yield_forecast(client, timeframe, farm_id, crop_type)
        return ok(
            forecast["series"],
            metadata={
                "timeframe": timeframe,
                "farmId": farm_id,
                "cropType": crop_type,
                "model": YIELD_MODEL,
                "lastUpdated": utc_timestamp(),
                "confidence": forecast["confidence"],
                "insights": forecast["insights"],
                "recommendations": forecast["recommendations"],
            },
        )

    except Exception as exc:
        logger.exception("Yield predictions API error")
        return failure("Failed to fetch yield predictions", exc)
