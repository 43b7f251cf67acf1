# backend/verdanta/api/watsonx.py

from typing import Optional

from fastapi import APIRouter, Depends

from verdanta.core.envelope import InvalidParameterError, ok, failure, require_array, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.ai_ml import EnhancedIntelligenceRequest
from verdanta.services import enhanced_intelligence
from verdanta.services.farm_health import build_farm_snapshot, system_health_report
from verdanta.services.query_params import DEFAULT_COMMODITY, DEFAULT_FARM_ID, DEFAULT_LOCATION, parse_flag
from verdanta.services.watsonx_client import WatsonxClient, get_watsonx_client

router = APIRouter(prefix="/watsonx", tags=["watsonx"])


@router.get("/health")
async def system_health(farmId: Optional[str] = None, client: WatsonxClient = Depends(get_watsonx_client)):
    """Farm health assessment, enriched by the AI service when it is configured."""
    farm_id = farmId or DEFAULT_FARM_ID

    try:
        report = await system_health_report(build_farm_snapshot(farm_id), client)
        return ok(
            report["data"],
            metadata=report["metadata"],
            insights=report["insights"],
            recommendations=report["recommendations"],
            workflows=report["workflows"],
            confidence=report["confidence"],
        )

    except Exception as exc:
        logger.exception("Watsonx health API error")
        return failure("Failed to generate system health report", exc)


# ------------------------------------------------
# ENHANCED INTELLIGENCE
# ------------------------------------------------
@router.get("/enhanced-intelligence")
async def get_enhanced_intelligence(
    commodity: Optional[str] = None,
    location: Optional[str] = None,
    includeMarketData: Optional[str] = None,
    includeWeatherData: Optional[str] = None,
    includePredictions: Optional[str] = None,
    client: WatsonxClient = Depends(get_watsonx_client),
):
    """
    Government data report for one commodity/location. When the report
    cannot be built (AI service down) a static report is served instead,
    flagged by metadata.source.
    """
    params = {
        "commodity": commodity or DEFAULT_COMMODITY,
        "location": location or DEFAULT_LOCATION,
        "includeMarketData": parse_flag(includeMarketData, default=True),
        "includeWeatherData": parse_flag(includeWeatherData, default=True),
        "includePredictions": parse_flag(includePredictions, default=True),
    }

    try:
        result = await enhanced_intelligence.get_enhanced_intelligence(
            client,
            params["commodity"],
            params["location"],
            include_market=params["includeMarketData"],
            include_weather=params["includeWeatherData"],
            include_predictions=params["includePredictions"],
        )
        return ok(
            result["data"],
            metadata={
                "confidence": result["confidence"],
                "source": "watsonx-enhanced-intelligence",
                "parameters": params,
            },
        )

    except Exception:
        logger.exception("Enhanced intelligence API error, serving fallback report")
        return ok(
            enhanced_intelligence.fallback_intelligence(params["commodity"], params["location"]),
            metadata={
                "confidence": enhanced_intelligence.BASE_CONFIDENCE,
                "source": "mock-enhanced-intelligence",
                "note": "Using mock data due to service unavailability",
                "parameters": params,
            },
        )


@router.post("/enhanced-intelligence")
async def run_enhanced_analysis(body: EnhancedIntelligenceRequest, client: WatsonxClient = Depends(get_watsonx_client)):
    require_fields(commodities=body.commodities)
    require_array(body.commodities, "commodities", required=True)
    require_array(body.locations, "locations")

    analysis_type = body.analysis_type or enhanced_intelligence.DEFAULT_ANALYSIS_TYPE
    if analysis_type not in enhanced_intelligence.ANALYSIS_TYPES:
        raise InvalidParameterError(
            f"Invalid analysis_type. Use one of: {', '.join(enhanced_intelligence.ANALYSIS_TYPES)}"
        )

    try:
        results = await enhanced_intelligence.run_analysis(
            client,
            analysis_type,
            body.commodities,
            body.locations,
            time_horizon=body.time_horizon or enhanced_intelligence.DEFAULT_TIME_HORIZON,
        )
        return ok(
            results,
            analysis_type=analysis_type,
            metadata={
                "commodities_analyzed": len(body.commodities),
                "locations_analyzed": len(body.locations) if body.locations else 1,
            },
        )

    except Exception as exc:
        logger.exception("Enhanced intelligence POST API error")
        return failure("Failed to process enhanced intelligence request", exc)
