# backend/verdanta/api/government_data/usda.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import InvalidParameterError, ok, failure, require_array, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.government_data import USDARequest
from verdanta.services import usda_service
from verdanta.services.query_params import (
    DEFAULT_COMMODITY,
    DEFAULT_STATE,
    parse_flag,
    parse_optional_int,
)

router = APIRouter(prefix="/government-data/usda", tags=["Government Data"])

SOURCE = "VerdantaIQ Government Data Service"
GET_ACTIONS = ("statistics", "yield-prediction", "market-prices", "intelligence-report")
POST_ACTIONS = ("bulk-statistics", "comparative-analysis")
COMPARE_BY = ("commodity", "region")


@router.get("")
async def usda_data(
    action: Optional[str] = None,
    commodity: Optional[str] = None,
    state: Optional[str] = None,
    year: Optional[str] = None,
    timeframe: Optional[str] = None,
    includeWeather: Optional[str] = None,
    includeMarket: Optional[str] = None,
):
    action = action or "statistics"
    if action not in GET_ACTIONS:
        raise InvalidParameterError(f"Invalid action. Supported actions: {', '.join(GET_ACTIONS)}")

    commodity = commodity or DEFAULT_COMMODITY
    state = state or DEFAULT_STATE
    year_value = parse_optional_int(year)

    try:
        if action == "statistics":
            data = await usda_service.get_statistics(commodity, state, year_value)
        elif action == "yield-prediction":
            data = await usda_service.get_yield_prediction(commodity, state)
        elif action == "market-prices":
            data = await usda_service.get_market_prices(commodity, timeframe or "weekly")
        else:
            data = await usda_service.get_intelligence_report(
                commodity,
                state,
                include_weather=parse_flag(includeWeather, default=True),
                include_market=parse_flag(includeMarket, default=True),
            )

        return ok(
            data,
            action=action,
            parameters={"commodity": commodity, "state": state, "year": year_value},
            source=SOURCE,
        )

    except Exception as exc:
        logger.exception("USDA API error")
        return failure("Failed to fetch USDA data", exc)


@router.post("")
async def usda_bulk(body: USDARequest):
    require_fields(action=body.action, parameters=body.parameters)
    if body.action not in POST_ACTIONS:
        raise InvalidParameterError("Invalid action for POST request")

    params = body.parameters
    if body.action == "bulk-statistics":
        require_array(params.get("commodities"), "commodities", required=True)
        require_array(params.get("states"), "states")
        require_array(params.get("years"), "years", int)
    else:
        if params.get("compareBy") not in COMPARE_BY:
            raise InvalidParameterError('Invalid compareBy value. Use "commodity" or "region"')
        require_array(params.get("items"), "items", required=True)
        for key in ("commodity", "state"):
            if params.get(key) is not None and not isinstance(params[key], str):
                raise InvalidParameterError(f"{key} must be a string")

    try:
        if body.action == "bulk-statistics":
            data = await usda_service.bulk_statistics(
                params["commodities"],
                states=params.get("states"),
                years=params.get("years"),
            )
        else:
            data = await usda_service.comparative_analysis(
                params["compareBy"],
                params["items"],
                commodity=params.get("commodity") or DEFAULT_COMMODITY,
                state=params.get("state"),
            )

        return ok(data, action=body.action, parameters=params, source=SOURCE)

    except Exception as exc:
        logger.exception("USDA POST API error")
        return failure("Failed to process USDA data request", exc)
