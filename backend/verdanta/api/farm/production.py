# backend/verdanta/api/farm/production.py

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.core.auth import require_user
from verdanta.core.database import get_db
from verdanta.core.envelope import ok, failure
from verdanta.core.logger import logger
from verdanta.crud.production import production_report
from verdanta.services.query_params import MAX_FORECAST_DAYS, parse_int

router = APIRouter(prefix="/production", tags=["Production"])

DEFAULT_DAYS = 30


@router.get("")
async def production(days: Optional[str] = None, db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    days_value = parse_int(days, DEFAULT_DAYS, minimum=1, maximum=MAX_FORECAST_DAYS)

    try:
        report = await production_report(db, days_value)
        return ok(report, metadata={"days": days_value})

    except Exception as exc:
        logger.exception("Production API error")
        return failure("Failed to fetch production data", exc)
