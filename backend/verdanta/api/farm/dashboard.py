# backend/verdanta/api/farm/dashboard.py

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.core.auth import require_user
from verdanta.core.database import get_db
from verdanta.core.envelope import ok, failure
from verdanta.core.logger import logger
from verdanta.crud.metrics import dashboard_summary, performance_summary

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard")
async def dashboard(db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    try:
        return ok(await dashboard_summary(db))

    except Exception as exc:
        logger.exception("Dashboard API error")
        return failure("Failed to fetch dashboard data", exc)


@router.get("/performance")
async def performance(db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    try:
        return ok(await performance_summary(db))

    except Exception as exc:
        logger.exception("Performance API error")
        return failure("Failed to fetch performance data", exc)
