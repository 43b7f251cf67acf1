# backend/verdanta/crud/production.py

from datetime import datetime, timedelta
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from verdanta.crud.serializers import iso, production_to_dict
from verdanta.models import PlantYield, VermicultureProduction

QUALITY_SCORES = {"A": 90, "B": 75}
DEFAULT_QUALITY_SCORE = 60
# used when no batch has a grade yet
BASELINE_QUALITY_SCORE = 85


def _quality_score(quality: str) -> int:
    return QUALITY_SCORES.get(quality.upper(), DEFAULT_QUALITY_SCORE)


async def production_report(db: AsyncSession, days: int = 30) -> Dict[str, Any]:
    start = datetime.utcnow() - timedelta(days=days)

    productions: List[VermicultureProduction] = (await db.scalars(
        select(VermicultureProduction)
        .options(selectinload(VermicultureProduction.system))
        .where(VermicultureProduction.start_date >= start)
        .order_by(VermicultureProduction.start_date.desc())
    )).all()

    yields: List[PlantYield] = (await db.scalars(
        select(PlantYield)
        .options(selectinload(PlantYield.plant_system))
        .where(PlantYield.harvest_date >= start)
        .order_by(PlantYield.harvest_date.desc())
    )).all()

    vermi_total = sum((p.actual_yield if p.actual_yield is not None else p.expected_yield) or 0 for p in productions)
    plant_total = sum(y.quantity or 0 for y in yields)

    graded = [p.quality for p in productions if p.quality]
    avg_quality = sum(_quality_score(q) for q in graded) / len(graded) if graded else BASELINE_QUALITY_SCORE

    batches = []
    for p in productions:
        row = production_to_dict(p)
        row["systemName"] = p.system.name if p.system else None
        row["systemLocation"] = p.system.location if p.system else None
        row["efficiency"] = (
            round(p.actual_yield / p.expected_yield * 100)
            if p.actual_yield and p.expected_yield else None
        )
        batches.append(row)

    harvests = [
        {
            "id": y.id,
            "systemName": y.plant_system.name if y.plant_system else None,
            "cropType": y.plant_system.crop_type if y.plant_system else None,
            "location": y.plant_system.location if y.plant_system else None,
            "harvestDate": iso(y.harvest_date),
            "quantity": y.quantity,
            "quality": y.quality,
        }
        for y in yields
    ]

    return {
        "metrics": {
            "totalProduction": round(vermi_total + plant_total, 2),
            "vermicultureYield": round(vermi_total, 2),
            "plantYield": round(plant_total, 2),
            "avgQualityScore": round(avg_quality),
            "totalBatches": len(productions),
            "totalHarvests": len(yields),
        },
        "vermicultureProductions": batches,
        "plantYields": harvests,
    }
