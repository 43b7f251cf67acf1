# backend/verdanta/crud/vermiculture.py

from datetime import datetime
from typing import Any, Dict, List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from verdanta.crud.serializers import maintenance_to_dict, production_to_dict, system_to_dict
from verdanta.models import VermicultureSystem
from verdanta.schemas.farm import VermicultureSystemCreate

RECENT_PRODUCTIONS = 5
RECENT_MAINTENANCE = 3


async def list_systems(db: AsyncSession) -> List[Dict[str, Any]]:
    systems = (await db.scalars(
        select(VermicultureSystem)
        .options(
            selectinload(VermicultureSystem.productions),
            selectinload(VermicultureSystem.maintenance_logs),
        )
        .order_by(VermicultureSystem.updated_at.desc())
    )).all()

    out = []
    for s in systems:
        row = system_to_dict(s)
        productions = sorted(s.productions, key=lambda p: p.start_date or datetime.min, reverse=True)
        logs = sorted(s.maintenance_logs, key=lambda m: m.created_at or datetime.min, reverse=True)
        row["recentProductions"] = [production_to_dict(p) for p in productions[:RECENT_PRODUCTIONS]]
        row["recentMaintenance"] = [maintenance_to_dict(m) for m in logs[:RECENT_MAINTENANCE]]
        out.append(row)
    return out


async def create_system(db: AsyncSession, payload: VermicultureSystemCreate) -> VermicultureSystem:
    now = datetime.utcnow()
    system = VermicultureSystem(
        name=payload.name,
        location=payload.location,
        capacity=payload.capacity,
        current_load=0,
        status="optimal",
        created_at=now,
        updated_at=now,
    )
    db.add(system)
    await db.commit()
    await db.refresh(system)
    return system
