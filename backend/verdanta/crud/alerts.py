# backend/verdanta/crud/alerts.py

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select, case
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from verdanta.models import Alert
from verdanta.schemas.farm import AlertCreate

DEFAULT_LIMIT = 50

# severity is free text in the table; rank it for ordering
SEVERITY_ORDER = case(
    {"critical": 4, "high": 3, "medium": 2, "low": 1},
    value=Alert.severity,
    else_=0,
)


async def list_alerts(
    db: AsyncSession,
    status: str = "open",
    severity: Optional[str] = None,
    limit: int = DEFAULT_LIMIT,
) -> List[Alert]:
    """
    Most severe first, newest first within a severity.
    status="all" disables the status filter.
    """
    stmt = select(Alert).options(selectinload(Alert.device))

    if status != "all":
        stmt = stmt.where(Alert.status == status)
    if severity:
        stmt = stmt.where(Alert.severity == severity)

    stmt = stmt.order_by(SEVERITY_ORDER.desc(), Alert.created_at.desc()).limit(limit)
    result = await db.scalars(stmt)
    return result.all()


async def get_alert(db: AsyncSession, alert_id: str) -> Optional[Alert]:
    result = await db.scalars(
        select(Alert).options(selectinload(Alert.device)).where(Alert.id == alert_id)
    )
    return result.first()


async def create_alert(db: AsyncSession, payload: AlertCreate) -> Alert:
    alert = Alert(
        title=payload.title,
        description=payload.description,
        alert_type=payload.alert_type.lower(),
        severity=payload.severity.lower(),
        device_id=payload.device_id or None,
        status="open",
        created_at=datetime.utcnow(),
    )
    db.add(alert)
    await db.commit()
    return await get_alert(db, alert.id)


async def acknowledge_alert(db: AsyncSession, alert_id: str, user_id: Optional[str] = None) -> Optional[Alert]:
    alert = await get_alert(db, alert_id)
    if alert is None:
        return None

    if alert.status == "open":
        alert.status = "acknowledged"
    alert.acknowledged_at = alert.acknowledged_at or datetime.utcnow()
    if user_id and not alert.assigned_to:
        alert.assigned_to = user_id

    await db.commit()
    return await get_alert(db, alert_id)


async def resolve_alert(db: AsyncSession, alert_id: str) -> Optional[Alert]:
    alert = await get_alert(db, alert_id)
    if alert is None:
        return None

    now = datetime.utcnow()
    alert.status = "resolved"
    alert.acknowledged_at = alert.acknowledged_at or now
    alert.resolved_at = now

    await db.commit()
    return await get_alert(db, alert_id)
