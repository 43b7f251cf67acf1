# backend/verdanta/api/farm/alerts.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from verdanta.core.auth import require_user
from verdanta.core.database import get_db
from verdanta.core.envelope import InvalidParameterError, ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.core.utils_logging import log_user_action
from verdanta.crud import alerts as alert_crud
from verdanta.crud.serializers import alert_to_dict
from verdanta.schemas.farm import AlertCreate
from verdanta.services.query_params import normalize_label, parse_int
from verdanta.services.summary import SEVERITIES

router = APIRouter(prefix="/alerts", tags=["Alerts"])


def _user_id(user: dict) -> str:
    return str(user.get("sub") or user.get("user_id") or "unknown")


@router.get("")
async def list_alerts(
    status: Optional[str] = None,
    severity: Optional[str] = None,
    limit: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_user),
):
    status_value = normalize_label(status) or "open"
    limit_value = parse_int(limit, alert_crud.DEFAULT_LIMIT, minimum=1)

    try:
        alerts = await alert_crud.list_alerts(db, status_value, normalize_label(severity), limit_value)
        return ok([alert_to_dict(a) for a in alerts], metadata={"total": len(alerts), "status": status_value})

    except Exception as exc:
        logger.exception("Alerts API error")
        return failure("Failed to fetch alerts", exc)


@router.post("")
async def create_alert(body: AlertCreate, db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    require_fields(
        title=body.title,
        description=body.description,
        alertType=body.alert_type,
        severity=body.severity,
    )
    if body.severity.lower() not in SEVERITIES:
        raise InvalidParameterError(f"Invalid severity. Supported: {', '.join(SEVERITIES)}")

    try:
        alert = await alert_crud.create_alert(db, body)
        log_user_action(_user_id(user), "alert_created", alert.id)
        return ok(alert_to_dict(alert))

    except Exception as exc:
        logger.exception("Alert creation error")
        return failure("Failed to create alert", exc)


@router.post("/{alert_id}/acknowledge")
async def acknowledge_alert(alert_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    try:
        alert = await alert_crud.acknowledge_alert(db, alert_id, _user_id(user))
    except Exception as exc:
        logger.exception("Alert acknowledge error")
        return failure("Failed to acknowledge alert", exc)

    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")

    log_user_action(_user_id(user), "alert_acknowledged", alert_id)
    return ok(alert_to_dict(alert), message="Alert acknowledged")


@router.post("/{alert_id}/resolve")
async def resolve_alert(alert_id: str, db: AsyncSession = Depends(get_db), user=Depends(require_user)):
    try:
        alert = await alert_crud.resolve_alert(db, alert_id)
    except Exception as exc:
        logger.exception("Alert resolve error")
        return failure("Failed to resolve alert", exc)

    if alert is None:
        raise HTTPException(status_code=404, detail="Alert not found")

    log_user_action(_user_id(user), "alert_resolved", alert_id)
    return ok(alert_to_dict(alert), message="Alert resolved")
