# backend/verdanta/api/automation.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import InvalidParameterError, ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.automation import AutomationActionRequest
from verdanta.services import automation_service
from verdanta.services.summary import summarize_alerts

router = APIRouter(prefix="/automation", tags=["Automation"])

GET_ACTIONS = ("status", "alerts", "start", "stop")
POST_ACTIONS = ("acknowledge_alert", "resolve_alert")


@router.get("/status")
async def automation_status(action: Optional[str] = None):
    """
    action=status  -> automation state + active alerts + summary
    action=alerts  -> active alerts + summary
    action=start / stop -> flips the running flag
    """
    action = action or "status"
    if action not in GET_ACTIONS:
        raise InvalidParameterError(f"Invalid action. Supported: {', '.join(GET_ACTIONS)}")

    try:
        if action in ("status", "alerts"):
            alerts = automation_service.get_active_alerts()
            data = {"alerts": alerts, "summary": summarize_alerts(alerts)}
            if action == "status":
                data = {
                    "automation": automation_service.get_status(),
                    "alerts": {"active": alerts, "summary": data["summary"]},
                }
        elif action == "start":
            data = automation_service.start()
        else:
            data = automation_service.stop()

        return ok(data, action=action)

    except Exception as exc:
        logger.exception("Automation status API error")
        return failure("Failed to get automation status", exc)


@router.post("/status")
async def automation_action(body: AutomationActionRequest):
    if body.action not in POST_ACTIONS:
        raise InvalidParameterError(f"Invalid action. Supported: {', '.join(POST_ACTIONS)}")
    require_fields(alertId=body.alert_id)

    try:
        if body.action == "acknowledge_alert":
            result = automation_service.acknowledge_alert(body.alert_id)
        else:
            result = automation_service.resolve_alert(body.alert_id)

        return ok(
            {"alertId": body.alert_id, "result": result},
            message="Action completed successfully" if result else "Action failed",
            action=body.action,
        )

    except Exception as exc:
        logger.exception("Automation POST API error")
        return failure("Failed to process automation action", exc)
