# backend/verdanta/services/automation_service.py

from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, Any, List
import copy

from verdanta.core.logger import logger
from verdanta.services import decision_engine_service

"""
Production automation (in-memory)

Stores:
 - _status: the automation running flag plus the last control cycle time
 - _alerts: alerts raised by the automation monitors

Acknowledge/resolve always report success for a non-empty id; they mark the
alert when it exists. Nothing here is persisted.
"""

_lock = Lock()

_status: Dict[str, Any] = {}
_alerts: List[Dict[str, Any]] = []


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _seed_alerts() -> List[Dict[str, Any]]:
    now = datetime.utcnow()
    return [
        {
            "id": "alert_001",
            "type": "environmental",
            "severity": "medium",
            "title": "Temperature Above Optimal Range",
            "message": "Greenhouse temperature has exceeded 80°F for the past 30 minutes",
            "timestamp": (now - timedelta(minutes=30)).isoformat() + "Z",
            "source": "temperature-sensor-01",
            "acknowledged": False,
            "resolved": False,
            "actions": ["Increase ventilation", "Check cooling system"],
        },
        {
            "id": "alert_002",
            "type": "equipment",
            "severity": "low",
            "title": "Maintenance Due",
            "message": "Irrigation pump scheduled for maintenance within 7 days",
            "timestamp": (now - timedelta(hours=2)).isoformat() + "Z",
            "source": "maintenance-scheduler",
            "acknowledged": True,
            "resolved": False,
            "actions": ["Schedule maintenance", "Order replacement parts"],
        },
    ]


def reset_state() -> None:
    with _lock:
        _status.clear()
        _status.update({"isRunning": True, "lastCycle": _now_iso()})
        _alerts[:] = _seed_alerts()


reset_state()


# -----------------------
# Status
# -----------------------
def get_status() -> Dict[str, Any]:
    counts = decision_engine_service.rule_counts()
    with _lock:
        active = sum(1 for a in _alerts if not a["resolved"])
        return {
            "isRunning": _status["isRunning"],
            "totalRules": counts["totalRules"],
            "enabledRules": counts["enabledRules"],
            "activeAlerts": active,
            "lastCycle": _status["lastCycle"],
        }


def get_active_alerts() -> List[Dict[str, Any]]:
    with _lock:
        return [copy.deepcopy(a) for a in _alerts if not a["resolved"]]


def start() -> Dict[str, Any]:
    with _lock:
        _status["isRunning"] = True
        _status["lastCycle"] = _now_iso()
    logger.info("Automation system started", extra={"action": "start"})
    return {"message": "Automation system started", "status": get_status()}


def stop() -> Dict[str, Any]:
    with _lock:
        _status["isRunning"] = False
    logger.info("Automation system stopped", extra={"action": "stop"})
    return {"message": "Automation system stopped", "status": get_status()}


# -----------------------
# Alert handling
# -----------------------
def _mark_alert(alert_id: str, field: str) -> bool:
    with _lock:
        for alert in _alerts:
            if alert["id"] == alert_id:
                alert[field] = True
                if field == "resolved":
                    alert["acknowledged"] = True
                break
    logger.info(f"Alert {alert_id} {field}", extra={"alert_id": alert_id, "action": field})
    return True


def acknowledge_alert(alert_id: str) -> bool:
    return _mark_alert(alert_id, "acknowledged")


def resolve_alert(alert_id: str) -> bool:
    return _mark_alert(alert_id, "resolved")
