# backend/verdanta/services/decision_engine_service.py

from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, Any, List, Optional
import copy

"""
Decision engine (in-memory)

Stores:
 - _rules: rule_id -> decision rule
 - _actions: pending automated actions awaiting approval or auto-execution
 - _decisions: recent rule firings with their outcome

Rule toggles mutate _rules and survive until restart. Approve/reject do not
remove the action from _actions; they return the execution/rejection record.
"""

_lock = Lock()

_rules: Dict[str, Dict[str, Any]] = {}
_actions: List[Dict[str, Any]] = []
_decisions: List[Dict[str, Any]] = []


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _ago(**delta) -> str:
    return (datetime.utcnow() - timedelta(**delta)).isoformat() + "Z"


# -----------------------
# Seed data
# -----------------------
def _seed_rules() -> List[Dict[str, Any]]:
    return [
        {
            "id": "rule_001",
            "name": "High Temperature Irrigation",
            "category": "irrigation",
            "condition": "Temperature > 80°F AND Soil Moisture < 40%",
            "action": "Activate irrigation system for 15 minutes",
            "priority": "high",
            "enabled": True,
            "confidence_threshold": 85,
            "last_triggered": _ago(hours=4),
            "trigger_count": 23,
        },
        {
            "id": "rule_002",
            "name": "Pest Alert Response",
            "category": "pest_control",
            "condition": "Pest Detection Confidence > 80% AND Risk Level = HIGH",
            "action": "Send alert to farm manager and activate IPM protocol",
            "priority": "critical",
            "enabled": True,
            "confidence_threshold": 80,
            "last_triggered": _ago(days=2),
            "trigger_count": 7,
        },
        {
            "id": "rule_003",
            "name": "Climate Control Optimization",
            "category": "climate",
            "condition": "Humidity < 50% AND Temperature > 75°F",
            "action": "Increase misting system and adjust ventilation",
            "priority": "medium",
            "enabled": True,
            "confidence_threshold": 75,
            "last_triggered": _ago(hours=6),
            "trigger_count": 45,
        },
        {
            "id": "rule_004",
            "name": "Harvest Timing Alert",
            "category": "harvesting",
            "condition": "Yield Maturity > 90% AND Market Price Favorable",
            "action": "Schedule harvest within 24-48 hours",
            "priority": "high",
            "enabled": True,
            "confidence_threshold": 90,
            "last_triggered": _ago(days=3),
            "trigger_count": 12,
        },
        {
            # disabled for maintenance
            "id": "rule_005",
            "name": "Nutrient Deficiency Response",
            "category": "nutrition",
            "condition": "pH < 6.0 OR Nitrogen Level < 150ppm",
            "action": "Adjust nutrient solution and schedule soil amendment",
            "priority": "medium",
            "enabled": False,
            "confidence_threshold": 70,
            "last_triggered": None,
            "trigger_count": 8,
        },
    ]


def _seed_actions() -> List[Dict[str, Any]]:
    return [
        {
            "id": "action_001",
            "type": "irrigation",
            "description": "Emergency irrigation activation for heat stress prevention",
            "parameters": {
                "zones": ["North Greenhouse Zone 1", "North Greenhouse Zone 2"],
                "duration": 20,
                "intensity": "high",
                "trigger_temp": 85,
            },
            "estimated_impact": "Prevent heat stress on 150+ plants, improve yield by ~8%",
            "safety_checks": [
                "Water pressure within normal limits",
                "No electrical hazards detected",
                "Drainage systems functioning properly",
                "No conflicting operations scheduled",
            ],
            "requires_approval": True,
        },
        {
            "id": "action_002",
            "type": "climate_control",
            "description": "Automated ventilation adjustment for CO₂ optimization",
            "parameters": {
                "fan_speed_increase": 25,
                "duration": 45,
                "target_co2": 800,
                "affected_zones": ["South Production Area"],
            },
            "estimated_impact": "Optimize CO₂ levels for photosynthesis, increase growth rate by 12%",
            "safety_checks": [
                "Fans operational and within safe RPM range",
                "No maintenance scheduled for ventilation systems",
                "Temperature differential acceptable",
                "Air quality sensors functioning",
            ],
            "requires_approval": False,
        },
        {
            "id": "action_003",
            "type": "nutrition",
            "description": "Automated nutrient solution adjustment for pH correction",
            "parameters": {
                "ph_target": 6.2,
                "nutrient_adjustment": {
                    "nitrogen": "+50ppm",
                    "phosphorus": "+10ppm",
                    "potassium": "maintain",
                },
                "affected_systems": ["Hydroponic System A", "Hydroponic System B"],
            },
            "estimated_impact": "Correct pH imbalance, improve nutrient uptake efficiency by 15%",
            "safety_checks": [
                "Nutrient concentrations within safe ranges",
                "pH adjustment chemicals available",
                "Mixing systems operational",
                "No plant sensitivity alerts",
            ],
            "requires_approval": True,
        },
    ]


def _seed_decisions() -> List[Dict[str, Any]]:
    return [
        {
            "id": "decision_001",
            "rule_id": "rule_001",
            "rule_name": "High Temperature Irrigation",
            "decision": "Activate irrigation for North Greenhouse Zone 2",
            "action_taken": "Irrigation system activated for 15 minutes",
            "confidence": 92,
            "data_inputs": {"temperature": 82.3, "soil_moisture": 35.2, "humidity": 45.8, "zone": "North Greenhouse Zone 2"},
            "timestamp": _ago(minutes=45),
            "status": "executed",
            "result": "Soil moisture increased to 52%. Plants showing improved hydration.",
        },
        {
            "id": "decision_002",
            "rule_id": "rule_003",
            "rule_name": "Climate Control Optimization",
            "decision": "Adjust climate controls for optimal growing conditions",
            "action_taken": "Increased misting frequency and adjusted ventilation",
            "confidence": 87,
            "data_inputs": {"temperature": 78.1, "humidity": 47.2, "co2_level": 420, "zone": "South Production Area"},
            "timestamp": _ago(hours=2),
            "status": "executed",
            "result": "Humidity stabilized at 62%. Temperature maintained at 76°F.",
        },
        {
            "id": "decision_003",
            "rule_id": "rule_002",
            "rule_name": "Pest Alert Response",
            "decision": "High confidence pest detection requires immediate attention",
            "action_taken": "Alert sent to farm manager, IPM protocol initiated",
            "confidence": 94,
            "data_inputs": {"pest_type": "whiteflies", "confidence": 94, "affected_plants": 23, "zone": "East Greenhouse"},
            "timestamp": _ago(hours=6),
            "status": "executed",
            "result": "Manager responded within 30 minutes. Treatment applied to affected area.",
        },
        {
            "id": "decision_004",
            "rule_id": "rule_004",
            "rule_name": "Harvest Timing Alert",
            "decision": "Optimal harvest window detected for tomatoes",
            "action_taken": "Harvest scheduling notification sent to operations team",
            "confidence": 96,
            "data_inputs": {"maturity_level": 92, "market_price": 4.25, "price_trend": "increasing", "crop": "tomatoes"},
            "timestamp": _ago(hours=8),
            "status": "pending",
            "result": "Awaiting harvest team availability confirmation.",
        },
        {
            "id": "decision_005",
            "rule_id": "rule_001",
            "rule_name": "High Temperature Irrigation",
            "decision": "Emergency irrigation required due to extreme conditions",
            "action_taken": "Extended irrigation cycle activated",
            "confidence": 98,
            "data_inputs": {"temperature": 89.5, "soil_moisture": 28.1, "heat_index": 95, "zone": "Outdoor Growing Area B"},
            "timestamp": _ago(hours=12),
            "status": "failed",
            "result": "Irrigation system malfunction detected. Manual intervention required.",
        },
    ]


def reset_store() -> None:
    """Restore the seeded rules, actions and decisions."""
    with _lock:
        _rules.clear()
        for rule in _seed_rules():
            _rules[rule["id"]] = rule
        _actions[:] = _seed_actions()
        _decisions[:] = _seed_decisions()


reset_store()


# -----------------------
# Rules
# -----------------------
def list_rules(category: Optional[str] = None, enabled: Optional[bool] = None) -> List[Dict[str, Any]]:
    with _lock:
        items = [copy.deepcopy(r) for r in _rules.values()]
    if category:
        items = [r for r in items if r["category"] == category]
    if enabled is not None:
        items = [r for r in items if r["enabled"] is enabled]
    return items


def rule_counts() -> Dict[str, int]:
    with _lock:
        total = len(_rules)
        enabled = sum(1 for r in _rules.values() if r["enabled"])
    return {"totalRules": total, "enabledRules": enabled}


def toggle_rule(rule_id: str, enabled: bool) -> Dict[str, Any]:
    """
    Sets the enabled flag of a known rule. Unknown ids are echoed back
    without touching the store.
    """
    with _lock:
        rule = _rules.get(rule_id)
        if rule is not None:
            rule["enabled"] = enabled
    return {"ruleId": rule_id, "enabled": enabled, "updatedAt": _now_iso()}


# -----------------------
# Pending actions
# -----------------------
def list_actions(action_type: Optional[str] = None, requires_approval: Optional[bool] = None) -> Dict[str, Any]:
    with _lock:
        items = copy.deepcopy(_actions)
    if action_type:
        items = [a for a in items if a["type"] == action_type]
    if requires_approval is not None:
        items = [a for a in items if a["requires_approval"] is requires_approval]

    pending = sum(1 for a in items if a["requires_approval"])
    return {
        "actions": items,
        "metadata": {
            "total": len(items),
            "pending_approval": pending,
            "auto_executable": len(items) - pending,
        },
    }


def approve_action(action_id: str, approved_by: str = "current_user") -> Dict[str, Any]:
    return {
        "actionId": action_id,
        "status": "approved_and_executed",
        "executedAt": _now_iso(),
        "executedBy": approved_by,
        "result": "Action executed successfully",
        "impactMeasured": {
            "immediate": "System parameters adjusted as planned",
            "estimated": "Expected improvements will be visible within 30-60 minutes",
        },
    }


def reject_action(action_id: str, reason: Optional[str] = None, rejected_by: str = "current_user") -> Dict[str, Any]:
    return {
        "actionId": action_id,
        "status": "rejected",
        "rejectedAt": _now_iso(),
        "rejectedBy": rejected_by,
        "reason": reason or "Manual override by user",
        "alternativeSuggested": False,
    }


# -----------------------
# Recent decisions
# -----------------------
def list_decisions(status: Optional[str] = None, rule_id: Optional[str] = None, limit: int = 10) -> List[Dict[str, Any]]:
    with _lock:
        items = copy.deepcopy(_decisions)
    if status:
        items = [d for d in items if d["status"] == status]
    if rule_id:
        items = [d for d in items if d["rule_id"] == rule_id]

    # ISO timestamps with a fixed format sort chronologically as strings
    items.sort(key=lambda d: d["timestamp"], reverse=True)
    return items[:max(0, limit)]
