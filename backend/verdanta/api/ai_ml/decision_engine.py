# backend/verdanta/api/ai_ml/decision_engine.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import ok, failure, require_fields, utc_timestamp
from verdanta.core.logger import logger
from verdanta.core.utils_logging import log_user_action
from verdanta.schemas.ai_ml import ActionApprovalRequest, ActionRejectionRequest, RuleToggleRequest
from verdanta.services import decision_engine_service
from verdanta.services.query_params import parse_int, parse_optional_flag

router = APIRouter(prefix="/ai-ml/decision-engine", tags=["Decision Engine"])

DEFAULT_DECISION_LIMIT = 10
OPERATOR = "current_user"


# -----------------------
# Rules
# -----------------------
@router.get("/rules")
async def decision_rules(category: Optional[str] = None, enabled: Optional[str] = None):
    try:
        rules = decision_engine_service.list_rules(category, parse_optional_flag(enabled))
        return ok(rules, metadata={"total": len(rules), "enabled": sum(1 for r in rules if r["enabled"])})

    except Exception as exc:
        logger.exception("Decision rules API error")
        return failure("Failed to fetch decision rules", exc)


@router.post("/rules/toggle")
async def toggle_rule(body: RuleToggleRequest):
    require_fields(ruleId=body.rule_id, enabled=body.enabled)

    try:
        result = decision_engine_service.toggle_rule(body.rule_id, body.enabled)
        log_user_action(OPERATOR, "rule_toggled", f"{body.rule_id} enabled={body.enabled}")
        state = "enabled" if body.enabled else "disabled"
        return ok(result, message=f"Rule {body.rule_id} {state} successfully")

    except Exception as exc:
        logger.exception("Rule toggle API error")
        return failure("Failed to toggle rule", exc)


# -----------------------
# Pending actions
# -----------------------
@router.get("/actions")
async def pending_actions(type: Optional[str] = None, requires_approval: Optional[str] = None):
    try:
        result = decision_engine_service.list_actions(type, parse_optional_flag(requires_approval))
        return ok(result["actions"], metadata=result["metadata"])

    except Exception as exc:
        logger.exception("Pending actions API error")
        return failure("Failed to fetch pending actions", exc)


@router.post("/actions/approve")
async def approve_action(body: ActionApprovalRequest):
    require_fields(actionId=body.action_id)

    try:
        result = decision_engine_service.approve_action(body.action_id, approved_by=OPERATOR)
        log_user_action(OPERATOR, "action_approved", body.action_id)
        return ok(result, message=f"Action {body.action_id} approved and executed successfully")

    except Exception as exc:
        logger.exception("Action approval API error")
        return failure("Failed to approve action", exc)


@router.post("/actions/reject")
async def reject_action(body: ActionRejectionRequest):
    require_fields(actionId=body.action_id)

    try:
        result = decision_engine_service.reject_action(body.action_id, reason=body.reason, rejected_by=OPERATOR)
        log_user_action(OPERATOR, "action_rejected", f"{body.action_id}: {result['reason']}")
        return ok(result, message=f"Action {body.action_id} rejected successfully")

    except Exception as exc:
        logger.exception("Action rejection API error")
        return failure("Failed to reject action", exc)


# -----------------------
# Recent decisions
# -----------------------
@router.get("/decisions")
async def recent_decisions(status: Optional[str] = None, rule_id: Optional[str] = None, limit: Optional[str] = None):
    limit_value = parse_int(limit, DEFAULT_DECISION_LIMIT)

    try:
        decisions = decision_engine_service.list_decisions(status, rule_id, limit_value)
        return ok(
            decisions,
            metadata={"total": len(decisions), "limit": limit_value, "lastUpdated": utc_timestamp()},
        )

    except Exception as exc:
        logger.exception("Recent decisions API error")
        return failure("Failed to fetch recent decisions", exc)
