# backend/verdanta/schemas/ai_ml.py

from typing import Any, Dict, Optional
from pydantic import BaseModel, Field, StrictBool


class _CamelModel(BaseModel):
    class Config:
        populate_by_name = True
        # model_id / model_name are domain fields, not pydantic internals
        protected_namespaces = ()


# ============================================================
# PREDICTIONS
# ============================================================

class InsightQueryRequest(_CamelModel):
    query: Optional[str] = None
    system_data: Optional[Dict[str, Any]] = Field(None, alias="systemData")


# ============================================================
# DECISION ENGINE
# ============================================================

class RuleToggleRequest(_CamelModel):
    rule_id: Optional[str] = Field(None, alias="ruleId")
    # strict so "yes" / 1 are rejected instead of coerced
    enabled: Optional[StrictBool] = None


class ActionApprovalRequest(_CamelModel):
    action_id: Optional[str] = Field(None, alias="actionId")


class ActionRejectionRequest(_CamelModel):
    action_id: Optional[str] = Field(None, alias="actionId")
    reason: Optional[str] = None


# ============================================================
# MODEL REGISTRY
# ============================================================

class ModelCreateRequest(_CamelModel):
    name: Optional[str] = None
    type: Optional[str] = None
    purpose: Optional[str] = None


class ModelActionRequest(_CamelModel):
    model_id: Optional[str] = Field(None, alias="modelId")


class TrainingJobCreateRequest(_CamelModel):
    model_id: Optional[str] = Field(None, alias="modelId")
    model_name: Optional[str] = Field(None, alias="modelName")
    training_config: Optional[Dict[str, Any]] = Field(None, alias="trainingConfig")


# ============================================================
# ENHANCED INTELLIGENCE
# ============================================================

class EnhancedIntelligenceRequest(BaseModel):
    # shapes checked in the route so errors name the field
    commodities: Optional[Any] = None
    locations: Optional[Any] = None
    analysis_type: Optional[str] = None
    time_horizon: Optional[str] = None
