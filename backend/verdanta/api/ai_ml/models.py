# backend/verdanta/api/ai_ml/models.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.ai_ml import ModelActionRequest, ModelCreateRequest
from verdanta.services import model_registry_service

router = APIRouter(prefix="/ai-ml/models", tags=["ML Models"])


@router.get("")
async def list_models(status: Optional[str] = None, type: Optional[str] = None):
    try:
        models = model_registry_service.list_models(status, type)
        return ok(models, metadata={"total": len(models)})

    except Exception as exc:
        logger.exception("ML models API error")
        return failure("Failed to fetch ML models", exc)


@router.post("")
async def create_model(body: ModelCreateRequest):
    require_fields(name=body.name, type=body.type, purpose=body.purpose)

    try:
        model = model_registry_service.create_model(body.name, body.type, body.purpose)
        logger.info(f"ML model created: {model['id']}", extra={"action": "model_created"})
        return ok(model, message="Model created successfully")

    except Exception as exc:
        logger.exception("ML model creation error")
        return failure("Failed to create ML model", exc)


@router.post("/train")
async def train_model(body: ModelActionRequest):
    require_fields(modelId=body.model_id)

    try:
        job = model_registry_service.train_model(body.model_id)
        logger.info(f"Training queued for {body.model_id}", extra={"action": "model_train"})
        return ok(job, message=job["message"])

    except Exception as exc:
        logger.exception("Model training error")
        return failure("Failed to start model training", exc)


@router.post("/deploy")
async def deploy_model(body: ModelActionRequest):
    require_fields(modelId=body.model_id)

    try:
        deployment = model_registry_service.deploy_model(body.model_id)
        logger.info(f"Deployment initiated for {body.model_id}", extra={"action": "model_deploy"})
        return ok(deployment, message=deployment["message"])

    except Exception as exc:
        logger.exception("Model deployment error")
        return failure("Failed to deploy model", exc)
