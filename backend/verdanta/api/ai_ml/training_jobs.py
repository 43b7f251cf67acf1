# backend/verdanta/api/ai_ml/training_jobs.py

from typing import Optional

from fastapi import APIRouter

from verdanta.core.envelope import ok, failure, require_fields
from verdanta.core.logger import logger
from verdanta.schemas.ai_ml import TrainingJobCreateRequest
from verdanta.services import model_registry_service

router = APIRouter(prefix="/ai-ml/training-jobs", tags=["ML Models"])


@router.get("")
async def list_training_jobs(status: Optional[str] = None, modelId: Optional[str] = None):
    try:
        jobs = model_registry_service.list_training_jobs(status, modelId)
        return ok(
            jobs,
            metadata={
                "total": len(jobs),
                "running": sum(1 for j in jobs if j["status"] == "running"),
                "queued": sum(1 for j in jobs if j["status"] == "queued"),
            },
        )

    except Exception as exc:
        logger.exception("Training jobs API error")
        return failure("Failed to fetch training jobs", exc)


@router.post("")
async def create_training_job(body: TrainingJobCreateRequest):
    require_fields(modelId=body.model_id, modelName=body.model_name)

    try:
        job = model_registry_service.create_training_job(body.model_id, body.model_name, body.training_config)
        return ok(job, message="Training job created successfully")

    except Exception as exc:
        logger.exception("Training job creation error")
        return failure("Failed to create training job", exc)
