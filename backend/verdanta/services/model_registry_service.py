# backend/verdanta/services/model_registry_service.py

from collections import deque
from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, Any, List, Optional
import copy
import random
import uuid

"""
ML model registry (in-memory)

Stores:
 - _models: model_id -> model record {status, accuracy, version, performance, ...}
   (created models beyond MAX_CREATED_MODELS evict the oldest created one)
 - _jobs: training jobs, newest appended last (bounded; oldest dropped first)

Model status values: training | ready | active
Job status values: queued | running | completed | failed

Training and deployment are only queued here; the returned records keep
their initial status until the ML platform reports back.
"""

_lock = Lock()

MAX_JOBS = 200
MAX_CREATED_MODELS = 100

_models: Dict[str, Dict[str, Any]] = {}
_jobs: deque = deque(maxlen=MAX_JOBS)
_created_ids: deque = deque()

DEPLOY_ENDPOINT = "https://api.verdanta-iq.com/ml/models/{model_id}/predict"
DEFAULT_EPOCHS = 50


def _now_iso() -> str:
    return datetime.utcnow().isoformat() + "Z"


def _uid(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


def _empty_performance() -> Dict[str, float]:
    return {"accuracy": 0, "precision": 0, "recall": 0, "f1Score": 0}


def _seed_models() -> List[Dict[str, Any]]:
    return [
        {
            "id": "model_001",
            "name": "Tomato Yield Predictor",
            "type": "regression",
            "purpose": "yield_prediction",
            "status": "active",
            "accuracy": 87.5,
            "lastTrained": "2024-09-20T00:00:00Z",
            "trainingData": 15420,
            "version": "v2.1",
            "predictions": 2847,
            "performance": {"accuracy": 87.5, "precision": 89.2, "recall": 85.8, "f1Score": 87.5},
        },
        {
            "id": "model_002",
            "name": "Pest Detection Classifier",
            "type": "classification",
            "purpose": "pest_detection",
            "status": "ready",
            "accuracy": 93.1,
            "lastTrained": "2024-09-22T00:00:00Z",
            "trainingData": 8950,
            "version": "v1.8",
            "predictions": 1203,
            "performance": {"accuracy": 93.1, "precision": 91.7, "recall": 94.5, "f1Score": 93.1},
        },
        {
            "id": "model_003",
            "name": "Soil Analysis Optimizer",
            "type": "clustering",
            "purpose": "soil_analysis",
            "status": "training",
            "accuracy": 0,
            "lastTrained": "2024-09-25T00:00:00Z",
            "trainingData": 5240,
            "version": "v1.0",
            "predictions": 0,
            "performance": _empty_performance(),
        },
    ]


def _seed_jobs() -> List[Dict[str, Any]]:
    now = datetime.utcnow()
    return [
        {
            "id": "job_001",
            "modelId": "model_001",
            "modelName": "Tomato Yield Predictor",
            "status": "running",
            "progress": 67,
            "startTime": (now - timedelta(minutes=45)).isoformat() + "Z",
            "dataSize": 15420,
            "epochs": 50,
            "currentEpoch": 34,
            "metrics": {"loss": 0.0245, "accuracy": 87.5, "valLoss": 0.0312, "valAccuracy": 85.2},
        },
        {
            "id": "job_002",
            "modelId": "model_003",
            "modelName": "Soil Analysis Optimizer",
            "status": "queued",
            "progress": 0,
            "startTime": now.isoformat() + "Z",
            "dataSize": 5240,
            "epochs": 30,
            "currentEpoch": 0,
        },
        {
            "id": "job_003",
            "modelId": "model_002",
            "modelName": "Pest Detection Classifier",
            "status": "completed",
            "progress": 100,
            "startTime": (now - timedelta(hours=2)).isoformat() + "Z",
            "endTime": (now - timedelta(minutes=30)).isoformat() + "Z",
            "dataSize": 8950,
            "epochs": 40,
            "currentEpoch": 40,
            "metrics": {"loss": 0.0156, "accuracy": 93.1, "valLoss": 0.0189, "valAccuracy": 91.7},
        },
    ]


def reset_store() -> None:
    with _lock:
        _models.clear()
        _created_ids.clear()
        for m in _seed_models():
            _models[m["id"]] = m
        _jobs.clear()
        _jobs.extend(_seed_jobs())


reset_store()


# -----------------------
# Models
# -----------------------
def list_models(status: Optional[str] = None, model_type: Optional[str] = None) -> List[Dict[str, Any]]:
    with _lock:
        items = [copy.deepcopy(m) for m in _models.values()]
    if status:
        items = [m for m in items if m["status"] == status]
    if model_type:
        items = [m for m in items if m["type"] == model_type]
    return items


def create_model(name: str, model_type: str, purpose: str) -> Dict[str, Any]:
    rec = {
        "id": _uid("model"),
        "name": name,
        "type": model_type,
        "purpose": purpose,
        "status": "ready",
        "accuracy": 0,
        "lastTrained": _now_iso(),
        "trainingData": 0,
        "version": "v1.0",
        "predictions": 0,
        "performance": _empty_performance(),
    }
    with _lock:
        _models[rec["id"]] = rec
        _created_ids.append(rec["id"])
        # seeded models are never evicted
        while len(_created_ids) > MAX_CREATED_MODELS:
            _models.pop(_created_ids.popleft(), None)
    return copy.deepcopy(rec)


def _model_name(model_id: str) -> Optional[str]:
    with _lock:
        model = _models.get(model_id)
        return model["name"] if model else None


def train_model(model_id: str, rng=None) -> Dict[str, Any]:
    """Queue a training run; unknown model ids are accepted and queued as-is."""
    rng = rng or random
    job = {
        "id": _uid("job"),
        "modelId": model_id,
        "modelName": _model_name(model_id),
        "status": "queued",
        "progress": 0,
        "startTime": _now_iso(),
        "dataSize": rng.randint(5000, 24999),
        "epochs": DEFAULT_EPOCHS,
        "currentEpoch": 0,
        "message": "Training job queued successfully",
    }
    with _lock:
        _jobs.append(job)
    return copy.deepcopy(job)


def deploy_model(model_id: str) -> Dict[str, Any]:
    return {
        "id": _uid("deployment"),
        "modelId": model_id,
        "status": "deploying",
        "endpoint": DEPLOY_ENDPOINT.format(model_id=model_id),
        "deploymentTime": _now_iso(),
        "environment": "production",
        "instances": 2,
        "message": "Model deployment initiated",
    }


# -----------------------
# Training jobs
# -----------------------
def list_training_jobs(status: Optional[str] = None, model_id: Optional[str] = None) -> List[Dict[str, Any]]:
    with _lock:
        items = [copy.deepcopy(j) for j in _jobs]
    if status:
        items = [j for j in items if j["status"] == status]
    if model_id:
        items = [j for j in items if j["modelId"] == model_id]
    items.sort(key=lambda j: j["startTime"], reverse=True)
    return items


def create_training_job(model_id: str, model_name: str, training_config: Optional[Dict[str, Any]] = None, rng=None) -> Dict[str, Any]:
    rng = rng or random
    config = training_config or {}
    job = {
        "id": _uid("job"),
        "modelId": model_id,
        "modelName": model_name,
        "status": "queued",
        "progress": 0,
        "startTime": _now_iso(),
        "dataSize": config.get("dataSize") or rng.randint(5000, 19999),
        "epochs": config.get("epochs") or DEFAULT_EPOCHS,
        "currentEpoch": 0,
    }
    with _lock:
        _jobs.append(job)
    return copy.deepcopy(job)
