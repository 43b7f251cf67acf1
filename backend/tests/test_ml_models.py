"""Tests for the model registry and training job endpoints."""
import pytest

from verdanta.services import model_registry_service


def test_list_models(client):
    body = client.get("/api/ai-ml/models").json()
    assert body["metadata"]["total"] == 3
    active = client.get("/api/ai-ml/models", params={"status": "active"}).json()["data"]
    assert [m["id"] for m in active] == ["model_001"]


def test_create_model_is_listed(client):
    res = client.post("/api/ai-ml/models", json={"name": "Spinach Yield", "type": "regression", "purpose": "yield_prediction"})
    model = res.json()["data"]
    assert model["status"] == "ready"
    assert model["id"].startswith("model_")

    ids = [m["id"] for m in client.get("/api/ai-ml/models").json()["data"]]
    assert model["id"] in ids


def test_create_model_missing_fields(client):
    res = client.post("/api/ai-ml/models", json={"name": "Half a model"})
    assert res.status_code == 400
    assert "type" in res.json()["error"]
    assert "purpose" in res.json()["error"]


def test_train_model_queues_job(client):
    job = client.post("/api/ai-ml/models/train", json={"modelId": "model_002"}).json()["data"]
    assert job["status"] == "queued"
    assert job["modelName"] == "Pest Detection Classifier"

    queued = client.get("/api/ai-ml/training-jobs", params={"modelId": "model_002", "status": "queued"}).json()
    assert job["id"] in [j["id"] for j in queued["data"]]


def test_deploy_model(client):
    body = client.post("/api/ai-ml/models/deploy", json={"modelId": "model_001"}).json()
    assert body["data"]["status"] == "deploying"
    assert body["data"]["endpoint"].endswith("/model_001/predict")


@pytest.mark.parametrize("path", ["train", "deploy"])
def test_model_id_required(client, path):
    res = client.post(f"/api/ai-ml/models/{path}", json={})
    assert res.status_code == 400
    assert "modelId" in res.json()["error"]


def test_training_jobs_newest_first(client):
    jobs = client.get("/api/ai-ml/training-jobs").json()["data"]
    starts = [j["startTime"] for j in jobs]
    assert starts == sorted(starts, reverse=True)


def test_create_training_job(client):
    res = client.post(
        "/api/ai-ml/training-jobs",
        json={"modelId": "model_003", "modelName": "Soil Analysis Optimizer", "trainingConfig": {"epochs": 12}},
    )
    job = res.json()["data"]
    assert job["epochs"] == 12
    assert job["status"] == "queued"


def test_create_training_job_requires_model(client):
    res = client.post("/api/ai-ml/training-jobs", json={"modelName": "Orphan"})
    assert res.status_code == 400
    assert "modelId" in res.json()["error"]


def test_training_job_history_is_bounded():
    for _ in range(model_registry_service.MAX_JOBS + 300):
        last = model_registry_service.train_model("model_001")
    jobs = model_registry_service.list_training_jobs()
    assert len(jobs) == model_registry_service.MAX_JOBS
    assert last["id"] in [j["id"] for j in jobs]


def test_created_models_evict_oldest_created(monkeypatch):
    monkeypatch.setattr(model_registry_service, "MAX_CREATED_MODELS", 2)
    first, second, third = (
        model_registry_service.create_model(f"Model {i}", "regression", "yield_prediction") for i in range(3)
    )
    ids = [m["id"] for m in model_registry_service.list_models()]
    assert first["id"] not in ids
    assert second["id"] in ids and third["id"] in ids
    assert {"model_001", "model_002", "model_003"} <= set(ids)
