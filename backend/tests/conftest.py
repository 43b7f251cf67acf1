"""Shared test fixtures."""
import os
import random
import tempfile

import pytest

# settings are read at import time, so point them at a scratch dir first
_TMP_DIR = tempfile.mkdtemp(prefix="verdanta-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "logs")
os.environ.pop("WATSONX_URL", None)

from fastapi.testclient import TestClient

from verdanta.core.auth import create_access_token
from verdanta.main import app
from verdanta.services import automation_service, decision_engine_service, model_registry_service


@pytest.fixture(scope="session")
def client():
    """TestClient with startup hooks run (tables created) for the whole session."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    token = create_access_token({"sub": "farm-manager-1", "role": "manager"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def viewer_headers():
    token = create_access_token({"sub": "viewer-1", "role": "viewer"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(autouse=True)
def reset_in_memory_stores():
    decision_engine_service.reset_store()
    model_registry_service.reset_store()
    automation_service.reset_state()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def rng():
    """Seeded random source for synthesizers."""
    return random.Random(42)
