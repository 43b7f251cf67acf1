# backend/verdanta/api/__init__.py

from fastapi import APIRouter

from verdanta.api import automation, watsonx
from verdanta.api.ai_ml import decision_engine, models, predictions, training_jobs
from verdanta.api.farm import agricultural, alerts, dashboard, devices, environmental, production, vermiculture
from verdanta.api.government_data import usda, weather

api_router = APIRouter()

# insight / automation feeds
api_router.include_router(automation.router)
api_router.include_router(usda.router)
api_router.include_router(weather.router)
api_router.include_router(predictions.router)
api_router.include_router(decision_engine.router)
api_router.include_router(models.router)
api_router.include_router(training_jobs.router)
api_router.include_router(watsonx.router)

# farm records (session-gated) and mock systems
api_router.include_router(alerts.router)
api_router.include_router(devices.router)
api_router.include_router(environmental.router)
api_router.include_router(production.router)
api_router.include_router(vermiculture.router)
api_router.include_router(dashboard.router)
api_router.include_router(agricultural.router)
