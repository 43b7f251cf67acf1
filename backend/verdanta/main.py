# backend/verdanta/main.py

# FORCE logger module import so handlers attach

import verdanta.core.logger
from verdanta.core.logger import logger

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from verdanta import __version__
from verdanta.api import api_router
from verdanta.core.config import settings
from verdanta.core.database import create_tables
from verdanta.core.envelope import install_exception_handlers
from verdanta.core.request_middleware import RequestLoggingMiddleware
from verdanta.core.error_middleware import ExceptionLoggingMiddleware

# ---------------------------------------------------
# Create FastAPI instance FIRST
# ---------------------------------------------------
app = FastAPI(title="VerdantaIQ Agricultural Insight API", version=__version__)


# ---------------------------------------------------
# CORS MUST be added immediately after app creation
# ---------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------
# Logging middlewares
# ---------------------------------------------------
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(ExceptionLoggingMiddleware)

install_exception_handlers(app)


# ---------------------------------------------------
# Include Routers
# ---------------------------------------------------
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    await create_tables()
    logger.info("VerdantaIQ API started with structured JSON logging")


# ---------------------------------------------------
# Health endpoint
# ---------------------------------------------------
@app.get("/health")
async def health_check():
    return {"status": "ok"}
