"""
FastAPI application entrypoint for the Rider Backend.

Provides:
- Health check
- Rider registration (POST /riders)
- Rider authentication (POST /riders/session)
- Rider listing (GET /riders)

Configuration is read from the environment, see src.api.settings.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.db import init_db
from src.api.logging_config import setup_logging
from src.api.routers import riders as riders_router
from src.api.settings import get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Health and readiness endpoints."},
    {"name": "riders", "description": "Rider registration, authentication and listing endpoints."},
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    setup_logging(settings.log_level)
    init_db()
    logger.info("Rider Backend started")
    yield


app = FastAPI(
    title="Rider Backend",
    description="Backend API for rider accounts: registration and token-based sign-in.",
    version="0.1.0",
    openapi_tags=openapi_tags,
    lifespan=lifespan,
)

# Basic permissive CORS for early development; tighten for production later.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(riders_router.router)


@app.get(
    "/",
    tags=["health"],
    summary="Health check",
    description="Simple health check endpoint.",
    operation_id="health_check",
)
def health_check():
    """Return a simple health response."""
    return {"message": "Healthy"}
