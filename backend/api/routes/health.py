"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import time
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import StoreHandle
from ..dependencies import get_store

router = APIRouter()

_started_at = time.monotonic()


class HealthResponse(BaseModel):
    """Health check response model."""

    success: bool = True
    status: str
    version: str
    timestamp: datetime
    uptime: float


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    demo_mode: bool


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(
        status="healthy",
        version=get_settings().app_version,
        timestamp=datetime.now(timezone.utc),
        uptime=round(time.monotonic() - _started_at, 3),
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(store: StoreHandle = Depends(get_store)) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the document store answers. A disconnected store still
    reports ready when demo mode can serve requests.
    """
    connected = store.ping()
    demo_mode = not connected and get_settings().demo_mode_enabled
    return ReadinessResponse(
        status="ready" if connected or demo_mode else "degraded",
        database="connected" if connected else "disconnected",
        demo_mode=demo_mode,
    )
