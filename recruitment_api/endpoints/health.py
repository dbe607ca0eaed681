"""Health check endpoints for monitoring."""

from datetime import datetime, timezone

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.orm import Session

from recruitment_api.config.database import get_db
from recruitment_api.config.settings import Settings, get_settings
from recruitment_api.services.candidates import (
    CandidateServiceConfig,
    build_legacy_endpoint,
    resolve_legacy_api_details,
)

logger = structlog.get_logger()
router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    timestamp: str
    database: str
    legacy_api: str


def check_database(db: Session) -> tuple[str, str | None]:
    """Check database connectivity."""
    try:
        result = db.execute(text("SELECT 1"))
        result.fetchone()
        return "connected", None
    except Exception as e:
        logger.error("Database health check failed", error=str(e))
        return "disconnected", str(e)


def check_legacy_api(settings: Settings) -> str:
    """Report whether the legacy API can be called with the current settings."""
    details = resolve_legacy_api_details(CandidateServiceConfig(), settings)
    if not details.api_key:
        return "not_configured"
    if build_legacy_endpoint(details.api_url) is None:
        return "invalid_url"
    return "configured"


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse)
async def health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> HealthResponse:
    """
    Basic health check endpoint.

    Returns overall status and component health.
    """
    db_status, _ = check_database(db)

    return HealthResponse(
        status="healthy" if db_status == "connected" else "unhealthy",
        version=settings.APP_VERSION,
        timestamp=datetime.now(timezone.utc).isoformat(),
        database=db_status,
        legacy_api=check_legacy_api(settings),
    )


@router.get("/ready")
async def readiness_check(
    db: Session = Depends(get_db),
) -> dict:
    """
    Kubernetes readiness probe.

    Returns 200 if service is ready to accept traffic.
    """
    db_status, _ = check_database(db)

    if db_status != "connected":
        return {"ready": False, "reason": "Database not connected"}

    return {"ready": True}


@router.get("/live")
async def liveness_check() -> dict:
    """
    Kubernetes liveness probe.

    Returns 200 if service process is alive.
    """
    return {"alive": True}
