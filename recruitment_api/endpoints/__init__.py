"""API endpoints for the Recruitment API."""

from fastapi import APIRouter

from .candidates import router as candidates_router
from .health import router as health_router

# Create main API router
api_router = APIRouter()

api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(candidates_router, prefix="/candidates", tags=["Candidates"])

__all__ = ["api_router"]
