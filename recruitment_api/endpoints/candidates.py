"""Candidate registration and listing endpoints."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Header, Query
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from recruitment_api.config.database import get_db
from recruitment_api.config.settings import Settings, get_settings
from recruitment_api.integrations.legacy import LegacySyncClient
from recruitment_api.middleware.error_handler import ForbiddenError
from recruitment_api.schemas.base import ErrorResponse, PaginatedResponse
from recruitment_api.schemas.candidates import (
    CandidateCreateRequest,
    CandidateCreatedResponse,
    CandidateListItem,
)
from recruitment_api.services.candidate_store import CandidateStore
from recruitment_api.services.candidates import (
    FORBIDDEN_MESSAGE,
    CandidatePayload,
    CandidateService,
)

logger = structlog.get_logger()
router = APIRouter()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def get_legacy_client(settings: Settings = Depends(get_settings)) -> LegacySyncClient:
    """Dependency that provides the legacy system client."""
    return LegacySyncClient(timeout=settings.LEGACY_API_TIMEOUT)


def get_candidate_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    legacy_client: LegacySyncClient = Depends(get_legacy_client),
) -> CandidateService:
    """Dependency that provides a candidate service bound to the request session."""
    return CandidateService(
        store=CandidateStore(db),
        legacy_client=legacy_client,
        settings=settings,
    )


def require_api_key(
    x_api_key: Optional[str] = Header(None),
    service: CandidateService = Depends(get_candidate_service),
) -> str:
    """
    Dependency that rejects requests without a valid x-api-key header.

    Runs before body validation so unauthorized callers always get 403.
    """
    if not service.is_authorized(x_api_key):
        raise ForbiddenError(FORBIDDEN_MESSAGE)
    return x_api_key


def parse_positive_int(value: Optional[str], default: int) -> int:
    """Parse a query value, falling back to the default if invalid or below 1."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


@router.get("", response_model=PaginatedResponse[CandidateListItem])
async def list_candidates(
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    service: CandidateService = Depends(get_candidate_service),
):
    """List candidates with pagination."""
    return await service.get_candidates(
        parse_positive_int(page, DEFAULT_PAGE),
        parse_positive_int(limit, DEFAULT_LIMIT),
    )


@router.post(
    "",
    status_code=201,
    response_model=CandidateCreatedResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def create_candidate(
    candidate: CandidateCreateRequest,
    api_key: str = Depends(require_api_key),
    service: CandidateService = Depends(get_candidate_service),
):
    """Register a candidate and synchronize it with the legacy system."""
    result = await service.create_candidate(
        CandidatePayload(
            first_name=candidate.first_name,
            last_name=candidate.last_name,
            email=candidate.email,
            job_offer_ids=list(candidate.job_offer_ids),
        ),
        api_key,
    )
    return JSONResponse(status_code=result.status, content=result.body)
