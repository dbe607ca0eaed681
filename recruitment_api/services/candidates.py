"""Candidate registration workflow.

Creating a candidate touches two systems: the local database and the
legacy recruitment API. The workflow keeps them consistent by holding the
local transaction open while the legacy system is notified, committing only
when the notification succeeds. Every outcome is returned as a result value;
nothing is raised to the caller.
"""

import asyncio
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Literal, Optional, Union

import httpx
import structlog

from recruitment_api.config.settings import Settings
from recruitment_api.integrations.legacy import (
    LEGACY_CANDIDATES_PATH,
    LegacyCandidate,
    LegacyResponse,
    LegacySyncClient,
    LegacyTransportError,
)
from recruitment_api.models import Candidate, RECRUITMENT_STATUS_NEW
from recruitment_api.schemas.base import PaginatedResponse, PaginationMeta
from recruitment_api.schemas.candidates import (
    CandidateCreatedResponse,
    CandidateListItem,
    CreatedCandidate,
)
from recruitment_api.services.candidate_store import (
    CandidateStore,
    DuplicateCandidateError,
    StoreTransaction,
)

logger = structlog.get_logger()

DEFAULT_LEGACY_API_URL = "http://localhost:4040"

FORBIDDEN_MESSAGE = "Forbidden: Invalid API Key."
VALIDATION_FAILED_MESSAGE = "Validation failed"
DUPLICATE_EMAIL_MESSAGE = "Candidate with this email already exists."
LEGACY_SYNC_FAILED_MESSAGE = "Failed to synchronize candidate with legacy API."


class ErrorKind(str, Enum):
    """Classification of failed registrations."""
    authorization = "authorization"
    validation = "validation"
    conflict = "conflict"
    reference = "reference"
    configuration = "configuration"
    integration = "integration"
    persistence = "persistence"


@dataclass
class CandidatePayload:
    """Candidate data submitted for registration."""

    first_name: str
    last_name: str
    email: str
    job_offer_ids: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class CandidateServiceConfig:
    """Per-service overrides taking precedence over the shared settings."""

    expected_api_key: Optional[str] = None
    legacy_api_key: Optional[str] = None
    legacy_api_url: Optional[str] = None


@dataclass(frozen=True)
class LegacyApiDetails:
    """Resolved legacy API credential and base URL."""

    api_key: Optional[str]
    api_url: str


@dataclass
class CreateCandidateSuccess:
    body: dict[str, Any]
    status: int = 201
    type: Literal["success"] = "success"


@dataclass
class CreateCandidateError:
    status: int
    body: dict[str, Any]
    kind: ErrorKind
    type: Literal["error"] = "error"


CreateCandidateResult = Union[CreateCandidateSuccess, CreateCandidateError]


def error_result(
    kind: ErrorKind,
    status: int,
    message: str,
    errors: Optional[list[str]] = None,
) -> CreateCandidateError:
    """Build an error result with the ``{message, errors?}`` body."""
    body: dict[str, Any] = {"message": message}
    if errors:
        body["errors"] = errors
    return CreateCandidateError(status=status, body=body, kind=kind)


def _coerce_job_offer_id(value: Any) -> Optional[int]:
    """Convert a raw job offer id to an int, or None if it is not integral."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return int(number) if number.is_integer() else None
    return None


def normalize_job_offer_ids(raw_ids: Optional[Iterable[Any]]) -> list[int]:
    """Deduplicate job offer ids and keep only positive integers.

    First occurrence order is preserved.
    """
    normalized: list[int] = []
    for raw_id in raw_ids or []:
        job_offer_id = _coerce_job_offer_id(raw_id)
        if job_offer_id is None or job_offer_id <= 0:
            continue
        if job_offer_id not in normalized:
            normalized.append(job_offer_id)
    return normalized


def resolve_legacy_api_details(
    config: CandidateServiceConfig,
    settings: Settings,
) -> LegacyApiDetails:
    """Resolve legacy API settings: service overrides first, then shared settings.

    The credential falls back to the inbound API key when no dedicated legacy
    key is configured.
    """
    api_url = config.legacy_api_url or settings.LEGACY_API_URL or DEFAULT_LEGACY_API_URL
    api_key = (
        config.legacy_api_key
        or config.expected_api_key
        or settings.LEGACY_API_KEY
        or settings.API_KEY
    )
    return LegacyApiDetails(api_key=api_key, api_url=api_url)


def build_legacy_endpoint(api_url: str) -> Optional[str]:
    """Join the legacy base URL with the candidates path.

    Returns None if the result is not an absolute http(s) URL.
    """
    try:
        endpoint = httpx.URL(api_url).join(LEGACY_CANDIDATES_PATH)
    except (httpx.InvalidURL, TypeError, ValueError):
        return None
    if endpoint.scheme not in ("http", "https") or not endpoint.host:
        return None
    return str(endpoint)


def legacy_failure_result(response: LegacyResponse) -> CreateCandidateError:
    """Map a rejected legacy call to an error result."""
    status = response.status if 400 <= response.status <= 599 else 502
    body = response.body
    message = body.get("message") if isinstance(body, dict) else None
    if not isinstance(message, str):
        message = LEGACY_SYNC_FAILED_MESSAGE
    return error_result(ErrorKind.integration, status, message)


class CandidateService:
    """Registers candidates and lists them."""

    def __init__(
        self,
        store: CandidateStore,
        legacy_client: LegacySyncClient,
        settings: Settings,
        config: Optional[CandidateServiceConfig] = None,
    ):
        self.store = store
        self.legacy_client = legacy_client
        self.settings = settings
        self.config = config or CandidateServiceConfig()

    @property
    def expected_api_key(self) -> Optional[str]:
        return self.config.expected_api_key or self.settings.API_KEY

    def is_authorized(self, api_key: Optional[str]) -> bool:
        """Check the inbound credential against the configured API key."""
        expected = self.expected_api_key
        return bool(api_key) and bool(expected) and api_key == expected

    async def create_candidate(
        self,
        payload: CandidatePayload,
        api_key: Optional[str],
    ) -> CreateCandidateResult:
        """Register a candidate and synchronize it with the legacy system.

        Args:
            payload: Candidate data
            api_key: Inbound credential (x-api-key header)

        Returns:
            CreateCandidateSuccess (201) or CreateCandidateError
        """
        log = logger.bind(email=payload.email)
        try:
            result = await self._create_candidate(payload, api_key)
        except Exception as e:
            log.exception(
                "Candidate creation failed unexpectedly",
                error=str(e),
                error_type=type(e).__name__,
            )
            result = error_result(ErrorKind.persistence, 500, "Failed to create candidate.")

        if isinstance(result, CreateCandidateSuccess):
            log.info("Candidate created", candidate_id=result.body["candidate"]["id"])
        else:
            log.warning(
                "Candidate creation rejected",
                status=result.status,
                kind=result.kind.value,
                message=result.body["message"],
            )
        return result

    async def _create_candidate(
        self,
        payload: CandidatePayload,
        api_key: Optional[str],
    ) -> CreateCandidateResult:
        if not self.is_authorized(api_key):
            return error_result(ErrorKind.authorization, 403, FORBIDDEN_MESSAGE)

        job_offer_ids = normalize_job_offer_ids(payload.job_offer_ids)
        if not job_offer_ids:
            return error_result(
                ErrorKind.validation,
                400,
                VALIDATION_FAILED_MESSAGE,
                ["At least one valid job offer id must be provided"],
            )

        if await asyncio.to_thread(self.store.find_candidate_by_email, payload.email) is not None:
            return error_result(ErrorKind.conflict, 409, DUPLICATE_EMAIL_MESSAGE)

        existing_job_offers = await asyncio.to_thread(self.store.find_job_offers_by_ids, job_offer_ids)
        if len(existing_job_offers) != len(job_offer_ids):
            return error_result(
                ErrorKind.reference,
                400,
                VALIDATION_FAILED_MESSAGE,
                ["One or more job offers do not exist."],
            )

        legacy = resolve_legacy_api_details(self.config, self.settings)
        if not legacy.api_key:
            return error_result(ErrorKind.configuration, 500, "Legacy API key is not configured.")

        endpoint = build_legacy_endpoint(legacy.api_url)
        if endpoint is None:
            return error_result(ErrorKind.configuration, 500, "Legacy API URL is invalid.")

        async with self.store.open_transaction() as tx:
            return await self._register(tx, payload, job_offer_ids, endpoint, legacy.api_key)

    async def _register(
        self,
        tx: StoreTransaction,
        payload: CandidatePayload,
        job_offer_ids: list[int],
        endpoint: str,
        legacy_api_key: str,
    ) -> CreateCandidateResult:
        """Write the candidate, notify the legacy system, then commit.

        Runs inside an open transaction; any return without commit rolls back.
        Store calls go through worker threads because the transaction stays
        open across the legacy call and may wait on another registration's lock.
        """
        try:
            candidate_id = await asyncio.to_thread(
                self.store.insert_candidate,
                first_name=payload.first_name,
                last_name=payload.last_name,
                email=payload.email,
                recruitment_status=RECRUITMENT_STATUS_NEW,
                consent_date=datetime.now(timezone.utc),
            )
        except DuplicateCandidateError:
            return error_result(ErrorKind.conflict, 409, DUPLICATE_EMAIL_MESSAGE)

        if not candidate_id:
            return error_result(
                ErrorKind.persistence,
                500,
                "Unable to determine created candidate identifier.",
            )

        for job_offer_id in job_offer_ids:
            await asyncio.to_thread(self.store.insert_candidate_job_offer, candidate_id, job_offer_id)

        try:
            legacy_response = await self.legacy_client.notify(
                endpoint,
                legacy_api_key,
                LegacyCandidate(
                    first_name=payload.first_name,
                    last_name=payload.last_name,
                    email=payload.email,
                ),
            )
        except LegacyTransportError:
            return error_result(ErrorKind.integration, 500, "Communication with legacy API failed.")

        if not legacy_response.ok:
            return legacy_failure_result(legacy_response)

        candidate = await asyncio.to_thread(self.store.find_candidate_by_id, candidate_id)
        if candidate is None:
            return error_result(ErrorKind.persistence, 500, "Unable to load created candidate.")

        result = CreateCandidateSuccess(body=self._build_created_body(candidate, job_offer_ids))
        await asyncio.to_thread(tx.commit)
        return result

    def _build_created_body(self, candidate: Candidate, job_offer_ids: list[int]) -> dict[str, Any]:
        response = CandidateCreatedResponse(
            message="Candidate added successfully",
            candidate=CreatedCandidate(
                id=candidate.id,
                first_name=candidate.first_name,
                last_name=candidate.last_name,
                email=candidate.email,
                created_at=candidate.created_at,
                job_offer_ids=job_offer_ids,
            ),
        )
        return response.model_dump(by_alias=True, mode="json")

    async def get_candidates(self, page: int, limit: int) -> PaginatedResponse[CandidateListItem]:
        """List candidates one page at a time.

        The total count and the page are fetched concurrently.
        """
        offset = (page - 1) * limit
        total_items, candidates = await asyncio.gather(
            asyncio.to_thread(self.store.count_candidates),
            asyncio.to_thread(self.store.find_candidates_paginated, max(limit, 0), max(offset, 0)),
        )
        total_pages = math.ceil(total_items / limit) if limit > 0 else 0

        return PaginatedResponse[CandidateListItem](
            data=[CandidateListItem.model_validate(candidate) for candidate in candidates],
            meta=PaginationMeta(
                page=page,
                limit=limit,
                total_items=total_items,
                total_pages=total_pages,
            ),
        )
