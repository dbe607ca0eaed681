"""Pydantic schemas for Candidate endpoints."""

from datetime import datetime
from typing import Any, Sequence

from pydantic import ConfigDict, EmailStr, Field, PositiveInt

from .base import CamelModel


class CandidateCreateRequest(CamelModel):
    """Request body for registering a candidate."""

    model_config = ConfigDict(str_strip_whitespace=True)

    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    job_offer_ids: list[PositiveInt] = Field(min_length=1)


class CandidateListItem(CamelModel):
    """Schema for candidate in list response."""

    id: int
    first_name: str
    last_name: str
    email: str
    created_at: datetime


class CreatedCandidate(CandidateListItem):
    """Schema for a freshly registered candidate."""

    job_offer_ids: list[int]


class CandidateCreatedResponse(CamelModel):
    """Response for a successful registration."""

    message: str
    candidate: CreatedCandidate


# Messages reported for invalid request body fields (keyed by JSON name)
FIELD_ERROR_MESSAGES = {
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "jobOfferIds": "At least one job offer must be provided",
}
EMAIL_REQUIRED_MESSAGE = "Email is required"
EMAIL_INVALID_MESSAGE = "Invalid email format"
JOB_OFFER_ID_INVALID_MESSAGE = "Job offer ids must be positive integers"


def _is_blank(error: dict[str, Any]) -> bool:
    if error.get("type") == "missing":
        return True
    value = error.get("input")
    return value is None or (isinstance(value, str) and not value.strip())


def describe_validation_error(error: dict[str, Any]) -> str:
    """Turn a single pydantic error into a human readable message."""
    loc = [part for part in error.get("loc", ()) if part != "body"]
    if not loc:
        return error.get("msg", "Invalid request body")

    field = loc[0]
    if field == "email":
        return EMAIL_REQUIRED_MESSAGE if _is_blank(error) else EMAIL_INVALID_MESSAGE
    if field == "jobOfferIds" and len(loc) > 1:
        return JOB_OFFER_ID_INVALID_MESSAGE
    return FIELD_ERROR_MESSAGES.get(field, error.get("msg", "Invalid value"))


def describe_validation_errors(errors: Sequence[dict[str, Any]]) -> list[str]:
    """Describe validation errors, keeping the first occurrence of each message."""
    messages: list[str] = []
    for error in errors:
        message = describe_validation_error(error)
        if message not in messages:
            messages.append(message)
    return messages
