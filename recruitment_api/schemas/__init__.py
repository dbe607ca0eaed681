"""Pydantic schemas for API requests and responses."""

from .base import CamelModel, PaginatedResponse, PaginationMeta, ErrorResponse
from .candidates import (
    CandidateCreateRequest,
    CandidateListItem,
    CreatedCandidate,
    CandidateCreatedResponse,
    describe_validation_errors,
)

__all__ = [
    "CamelModel",
    "PaginatedResponse",
    "PaginationMeta",
    "ErrorResponse",
    "CandidateCreateRequest",
    "CandidateListItem",
    "CreatedCandidate",
    "CandidateCreatedResponse",
    "describe_validation_errors",
]
