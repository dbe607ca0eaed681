"""Business logic services for the Recruitment API."""

from .candidate_store import CandidateStore, DuplicateCandidateError, StoreTransaction
from .candidates import (
    CandidatePayload,
    CandidateService,
    CandidateServiceConfig,
    CreateCandidateError,
    CreateCandidateResult,
    CreateCandidateSuccess,
    ErrorKind,
)

__all__ = [
    "CandidateStore",
    "DuplicateCandidateError",
    "StoreTransaction",
    "CandidatePayload",
    "CandidateService",
    "CandidateServiceConfig",
    "CreateCandidateError",
    "CreateCandidateResult",
    "CreateCandidateSuccess",
    "ErrorKind",
]
