"""SQLAlchemy ORM models for the Recruitment API.

All models are imported here to ensure they're registered with Base.metadata
before any database operations.
"""

# Import base first
from recruitment_api.config.database import Base

# Reference data
from .job_offers import JobOffer

# Core models
from .candidates import Candidate, CandidateJobOffer, RECRUITMENT_STATUS_NEW

__all__ = [
    "Base",
    # Reference data
    "JobOffer",
    # Core
    "Candidate",
    "CandidateJobOffer",
    "RECRUITMENT_STATUS_NEW",
]
