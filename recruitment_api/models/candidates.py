"""Candidate and candidate/job offer association models."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel


# Recruitment status assigned on registration
RECRUITMENT_STATUS_NEW = "new"


class Candidate(BaseModel):
    """
    Person registered for recruitment consideration.

    Email is unique across all candidates; the constraint backs up the
    application-level duplicate check under concurrent registrations.
    """

    __tablename__ = "candidates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)

    recruitment_status = Column(String(50), nullable=False, default=RECRUITMENT_STATUS_NEW)
    consent_date = Column(DateTime, nullable=False)

    # Relationships
    job_offer_links = relationship(
        "CandidateJobOffer",
        back_populates="candidate",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Candidate(id={self.id}, email={self.email}, status={self.recruitment_status})>"


class CandidateJobOffer(BaseModel):
    """Binding between a candidate and a job offer."""

    __tablename__ = "candidate_job_offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    candidate_id = Column(Integer, ForeignKey("candidates.id", ondelete="CASCADE"), nullable=False)
    job_offer_id = Column(Integer, ForeignKey("job_offers.id"), nullable=False)

    # Constraints
    __table_args__ = (
        UniqueConstraint("candidate_id", "job_offer_id", name="uq_candidate_job_offers_pair"),
    )

    # Relationships
    candidate = relationship("Candidate", back_populates="job_offer_links")
    job_offer = relationship("JobOffer", back_populates="candidate_links")

    def __repr__(self) -> str:
        return f"<CandidateJobOffer(candidate_id={self.candidate_id}, job_offer_id={self.job_offer_id})>"
