"""Job offer model (reference data populated outside this service)."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from .base import BaseModel


class JobOffer(BaseModel):
    """
    Open position a candidate can be bound to.

    Read-only from the API's point of view.
    """

    __tablename__ = "job_offers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    salary_range = Column(String(100), nullable=True)
    location = Column(String(255), nullable=True)

    # Relationships
    candidate_links = relationship("CandidateJobOffer", back_populates="job_offer")

    def __repr__(self) -> str:
        return f"<JobOffer(id={self.id}, title={self.title})>"
