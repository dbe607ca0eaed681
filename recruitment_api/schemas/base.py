"""Base Pydantic schemas with CamelCase conversion."""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from humps import camelize


def to_camel(string: str) -> str:
    """Convert snake_case to camelCase."""
    return camelize(string)


class CamelModel(BaseModel):
    """
    Base model that converts snake_case fields to camelCase in JSON responses.

    Usage:
        class MyResponse(CamelModel):
            first_name: str   # JSON: firstName
            job_offer_ids: list[int]  # JSON: jobOfferIds
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


T = TypeVar("T")


class PaginationMeta(CamelModel):
    """Pagination metadata."""

    page: int
    limit: int
    total_items: int
    total_pages: int


class PaginatedResponse(CamelModel, Generic[T]):
    """
    Generic paginated response wrapper.

    Usage:
        PaginatedResponse[CandidateListItem](
            data=[...],
            meta=PaginationMeta(page=1, limit=10, total_items=100, total_pages=10)
        )
    """

    data: list[T]
    meta: PaginationMeta


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str
    errors: Optional[list[str]] = None
