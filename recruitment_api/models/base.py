"""Base model with common fields and utilities."""

from sqlalchemy import Column, DateTime, func
from sqlalchemy.orm import declared_attr

from recruitment_api.config.database import Base


class TimestampMixin:
    """Mixin that adds a store-assigned created_at column."""

    @declared_attr
    def created_at(cls):
        return Column(
            DateTime,
            server_default=func.current_timestamp(),
            nullable=False,
        )


class BaseModel(Base, TimestampMixin):
    """
    Abstract base class for all models.

    Provides:
    - created_at: Timestamp when record was created
    """

    __abstract__ = True

    def __repr__(self) -> str:
        """String representation of model."""
        pk = getattr(self, "id", None)
        return f"<{self.__class__.__name__}(id={pk})>"
