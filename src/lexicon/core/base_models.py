"""Base models and mixins for SQLModel schemas.

Database models (table=True) inherit from the composed table bases; response
schemas use TimestampResponseMixin, list responses use PaginatedResponse[T].

Example:
    class Language(LanguageBase, TimestampedTable, table=True):
        ...
"""

import uuid
from datetime import UTC, datetime
from typing import Generic, TypeVar

from sqlmodel import Field, SQLModel

T = TypeVar("T")


def utcnow() -> datetime:
    return datetime.now(UTC)


class UUIDPrimaryKeyMixin(SQLModel):
    """Standard UUID primary key for all models."""

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)


class TimestampMixin(SQLModel):
    """Created/updated timestamps for audit trail."""

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class CreatedAtMixin(SQLModel):
    """Created timestamp only (for append-only rows like Tag)."""

    created_at: datetime = Field(default_factory=utcnow)


class TimestampedTable(UUIDPrimaryKeyMixin, TimestampMixin):
    """Base for tables with timestamps.

    Use for: Language, Translation
    """

    pass


class CreatedTable(UUIDPrimaryKeyMixin, CreatedAtMixin):
    """Base for tables that are never updated in place.

    Use for: Tag
    """

    pass


class TimestampResponseMixin(SQLModel):
    """For Public/Response schemas that include timestamps."""

    created_at: datetime
    updated_at: datetime


class PaginatedResponse(SQLModel, Generic[T]):
    """Standard paginated response wrapper.

    ``count`` is the total number of matching records, not the page length.

    Example:
        @router.post("/search", response_model=PaginatedResponse[TranslationPublic])
        def search(...):
            return PaginatedResponse(data=rows, count=total, page=0, size=20)
    """

    data: list[T]
    count: int
    page: int = 0
    size: int = 0
