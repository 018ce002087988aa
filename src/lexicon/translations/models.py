import re
from datetime import datetime
from typing import TYPE_CHECKING
import uuid

from pydantic import field_validator
from sqlalchemy import Column, Text, UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from lexicon.core.base_models import (
    PaginatedResponse,
    TimestampedTable,
    TimestampResponseMixin,
)
from lexicon.languages.models import validate_language_code
from lexicon.tags.models import Tag, TranslationTagLink

if TYPE_CHECKING:
    from lexicon.languages.models import Language

# One or more non-empty segments separated by single dots, no whitespace or
# slashes; a key is addressed as one URL path segment
TRANSLATION_KEY_PATTERN = re.compile(r"^[^./\s]+(?:\.[^./\s]+)*$")

KEY_SEPARATOR = "."

UNIQUE_KEY_LANGUAGE = "uq_translation_key_language"


def _check_tag_names(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    if any(not tag or not tag.strip() for tag in tags):
        raise ValueError("Tag names must be non-empty")
    return tags


class Translation(TimestampedTable, table=True):
    __table_args__ = (
        UniqueConstraint("key", "language_id", name=UNIQUE_KEY_LANGUAGE),
    )

    key: str = Field(index=True, max_length=255)
    content: str = Field(sa_column=Column(Text, nullable=False))
    language_id: uuid.UUID = Field(
        foreign_key="language.id", nullable=False, ondelete="RESTRICT", index=True
    )

    language: "Language" = Relationship(back_populates="translations")
    tags: list[Tag] = Relationship(
        back_populates="translations", link_model=TranslationTagLink
    )


class TranslationCreate(SQLModel):
    key: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    language_code: str
    tags: list[str] | None = None

    @field_validator("key")
    @classmethod
    def check_key(cls, v: str) -> str:
        if not TRANSLATION_KEY_PATTERN.match(v):
            raise ValueError(
                "Translation key must be non-empty segments separated by '.' "
                "without whitespace or '/'"
            )
        return v

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v

    @field_validator("language_code")
    @classmethod
    def check_language_code(cls, v: str) -> str:
        return validate_language_code(v)

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str] | None) -> list[str] | None:
        return _check_tag_names(v)


class TranslationUpdate(SQLModel):
    """Content replacement with optional tag replacement.

    ``tags=None`` (or omitted) keeps the stored tags; ``tags=[]`` clears them.
    """

    content: str = Field(min_length=1)
    tags: list[str] | None = None

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content is required")
        return v

    @field_validator("tags")
    @classmethod
    def check_tags(cls, v: list[str] | None) -> list[str] | None:
        return _check_tag_names(v)


class TranslationSearch(SQLModel):
    term: str | None = None
    tags: list[str] | None = None
    page: int = Field(default=0, ge=0)
    size: int = Field(default=20, ge=1)


class TranslationPublic(TimestampResponseMixin):
    id: uuid.UUID
    key: str
    content: str
    language_code: str
    tags: list[str]

    @classmethod
    def from_translation(cls, translation: Translation) -> "TranslationPublic":
        return cls(
            id=translation.id,
            key=translation.key,
            content=translation.content,
            language_code=translation.language.code,
            tags=sorted(tag.name for tag in translation.tags),
            created_at=translation.created_at,
            updated_at=translation.updated_at,
        )


TranslationsPublic = PaginatedResponse[TranslationPublic]
