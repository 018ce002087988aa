import re
from typing import TYPE_CHECKING

from pydantic import field_validator
from sqlmodel import Field, Relationship, SQLModel

from lexicon.core.base_models import TimestampedTable, TimestampResponseMixin

if TYPE_CHECKING:
    from lexicon.translations.models import Translation

# ISO-style tags: "en", "en-US", "zh-Hant-TW" style segments, matched without
# regard to case since codes are stored lowercase.
LANGUAGE_CODE_PATTERN = re.compile(
    r"^[a-z]{2,3}(?:-[a-z]{2,3}(?:-[a-z]{4})?)?$", re.IGNORECASE
)


def normalize_language_code(code: str) -> str:
    return code.strip().lower()


def validate_language_code(code: str) -> str:
    normalized = normalize_language_code(code)
    if not 2 <= len(normalized) <= 10 or not LANGUAGE_CODE_PATTERN.match(normalized):
        raise ValueError(
            "Invalid language code format. Use ISO format (e.g., 'en', 'en-US')"
        )
    return normalized


class LanguageBase(SQLModel):
    code: str = Field(unique=True, index=True, min_length=2, max_length=10)
    name: str = Field(min_length=2, max_length=50)


class Language(LanguageBase, TimestampedTable, table=True):
    translations: list["Translation"] = Relationship(back_populates="language")


class LanguageCreate(LanguageBase):
    @field_validator("code")
    @classmethod
    def check_code(cls, v: str) -> str:
        return validate_language_code(v)


class LanguageUpdate(LanguageBase):
    """Full replacement of a language's code and display name."""

    @field_validator("code")
    @classmethod
    def check_code(cls, v: str) -> str:
        return validate_language_code(v)


class LanguagePublic(LanguageBase, TimestampResponseMixin):
    pass
