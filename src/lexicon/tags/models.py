from typing import TYPE_CHECKING
import uuid

from sqlmodel import Field, Relationship, SQLModel

from lexicon.core.base_models import CreatedTable

if TYPE_CHECKING:
    from lexicon.translations.models import Translation


class TranslationTagLink(SQLModel, table=True):
    """Join table for the Translation <-> Tag many-to-many relationship.

    Link rows follow the translation's lifetime; tag rows are never removed.
    """

    __tablename__ = "translation_tag"

    translation_id: uuid.UUID = Field(
        foreign_key="translation.id", primary_key=True, ondelete="CASCADE"
    )
    tag_id: uuid.UUID = Field(
        foreign_key="tag.id", primary_key=True, ondelete="CASCADE", index=True
    )


class TagBase(SQLModel):
    name: str = Field(unique=True, index=True, min_length=1, max_length=100)


class Tag(TagBase, CreatedTable, table=True):
    translations: list["Translation"] = Relationship(
        back_populates="tags", link_model=TranslationTagLink
    )
