"""Create language, tag, translation and translation_tag tables

Revision ID: 5c1d2e7a9b30
Revises:
Create Date: 2026-10-19 09:12:44.318205

"""
from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa
import sqlmodel

revision: str = "5c1d2e7a9b30"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "language",
        sa.Column("code", sqlmodel.sql.sqltypes.AutoString(length=10), nullable=False),
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=50), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_language_code"), "language", ["code"], unique=True)

    op.create_table(
        "tag",
        sa.Column("name", sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tag_name"), "tag", ["name"], unique=True)

    op.create_table(
        "translation",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.Column("key", sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("language_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["language_id"], ["language.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("key", "language_id", name="uq_translation_key_language"),
    )
    op.create_index(op.f("ix_translation_key"), "translation", ["key"], unique=False)
    op.create_index(
        op.f("ix_translation_language_id"), "translation", ["language_id"], unique=False
    )

    op.create_table(
        "translation_tag",
        sa.Column("translation_id", sa.Uuid(), nullable=False),
        sa.Column("tag_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["translation_id"], ["translation.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tag.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("translation_id", "tag_id"),
    )
    op.create_index(
        op.f("ix_translation_tag_tag_id"), "translation_tag", ["tag_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_translation_tag_tag_id"), table_name="translation_tag")
    op.drop_table("translation_tag")
    op.drop_index(op.f("ix_translation_language_id"), table_name="translation")
    op.drop_index(op.f("ix_translation_key"), table_name="translation")
    op.drop_table("translation")
    op.drop_index(op.f("ix_tag_name"), table_name="tag")
    op.drop_table("tag")
    op.drop_index(op.f("ix_language_code"), table_name="language")
    op.drop_table("language")
