"""Tests for classifying database integrity errors."""

from types import SimpleNamespace

from sqlalchemy.exc import IntegrityError

from lexicon.core.db import is_foreign_key_violation, is_unique_violation


class FakePostgresError(Exception):
    def __init__(self, sqlstate: str, constraint_name: str | None = None):
        super().__init__(f"sqlstate {sqlstate}")
        self.sqlstate = sqlstate
        self.diag = SimpleNamespace(constraint_name=constraint_name)


def _wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO translation", {}, orig)


def test_postgres_unique_violation_matches_only_its_constraint():
    error = _wrap(FakePostgresError("23505", "uq_translation_key_language"))

    assert is_unique_violation(error, "uq_translation_key_language")
    assert not is_unique_violation(error, "ix_tag_name")
    assert not is_foreign_key_violation(error)


def test_postgres_foreign_key_violation():
    error = _wrap(FakePostgresError("23503", "translation_language_id_fkey"))

    assert is_foreign_key_violation(error)
    assert not is_unique_violation(error, "uq_translation_key_language")


def test_sqlite_messages_are_classified():
    unique = _wrap(
        Exception("UNIQUE constraint failed: translation.key, translation.language_id")
    )
    foreign_key = _wrap(Exception("FOREIGN KEY constraint failed"))

    assert is_unique_violation(unique, "uq_translation_key_language")
    assert not is_foreign_key_violation(unique)
    assert is_foreign_key_violation(foreign_key)
    assert not is_unique_violation(foreign_key, "uq_translation_key_language")
