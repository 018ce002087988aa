"""Tests for translation writes, cached reads, search and export."""

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from lexicon.core.cache import TranslationCache
from lexicon.core.config import settings
from lexicon.core.exceptions import (
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from lexicon.tags.models import Tag
from lexicon.translations import crud as translations_crud
from lexicon.translations.models import TranslationCreate, TranslationUpdate
from lexicon.translations.service import TranslationService


@pytest.fixture(autouse=True)
def languages(english, french):
    return english, french


def test_create_and_get(
    session: Session, translation_service: TranslationService, make_translation
):
    created = make_translation("common.title", "Hello", tags=["web", "mobile"])

    fetched = translation_service.get(session, "common.title", "EN")

    assert fetched.id == created.id
    assert fetched.content == "Hello"
    assert fetched.language_code == "en"
    assert fetched.tags == ["mobile", "web"]


def test_same_key_in_two_languages(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello", language_code="en")
    make_translation("common.title", "Bonjour", language_code="fr")

    assert translation_service.get(session, "common.title", "fr").content == "Bonjour"
    assert translation_service.get(session, "common.title", "en").content == "Hello"


def test_duplicate_key_and_language_is_rejected(make_translation):
    make_translation("common.title", "Hello")

    with pytest.raises(ResourceExistsError):
        make_translation("common.title", "Hello again")


def test_create_for_unknown_language_raises(make_translation):
    with pytest.raises(ResourceNotFoundError):
        make_translation("common.title", "Hallo", language_code="de")


@pytest.mark.parametrize(
    "key", ["", ".title", "common.", "common..title", "has space", "a/b", "a/b.c"]
)
def test_malformed_keys_fail_validation(key: str):
    with pytest.raises(ValueError):
        TranslationCreate(key=key, content="x", language_code="en")


def test_get_unknown_translation_raises(
    session: Session, translation_service: TranslationService
):
    with pytest.raises(ResourceNotFoundError):
        translation_service.get(session, "missing.key", "en")


def test_update_without_tags_keeps_existing_tags(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello", tags=["web"])

    updated = translation_service.update(
        session, "common.title", "en", TranslationUpdate(content="Hi")
    )

    assert updated.content == "Hi"
    assert updated.tags == ["web"]


def test_update_with_empty_tags_clears_them(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello", tags=["web", "mobile"])

    updated = translation_service.update(
        session, "common.title", "en", TranslationUpdate(content="Hi", tags=[])
    )

    assert updated.tags == []


def test_update_replaces_tag_set(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello", tags=["web", "mobile"])

    updated = translation_service.update(
        session,
        "common.title",
        "en",
        TranslationUpdate(content="Hello", tags=["desktop"]),
    )

    assert updated.tags == ["desktop"]


def test_update_unknown_translation_raises(
    session: Session, translation_service: TranslationService
):
    with pytest.raises(ResourceNotFoundError):
        translation_service.update(
            session, "missing.key", "en", TranslationUpdate(content="x")
        )


def test_delete_removes_translation(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello")

    translation_service.delete(session, "common.title", "en")

    with pytest.raises(ResourceNotFoundError):
        translation_service.get(session, "common.title", "en")


def test_delete_keeps_tag_rows(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello", tags=["web"])

    translation_service.delete(session, "common.title", "en")

    assert [tag.name for tag in session.exec(select(Tag)).all()] == ["web"]


def test_recreated_translation_reuses_existing_tag(
    session: Session, translation_service: TranslationService, make_translation
):
    # Arrange
    make_translation("common.title", "Hello", tags=["web"])
    tag_id = session.exec(select(Tag).where(Tag.name == "web")).one().id
    translation_service.delete(session, "common.title", "en")

    # Act
    make_translation("common.title", "Hello again", tags=["web"])

    # Assert
    tags = session.exec(select(Tag)).all()
    assert [(tag.id, tag.name) for tag in tags] == [(tag_id, "web")]
    recreated = translation_service.get(session, "common.title", "en")
    assert recreated.tags == ["web"]


def _raise_integrity_error(message: str):
    def create_translation(**_):
        raise IntegrityError(
            "INSERT INTO translation", {}, sqlite3.IntegrityError(message)
        )

    return create_translation


def test_create_after_language_vanished_reports_missing_language(
    monkeypatch, make_translation
):
    monkeypatch.setattr(
        translations_crud,
        "create_translation",
        _raise_integrity_error("FOREIGN KEY constraint failed"),
    )

    with pytest.raises(ResourceNotFoundError) as exc_info:
        make_translation("common.title", "Hello")

    assert exc_info.value.error_code == "LANGUAGE_NOT_FOUND"


def test_create_propagates_unrelated_integrity_errors(monkeypatch, make_translation):
    monkeypatch.setattr(
        translations_crud,
        "create_translation",
        _raise_integrity_error("NOT NULL constraint failed: translation.content"),
    )

    with pytest.raises(IntegrityError):
        make_translation("common.title", "Hello")


def test_reads_are_cached_until_a_write(
    session: Session,
    translation_service: TranslationService,
    cache: TranslationCache,
    make_translation,
):
    # Arrange
    make_translation("common.title", "Hello")
    translation_service.get(session, "common.title", "en")
    assert cache.get_translation("common.title", "en") is not None

    # Act
    translation_service.update(
        session, "common.title", "en", TranslationUpdate(content="Hi")
    )

    # Assert
    assert cache.get_translation("common.title", "en") is None
    assert translation_service.get(session, "common.title", "en").content == "Hi"


def test_any_write_clears_other_cached_entries(
    session: Session,
    translation_service: TranslationService,
    cache: TranslationCache,
    make_translation,
):
    make_translation("common.title", "Hello")
    translation_service.get(session, "common.title", "en")
    translation_service.export(session, "en")

    make_translation("error.generic", "Erreur", language_code="fr")

    assert cache.stats()["translations"] == 0
    assert cache.stats()["exports"] == 0


def test_failed_write_keeps_cache(
    session: Session,
    translation_service: TranslationService,
    cache: TranslationCache,
    make_translation,
):
    make_translation("common.title", "Hello")
    translation_service.get(session, "common.title", "en")

    with pytest.raises(ResourceExistsError):
        make_translation("common.title", "Duplicate")

    assert cache.get_translation("common.title", "en") is not None


def test_search_matches_term_or_tag(
    session: Session, translation_service: TranslationService, make_translation
):
    # Arrange
    make_translation("common.title", "Welcome home", tags=["web"])
    make_translation("common.subtitle", "Something else", tags=["mobile"])
    make_translation("error.generic", "Oops")

    # Act
    result = translation_service.search(session, term="WELCOME", tags=["mobile"])

    # Assert
    assert result.count == 2
    assert [t.key for t in result.data] == ["common.subtitle", "common.title"]


def test_search_term_matches_keys(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("error.generic", "Oops")
    make_translation("common.title", "Hello")

    result = translation_service.search(session, term="error")

    assert [t.key for t in result.data] == ["error.generic"]


def test_search_treats_wildcards_literally(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("stats.ratio", "100% done")
    make_translation("stats.other", "Nothing here")

    result = translation_service.search(session, term="%")

    assert result.count == 1
    assert result.data[0].key == "stats.ratio"


def test_search_without_criteria_is_empty(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello")

    result = translation_service.search(session, term="", tags=[])

    assert result.count == 0
    assert result.data == []


def test_search_is_ordered_by_key_then_language(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("b.key", "shared", language_code="fr")
    make_translation("b.key", "shared", language_code="en")
    make_translation("a.key", "shared", language_code="fr")

    result = translation_service.search(session, term="shared")

    assert [(t.key, t.language_code) for t in result.data] == [
        ("a.key", "fr"),
        ("b.key", "en"),
        ("b.key", "fr"),
    ]


def test_search_paginates(
    session: Session, translation_service: TranslationService, make_translation
):
    for index in range(5):
        make_translation(f"list.item{index}", f"Item {index}")

    first = translation_service.search(session, term="item", page=0, size=2)
    last = translation_service.search(session, term="item", page=2, size=2)
    beyond = translation_service.search(session, term="item", page=10, size=2)

    assert first.count == last.count == beyond.count == 5
    assert [t.key for t in first.data] == ["list.item0", "list.item1"]
    assert [t.key for t in last.data] == ["list.item4"]
    assert beyond.data == []


def test_search_clamps_page_size(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello")

    result = translation_service.search(
        session, term="hello", size=settings.MAX_PAGE_SIZE + 50
    )

    assert result.size == settings.MAX_PAGE_SIZE


@pytest.mark.parametrize("page,size", [(-1, 10), (0, 0), (0, -5)])
def test_search_rejects_bad_paging(
    session: Session, translation_service: TranslationService, page: int, size: int
):
    with pytest.raises(ValidationError):
        translation_service.search(session, term="x", page=page, size=size)


def test_export_builds_nested_tree(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.button.save", "Save")
    make_translation("common.button.cancel", "Cancel")
    make_translation("common.button.save", "Enregistrer", language_code="fr")

    tree = translation_service.export(session, "en")

    assert tree == {"common": {"button": {"save": "Save", "cancel": "Cancel"}}}


def test_export_of_unknown_language_is_empty(
    session: Session, translation_service: TranslationService
):
    assert translation_service.export(session, "zz") == {}


def test_export_reflects_writes(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello")
    assert translation_service.export(session, "en") == {"common": {"title": "Hello"}}

    translation_service.delete(session, "common.title", "en")

    assert translation_service.export(session, "en") == {}


def test_list_for_language(
    session: Session, translation_service: TranslationService, make_translation
):
    make_translation("common.title", "Hello")
    make_translation("common.title", "Bonjour", language_code="fr")

    records = translation_service.list_for_language(session, "en")

    assert records == [("common.title", "Hello")]
