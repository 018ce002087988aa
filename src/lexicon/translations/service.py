"""Translation store: writes, cached point lookups, search and export.

Every successful write clears the whole TranslationCache once its transaction
has committed. A reader that hits the cache between the commit and the
eviction can still see the previous value; that window is bounded by the
eviction call that follows the commit and is not treated as an error.
"""

from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from lexicon.core.cache import TranslationCache
from lexicon.core.config import settings
from lexicon.core.db import is_foreign_key_violation, is_unique_violation
from lexicon.core.exceptions import (
    ResourceExistsError,
    ResourceNotFoundError,
    ValidationError,
)
from lexicon.core.logging import get_logger
from lexicon.core.uow import atomic
from lexicon.languages import crud as languages_crud
from lexicon.languages.models import normalize_language_code
from lexicon.tags.resolver import resolve_tags
from lexicon.translations import crud
from lexicon.translations.export import ExportTree, build_export_tree
from lexicon.translations.models import (
    UNIQUE_KEY_LANGUAGE,
    Translation,
    TranslationCreate,
    TranslationPublic,
    TranslationsPublic,
    TranslationUpdate,
)

logger = get_logger(__name__)


class TranslationService:
    def __init__(self, cache: TranslationCache):
        self._cache = cache

    def create(
        self, session: Session, translation_in: TranslationCreate
    ) -> TranslationPublic:
        code = normalize_language_code(translation_in.language_code)

        with atomic(session) as uow:
            language = languages_crud.get_language_by_code(
                session=uow.session, code=code
            )
            if language is None:
                raise ResourceNotFoundError("Language", code)

            tags = resolve_tags(session=uow.session, names=translation_in.tags)
            try:
                translation = crud.create_translation(
                    session=uow.session,
                    key=translation_in.key,
                    content=translation_in.content,
                    language=language,
                    tags=tags,
                )
            except IntegrityError as e:
                if is_unique_violation(e, UNIQUE_KEY_LANGUAGE):
                    raise ResourceExistsError("Translation", "key and language") from e
                if is_foreign_key_violation(e):
                    # The language was deleted after it was looked up
                    raise ResourceNotFoundError("Language", code) from e
                raise
            uow.on_commit(self._cache.invalidate_all)

        logger.info(
            "translation_created",
            key=translation_in.key,
            language=code,
            tags=[tag.name for tag in tags],
        )
        return TranslationPublic.from_translation(translation)

    def update(
        self,
        session: Session,
        key: str,
        language_code: str,
        translation_in: TranslationUpdate,
    ) -> TranslationPublic:
        code = normalize_language_code(language_code)

        with atomic(session) as uow:
            translation = self._require(uow.session, key, code)
            tags = None
            if translation_in.tags is not None:
                tags = resolve_tags(session=uow.session, names=translation_in.tags)
            translation = crud.update_translation(
                session=uow.session,
                db_translation=translation,
                content=translation_in.content,
                tags=tags,
            )
            uow.on_commit(self._cache.invalidate_all)

        logger.info(
            "translation_updated",
            key=key,
            language=code,
            tags_replaced=tags is not None,
        )
        return TranslationPublic.from_translation(translation)

    def get(self, session: Session, key: str, language_code: str) -> TranslationPublic:
        code = normalize_language_code(language_code)

        def load() -> TranslationPublic:
            return TranslationPublic.from_translation(self._require(session, key, code))

        return self._cache.get_or_load_translation(key, code, load)

    def delete(self, session: Session, key: str, language_code: str) -> None:
        code = normalize_language_code(language_code)

        with atomic(session) as uow:
            translation = self._require(uow.session, key, code)
            crud.delete_translation(session=uow.session, db_translation=translation)
            uow.on_commit(self._cache.invalidate_all)

        logger.info("translation_deleted", key=key, language=code)

    def search(
        self,
        session: Session,
        term: str | None = None,
        tags: list[str] | None = None,
        page: int = 0,
        size: int | None = None,
    ) -> TranslationsPublic:
        """Page through translations matching the term OR any of the tags."""
        if size is None:
            size = settings.DEFAULT_PAGE_SIZE
        if page < 0:
            raise ValidationError("Page number cannot be negative", field="page")
        if size < 1:
            raise ValidationError("Page size must be greater than 0", field="size")
        size = min(size, settings.MAX_PAGE_SIZE)

        translations, count = crud.search_translations(
            session=session,
            term=term,
            tags=tags,
            skip=page * size,
            limit=size,
        )
        return TranslationsPublic(
            data=[TranslationPublic.from_translation(t) for t in translations],
            count=count,
            page=page,
            size=size,
        )

    def list_for_language(
        self, session: Session, language_code: str
    ) -> list[tuple[str, str]]:
        return crud.list_for_language(
            session=session, language_code=normalize_language_code(language_code)
        )

    def export(self, session: Session, language_code: str) -> ExportTree:
        """Nested key tree for one language; empty when the language is unknown."""
        code = normalize_language_code(language_code)

        def on_collision(key: str, path: str) -> None:
            logger.warning(
                "export_key_collision", language=code, key=key, overwritten=path
            )

        def load() -> dict[str, Any]:
            records = self.list_for_language(session, code)
            return build_export_tree(records, on_collision=on_collision)

        return self._cache.get_or_load_export(code, load)

    def _require(self, session: Session, key: str, code: str) -> Translation:
        translation = crud.get_translation(
            session=session, key=key, language_code=code
        )
        if translation is None:
            raise ResourceNotFoundError("Translation", f"{key} ({code})")
        return translation
