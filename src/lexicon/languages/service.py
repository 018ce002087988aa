"""Registry of known languages.

Codes are compared and stored lowercase. Renames and deletions clear the
translation cache because cached lookups and exports are keyed by code.
"""

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from lexicon.core.cache import TranslationCache
from lexicon.core.exceptions import (
    IllegalStateError,
    ResourceExistsError,
    ResourceNotFoundError,
)
from lexicon.core.logging import get_logger
from lexicon.core.uow import atomic
from lexicon.languages import crud
from lexicon.languages.models import (
    Language,
    LanguageCreate,
    LanguageUpdate,
    normalize_language_code,
)

logger = get_logger(__name__)


class LanguageService:
    def __init__(self, cache: TranslationCache):
        self._cache = cache

    def create(self, session: Session, language_in: LanguageCreate) -> Language:
        code = normalize_language_code(language_in.code)
        language_in = language_in.model_copy(update={"code": code})

        with atomic(session) as uow:
            if crud.get_language_by_code(session=uow.session, code=code):
                raise ResourceExistsError("Language", "code")
            try:
                language = crud.create_language(
                    session=uow.session, language_in=language_in
                )
            except IntegrityError as e:
                raise ResourceExistsError("Language", "code") from e

        logger.info("language_created", code=code)
        return language

    def update(
        self, session: Session, code: str, language_in: LanguageUpdate
    ) -> Language:
        code = normalize_language_code(code)
        new_code = normalize_language_code(language_in.code)
        language_in = language_in.model_copy(update={"code": new_code})

        with atomic(session) as uow:
            language = self._require(uow.session, code)
            if new_code != code and crud.get_language_by_code(
                session=uow.session, code=new_code
            ):
                raise ResourceExistsError("Language", "code")
            try:
                language = crud.update_language(
                    session=uow.session, db_language=language, language_in=language_in
                )
            except IntegrityError as e:
                raise ResourceExistsError("Language", "code") from e
            uow.on_commit(self._cache.invalidate_all)

        logger.info("language_updated", code=code, new_code=new_code)
        return language

    def get(self, session: Session, code: str) -> Language:
        return self._require(session, normalize_language_code(code))

    def list(self, session: Session) -> list[Language]:
        return crud.get_languages(session=session)

    def delete(self, session: Session, code: str) -> None:
        code = normalize_language_code(code)

        with atomic(session) as uow:
            language = self._require(uow.session, code)
            in_use = crud.count_translations(
                session=uow.session, language_id=language.id
            )
            if in_use:
                raise IllegalStateError(
                    "Cannot delete language that has translations",
                    resource="Language",
                )
            crud.delete_language(session=uow.session, db_language=language)
            uow.on_commit(self._cache.invalidate_all)

        logger.info("language_deleted", code=code)

    def _require(self, session: Session, code: str) -> Language:
        language = crud.get_language_by_code(session=session, code=code)
        if language is None:
            raise ResourceNotFoundError("Language", code)
        return language
