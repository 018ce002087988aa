import uuid

from sqlmodel import Session, col, func, select

from lexicon.core.base_models import utcnow
from lexicon.languages.models import Language, LanguageCreate, LanguageUpdate
from lexicon.translations.models import Translation


def create_language(*, session: Session, language_in: LanguageCreate) -> Language:
    """Stage a new language and flush it so constraint violations surface.

    Args:
        session: Database session
        language_in: Language creation data (code already normalized)

    Returns:
        Created language object
    """
    db_language = Language.model_validate(language_in)
    session.add(db_language)
    session.flush()
    return db_language


def get_language_by_code(*, session: Session, code: str) -> Language | None:
    statement = select(Language).where(Language.code == code)
    return session.exec(statement).first()


def get_languages(*, session: Session) -> list[Language]:
    statement = select(Language).order_by(col(Language.code).asc())
    return list(session.exec(statement).all())


def update_language(
    *, session: Session, db_language: Language, language_in: LanguageUpdate
) -> Language:
    db_language.sqlmodel_update(language_in.model_dump())
    db_language.updated_at = utcnow()
    session.add(db_language)
    session.flush()
    return db_language


def count_translations(*, session: Session, language_id: uuid.UUID) -> int:
    statement = (
        select(func.count())
        .select_from(Translation)
        .where(Translation.language_id == language_id)
    )
    return session.exec(statement).one()


def delete_language(*, session: Session, db_language: Language) -> None:
    session.delete(db_language)
    session.flush()
