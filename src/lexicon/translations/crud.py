from sqlalchemy import or_
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from lexicon.core.base_models import utcnow
from lexicon.core.db import paginate
from lexicon.languages.models import Language
from lexicon.tags.models import Tag, TranslationTagLink
from lexicon.translations.models import Translation


def _with_relations(statement):
    return statement.options(
        selectinload(Translation.language),  # type: ignore[arg-type]
        selectinload(Translation.tags),  # type: ignore[arg-type]
    )


def create_translation(
    *,
    session: Session,
    key: str,
    content: str,
    language: Language,
    tags: list[Tag],
) -> Translation:
    """Stage a new translation and flush it.

    The (key, language) unique constraint is checked by the database on
    flush; an IntegrityError propagates to the caller.
    """
    db_translation = Translation(
        key=key, content=content, language_id=language.id, language=language
    )
    db_translation.tags = list(tags)
    session.add(db_translation)
    session.flush()
    return db_translation


def get_translation(
    *, session: Session, key: str, language_code: str
) -> Translation | None:
    statement = (
        select(Translation)
        .join(Language)
        .where(Translation.key == key, Language.code == language_code)
    )
    return session.exec(_with_relations(statement)).first()


def update_translation(
    *,
    session: Session,
    db_translation: Translation,
    content: str,
    tags: list[Tag] | None = None,
) -> Translation:
    """Replace content and, when ``tags`` is not None, the whole tag set."""
    db_translation.content = content
    if tags is not None:
        db_translation.tags = list(tags)
    db_translation.updated_at = utcnow()
    session.add(db_translation)
    session.flush()
    return db_translation


def delete_translation(*, session: Session, db_translation: Translation) -> None:
    """Delete a translation and its tag links. Tag rows are kept."""
    session.delete(db_translation)
    session.flush()


def search_translations(
    *,
    session: Session,
    term: str | None,
    tags: list[str] | None,
    skip: int = 0,
    limit: int = 20,
) -> tuple[list[Translation], int]:
    """Find translations matching ANY of the supplied predicates.

    A row matches when its content contains ``term``, its key contains
    ``term`` (both case-insensitive), or it carries at least one of ``tags``.
    An empty term contributes no predicate, and with no term and no tags
    nothing matches.

    Returns:
        Tuple of (page of translations, total match count)
    """
    conditions = []
    if term:
        conditions.append(col(Translation.content).icontains(term, autoescape=True))
        conditions.append(col(Translation.key).icontains(term, autoescape=True))
    if tags:
        tagged = (
            select(TranslationTagLink.translation_id)
            .join(Tag, col(Tag.id) == col(TranslationTagLink.tag_id))
            .where(col(Tag.name).in_(tags))
        )
        conditions.append(col(Translation.id).in_(tagged))

    if not conditions:
        return [], 0

    statement = select(Translation).join(Language).where(or_(*conditions))
    return paginate(
        session,
        _with_relations(statement),
        skip=skip,
        limit=limit,
        order_by=[col(Translation.key), col(Language.code)],
    )


def list_for_language(*, session: Session, language_code: str) -> list[tuple[str, str]]:
    """Return every (key, content) pair stored for a language, unordered."""
    statement = (
        select(Translation.key, Translation.content)
        .join(Language)
        .where(Language.code == language_code)
    )
    return [(key, content) for key, content in session.exec(statement).all()]
