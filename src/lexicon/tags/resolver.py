"""Tag resolution: map tag names to persisted tags, creating missing ones.

Tag names are unique at the database level. When two writers race to create
the same new tag, the loser's insert fails the unique constraint inside its
own SAVEPOINT; that is rolled back and the winner's row is fetched instead.
"""

from collections.abc import Collection, Iterable

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from lexicon.core.logging import get_logger
from lexicon.tags.models import Tag

logger = get_logger(__name__)


def find_tags_by_name(*, session: Session, names: Collection[str]) -> list[Tag]:
    """Fetch all existing tags whose name is in ``names`` with one query."""
    if not names:
        return []
    statement = select(Tag).where(col(Tag.name).in_(names))
    return list(session.exec(statement).all())


def get_tag_by_name(*, session: Session, name: str) -> Tag | None:
    return session.exec(select(Tag).where(Tag.name == name)).first()


def resolve_tags(*, session: Session, names: Iterable[str] | None) -> list[Tag]:
    """Resolve tag names to Tag rows, creating any that don't exist yet.

    Duplicate names collapse, so the result holds exactly one Tag per distinct
    requested name, ordered by name. Empty or missing input returns an empty
    list without touching the database.

    Args:
        session: Database session (inside the caller's transaction)
        names: Requested tag names

    Returns:
        List of Tag objects
    """
    requested = set(names or ())
    if not requested:
        return []

    resolved = {
        tag.name: tag for tag in find_tags_by_name(session=session, names=requested)
    }
    for name in sorted(requested - resolved.keys()):
        resolved[name] = _create_tag(session=session, name=name)

    return [resolved[name] for name in sorted(resolved)]


def _create_tag(*, session: Session, name: str) -> Tag:
    tag = Tag(name=name)
    try:
        with session.begin_nested():
            session.add(tag)
    except IntegrityError:
        existing = get_tag_by_name(session=session, name=name)
        if existing is None:
            raise
        logger.info("tag_created_concurrently", name=name)
        return existing

    logger.debug("tag_created", name=name)
    return tag
