from collections.abc import Generator
from typing import Any, TypeVar

from sqlalchemy import event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine, func, select
from sqlmodel.sql.expression import SelectOfScalar

from lexicon.core.config import settings


def _make_engine(url: str) -> Engine:
    echo = settings.DEBUG and settings.ENVIRONMENT == "local"

    if not url.startswith("sqlite"):
        return create_engine(
            url,
            pool_size=5,
            max_overflow=10,
            pool_pre_ping=True,
            pool_recycle=3600,
            echo=echo,
        )

    sqlite_engine = create_engine(
        url,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=echo,
    )

    # pysqlite defers BEGIN until the first DML statement, which breaks
    # SAVEPOINT semantics. Take over transaction control from the driver.
    @event.listens_for(sqlite_engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, _record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sqlite_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(sqlite_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return sqlite_engine


engine = _make_engine(settings.SQLALCHEMY_DATABASE_URI)


def get_db() -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


def init_db(target: Engine | None = None) -> None:
    """Create any missing tables for all registered models."""
    # Imported for their side effect of registering tables on the metadata
    from lexicon.languages.models import Language  # noqa: F401
    from lexicon.tags.models import Tag  # noqa: F401
    from lexicon.translations.models import Translation  # noqa: F401

    SQLModel.metadata.create_all(target or engine)


T = TypeVar("T", bound=SQLModel)


def paginate(
    session: Session,
    statement: SelectOfScalar[T],
    skip: int = 0,
    limit: int = 100,
    order_by: list[InstrumentedAttribute[Any]] | None = None,
) -> tuple[list[T], int]:
    """Execute a paginated query and return results with total count.

    Counts all rows matched by ``statement``, then fetches one page of them
    with offset/limit. An offset past the end yields an empty list, not an
    error.

    Args:
        session: Database session
        statement: Base SQLModel select statement (without pagination)
        skip: Number of records to skip (offset)
        limit: Maximum number of records to return
        order_by: Optional columns to order by

    Returns:
        Tuple of (list of results, total count)
    """
    count_statement = select(func.count()).select_from(statement.subquery())
    count = session.exec(count_statement).one()

    if order_by:
        statement = statement.order_by(*order_by)

    paginated_statement = statement.offset(skip).limit(limit)
    results = session.exec(paginated_statement).all()

    return list(results), count


# PostgreSQL SQLSTATE codes
_UNIQUE_VIOLATION = "23505"
_FOREIGN_KEY_VIOLATION = "23503"


def _violation(error: IntegrityError) -> tuple[str | None, str | None, str]:
    orig = error.orig
    diag = getattr(orig, "diag", None)
    return (
        getattr(orig, "sqlstate", None),
        getattr(diag, "constraint_name", None),
        str(orig),
    )


def is_unique_violation(error: IntegrityError, constraint: str) -> bool:
    """Whether ``error`` was raised by the unique constraint ``constraint``.

    PostgreSQL names the violated constraint. SQLite only reports
    "UNIQUE constraint failed" with the column list, so any unique failure
    counts there.
    """
    sqlstate, constraint_name, message = _violation(error)
    if sqlstate is not None:
        return sqlstate == _UNIQUE_VIOLATION and constraint_name == constraint
    return constraint in message or "UNIQUE constraint failed" in message


def is_foreign_key_violation(error: IntegrityError) -> bool:
    sqlstate, _constraint_name, message = _violation(error)
    if sqlstate is not None:
        return sqlstate == _FOREIGN_KEY_VIOLATION
    return "FOREIGN KEY constraint failed" in message
