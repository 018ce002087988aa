"""Unit of Work pattern for atomic database operations.

Provides transaction management with automatic commit/rollback,
ensuring related database operations succeed or fail together.

Based on patterns from Cosmic Python:
https://www.cosmicpython.com/book/chapter_06_uow.html
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager

from sqlmodel import Session

from lexicon.core.db import engine
from lexicon.core.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """Manages a database transaction.

    Wraps a SQLModel session and provides explicit commit/rollback control.
    Callbacks registered with ``on_commit`` run once the transaction has
    committed and are dropped on rollback.

    Attributes:
        session: The underlying SQLModel session
    """

    def __init__(self, session: Session):
        self._session = session
        self._committed = False
        self._on_commit: list[Callable[[], None]] = []

    @property
    def session(self) -> Session:
        """Access the underlying session for queries."""
        return self._session

    def on_commit(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` after a successful commit."""
        self._on_commit.append(callback)

    def commit(self) -> None:
        """Commit the transaction.

        Should only be called once. Subsequent calls are no-ops.
        """
        if self._committed:
            return
        self._session.commit()
        self._committed = True
        logger.debug("uow_committed")

        callbacks, self._on_commit = self._on_commit, []
        for callback in callbacks:
            callback()

    def rollback(self) -> None:
        """Rollback the transaction.

        Safe to call multiple times or after commit.
        """
        self._on_commit.clear()
        if not self._committed:
            self._session.rollback()
            logger.debug("uow_rolled_back")


@contextmanager
def atomic(
    session: Session | None = None,
) -> Generator[UnitOfWork, None, None]:
    """Context manager for atomic database operations.

    Ensures all database operations within the block either
    succeed together or are rolled back together.

    Args:
        session: Optional existing session. If None, creates a new one.

    Yields:
        UnitOfWork instance for the transaction

    Usage:
        with atomic(session) as uow:
            language = Language(code="en", name="English")
            uow.session.add(language)
            uow.on_commit(cache.invalidate_all)
            # Commits automatically on success
    """
    owns_session = session is None
    active_session = Session(engine) if owns_session else session
    assert active_session is not None  # for type narrowing

    uow = UnitOfWork(active_session)

    try:
        yield uow
        uow.commit()
    except Exception:
        uow.rollback()
        raise
    finally:
        if owns_session:
            active_session.close()
