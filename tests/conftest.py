"""Shared fixtures.

The environment is configured before anything from ``lexicon`` is imported so
that the module-level settings and engine point at an in-memory SQLite
database instead of PostgreSQL.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "local"
os.environ["SECRET_KEY"] = "test-secret-key-that-is-long-enough-for-hs256"
os.environ["ADMIN_USERNAME"] = "admin"
os.environ["ADMIN_PASSWORD"] = "correct-horse-battery"
os.environ["LOG_LEVEL"] = "WARNING"

from collections.abc import Generator  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import pytest  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from lexicon.core.cache import TranslationCache  # noqa: E402
from lexicon.core.db import engine, init_db  # noqa: E402
from lexicon.languages.models import LanguageCreate  # noqa: E402
from lexicon.languages.service import LanguageService  # noqa: E402
from lexicon.main import create_app  # noqa: E402
from lexicon.translations.models import TranslationCreate  # noqa: E402
from lexicon.translations.service import TranslationService  # noqa: E402

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct-horse-battery"


@pytest.fixture(autouse=True)
def tables() -> Generator[None, None, None]:
    """Fresh schema for every test."""
    init_db()
    yield
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session() -> Generator[Session, None, None]:
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture
def cache() -> TranslationCache:
    return TranslationCache()


@pytest.fixture
def language_service(cache: TranslationCache) -> LanguageService:
    return LanguageService(cache)


@pytest.fixture
def translation_service(cache: TranslationCache) -> TranslationService:
    return TranslationService(cache)


@pytest.fixture
def english(session: Session, language_service: LanguageService):
    return language_service.create(session, LanguageCreate(code="en", name="English"))


@pytest.fixture
def french(session: Session, language_service: LanguageService):
    return language_service.create(session, LanguageCreate(code="fr", name="French"))


@pytest.fixture
def make_translation(session: Session, translation_service: TranslationService):
    """Factory creating a translation through the service."""

    def _make(
        key: str,
        content: str,
        language_code: str = "en",
        tags: list[str] | None = None,
    ):
        return translation_service.create(
            session,
            TranslationCreate(
                key=key, content=content, language_code=language_code, tags=tags
            ),
        )

    return _make


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    app = create_app(cache=TranslationCache())
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    response = client.post(
        "/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
