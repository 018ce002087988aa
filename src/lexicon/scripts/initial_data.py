"""Seed the database with sample languages and translations.

Registers a handful of languages, then generates keys of the form
``<category>.<section>.key<N>`` for each of them with a random subset of the
sample tags. Safe to re-run: existing languages and translations are skipped.
"""

import random

from sqlmodel import Session

from lexicon.core.cache import TranslationCache
from lexicon.core.config import settings
from lexicon.core.db import engine, init_db
from lexicon.core.exceptions import ResourceExistsError
from lexicon.core.logging import get_logger, setup_logging
from lexicon.languages.models import LanguageCreate
from lexicon.languages.service import LanguageService
from lexicon.translations import crud as translations_crud
from lexicon.translations.models import TranslationCreate
from lexicon.translations.service import TranslationService

logger = get_logger(__name__)

LANGUAGES = {
    "en": "English",
    "fr": "French",
    "es": "Spanish",
    "de": "German",
    "it": "Italian",
}
CATEGORIES = ["common", "error", "success", "validation", "navigation"]
SECTIONS = ["header", "footer", "sidebar", "main", "form"]
TAGS = ["mobile", "web", "desktop"]


def seed_languages(session: Session, service: LanguageService) -> None:
    for code, name in LANGUAGES.items():
        try:
            service.create(session, LanguageCreate(code=code, name=name))
            logger.info("language_seeded", code=code)
        except ResourceExistsError:
            logger.info("language_exists", code=code)


def seed_translations(
    session: Session,
    service: TranslationService,
    per_language: int,
    rng: random.Random,
) -> int:
    created = 0
    for index in range(per_language):
        category = rng.choice(CATEGORIES)
        section = rng.choice(SECTIONS)
        key = f"{category}.{section}.key{index}"
        tags = rng.sample(TAGS, k=rng.randint(0, len(TAGS)))

        for code, name in LANGUAGES.items():
            if translations_crud.get_translation(
                session=session, key=key, language_code=code
            ):
                continue
            service.create(
                session,
                TranslationCreate(
                    key=key,
                    content=f"{name} text for {category} {section} #{index}",
                    language_code=code,
                    tags=tags,
                ),
            )
            created += 1

        if (index + 1) % 100 == 0:
            logger.info("seed_progress", keys=index + 1, created=created)
    return created


def init(per_language: int | None = None, seed: int = 42) -> None:
    """Create tables if needed and load the sample data."""
    init_db()
    cache = TranslationCache()
    rng = random.Random(seed)
    if per_language is None:
        per_language = settings.SEED_TRANSLATIONS_PER_LANGUAGE

    with Session(engine) as session:
        seed_languages(session, LanguageService(cache))
        created = seed_translations(
            session, TranslationService(cache), per_language, rng
        )
    logger.info("translations_seeded", created=created)


def main() -> None:
    setup_logging()
    logger.info("initial_data_start")
    init()
    logger.info("initial_data_done")


if __name__ == "__main__":
    main()
