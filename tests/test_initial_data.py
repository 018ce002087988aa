"""Tests for the sample data seeder."""

from sqlmodel import Session, func, select

from lexicon.core.db import engine
from lexicon.languages.models import Language
from lexicon.scripts import initial_data
from lexicon.translations.models import Translation


def _count(model) -> int:
    with Session(engine) as session:
        return session.exec(select(func.count()).select_from(model)).one()


def test_seeds_every_language_with_the_same_keys():
    initial_data.init(per_language=4)

    assert _count(Language) == len(initial_data.LANGUAGES)
    assert _count(Translation) == 4 * len(initial_data.LANGUAGES)


def test_running_twice_adds_nothing():
    initial_data.init(per_language=3)
    initial_data.init(per_language=3)

    assert _count(Translation) == 3 * len(initial_data.LANGUAGES)
