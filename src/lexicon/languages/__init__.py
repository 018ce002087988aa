from lexicon.languages.crud import (
    count_translations,
    create_language,
    delete_language,
    get_language_by_code,
    get_languages,
    update_language,
)
from lexicon.languages.models import (
    Language,
    LanguageBase,
    LanguageCreate,
    LanguagePublic,
    LanguageUpdate,
    normalize_language_code,
    validate_language_code,
)

__all__ = [
    # Models
    "Language",
    "LanguageBase",
    "LanguageCreate",
    "LanguagePublic",
    "LanguageUpdate",
    "normalize_language_code",
    "validate_language_code",
    # CRUD
    "count_translations",
    "create_language",
    "delete_language",
    "get_language_by_code",
    "get_languages",
    "update_language",
]
