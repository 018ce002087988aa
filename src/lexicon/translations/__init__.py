from lexicon.translations.crud import (
    create_translation,
    delete_translation,
    get_translation,
    list_for_language,
    search_translations,
    update_translation,
)
from lexicon.translations.export import build_export_tree
from lexicon.translations.models import (
    Translation,
    TranslationCreate,
    TranslationPublic,
    TranslationSearch,
    TranslationsPublic,
    TranslationUpdate,
)

__all__ = [
    # Models
    "Translation",
    "TranslationCreate",
    "TranslationPublic",
    "TranslationSearch",
    "TranslationUpdate",
    "TranslationsPublic",
    # CRUD
    "create_translation",
    "delete_translation",
    "get_translation",
    "list_for_language",
    "search_translations",
    "update_translation",
    # Export
    "build_export_tree",
]
