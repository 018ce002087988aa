from typing import Annotated

from fastapi import Depends, Request

from lexicon.core.cache import TranslationCache
from lexicon.languages.service import LanguageService
from lexicon.translations.service import TranslationService


def get_translation_cache(request: Request) -> TranslationCache:
    """The application's shared cache, created once in the app factory."""
    cache: TranslationCache = request.app.state.translation_cache
    return cache


TranslationCacheDep = Annotated[TranslationCache, Depends(get_translation_cache)]


def get_language_service(cache: TranslationCacheDep) -> LanguageService:
    return LanguageService(cache)


def get_translation_service(cache: TranslationCacheDep) -> TranslationService:
    return TranslationService(cache)


LanguageServiceDep = Annotated[LanguageService, Depends(get_language_service)]
TranslationServiceDep = Annotated[
    TranslationService, Depends(get_translation_service)
]
