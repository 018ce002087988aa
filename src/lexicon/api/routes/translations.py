from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Request, status

from lexicon.api.deps import TranslationServiceDep
from lexicon.auth import SessionDep, get_current_user
from lexicon.core.rate_limit import EXPORT_RATE_LIMIT, limiter
from lexicon.translations import (
    TranslationCreate,
    TranslationPublic,
    TranslationSearch,
    TranslationsPublic,
    TranslationUpdate,
)

router = APIRouter(
    prefix="/translations",
    tags=["translations"],
    dependencies=[Depends(get_current_user)],
)

TranslationKey = Annotated[str, Path(description="Dotted translation key")]
LanguageCode = Annotated[str, Path(description="Language code")]


@router.post(
    "/", response_model=TranslationPublic, status_code=status.HTTP_201_CREATED
)
def create_translation(
    session: SessionDep,
    service: TranslationServiceDep,
    translation_in: TranslationCreate,
) -> Any:
    """Create a translation. Unknown tags are created on the fly."""
    return service.create(session, translation_in)


@router.post("/search", response_model=TranslationsPublic)
def search_translations(
    session: SessionDep,
    service: TranslationServiceDep,
    search_in: TranslationSearch,
) -> Any:
    """Search translations.

    A translation matches when its content or key contains ``term``
    (case-insensitive) OR it carries any of ``tags``. With neither a term nor
    tags the result is empty.
    """
    return service.search(
        session,
        term=search_in.term,
        tags=search_in.tags,
        page=search_in.page,
        size=search_in.size,
    )


# Declared before the /{key}/{language_code} routes so "export" isn't read as a key
@router.get("/export/{language_code}", response_model=dict[str, Any])
@limiter.limit(EXPORT_RATE_LIMIT)
def export_translations(
    request: Request,  # Required for rate limiter
    session: SessionDep,
    service: TranslationServiceDep,
    language_code: LanguageCode,
) -> Any:
    """Export one language as a nested JSON tree keyed by key segments."""
    return service.export(session, language_code)


@router.get("/{key}/{language_code}", response_model=TranslationPublic)
def read_translation(
    session: SessionDep,
    service: TranslationServiceDep,
    key: TranslationKey,
    language_code: LanguageCode,
) -> Any:
    return service.get(session, key, language_code)


@router.put("/{key}/{language_code}", response_model=TranslationPublic)
def update_translation(
    session: SessionDep,
    service: TranslationServiceDep,
    key: TranslationKey,
    language_code: LanguageCode,
    translation_in: TranslationUpdate,
) -> Any:
    """Replace a translation's content.

    Omitting ``tags`` keeps the current tags; ``"tags": []`` removes them all.
    """
    return service.update(session, key, language_code, translation_in)


@router.delete("/{key}/{language_code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_translation(
    session: SessionDep,
    service: TranslationServiceDep,
    key: TranslationKey,
    language_code: LanguageCode,
) -> None:
    service.delete(session, key, language_code)
