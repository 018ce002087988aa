from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, status

from lexicon.api.deps import LanguageServiceDep
from lexicon.auth import SessionDep, get_current_user
from lexicon.languages import (
    LanguageCreate,
    LanguagePublic,
    LanguageUpdate,
)

router = APIRouter(
    prefix="/languages",
    tags=["languages"],
    dependencies=[Depends(get_current_user)],
)

LanguageCode = Annotated[str, Path(description="Language code, e.g. 'en' or 'en-US'")]


@router.get("/", response_model=list[LanguagePublic])
def read_languages(session: SessionDep, service: LanguageServiceDep) -> Any:
    """List all registered languages ordered by code."""
    return service.list(session)


@router.post("/", response_model=LanguagePublic, status_code=status.HTTP_201_CREATED)
def create_language(
    session: SessionDep,
    service: LanguageServiceDep,
    language_in: LanguageCreate,
) -> Any:
    """Register a new language. The code is stored lowercase."""
    return service.create(session, language_in)


@router.get("/{code}", response_model=LanguagePublic)
def read_language(
    session: SessionDep, service: LanguageServiceDep, code: LanguageCode
) -> Any:
    return service.get(session, code)


@router.put("/{code}", response_model=LanguagePublic)
def update_language(
    session: SessionDep,
    service: LanguageServiceDep,
    code: LanguageCode,
    language_in: LanguageUpdate,
) -> Any:
    """Rename a language and/or change its display name."""
    return service.update(session, code, language_in)


@router.delete("/{code}", status_code=status.HTTP_204_NO_CONTENT)
def delete_language(
    session: SessionDep, service: LanguageServiceDep, code: LanguageCode
) -> None:
    """Delete a language. Refused while any translation still uses it."""
    service.delete(session, code)
