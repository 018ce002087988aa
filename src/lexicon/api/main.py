from fastapi import APIRouter

from lexicon.api.routes import auth, languages, translations

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(languages.router)
api_router.include_router(translations.router)
