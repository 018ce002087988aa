"""Authentication routes package.

- login: Credential exchange for a bearer token
"""

from fastapi import APIRouter

from lexicon.api.routes.auth import login

router = APIRouter(prefix="/auth", tags=["auth"])

router.include_router(login.router)
