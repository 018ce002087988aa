from lexicon.auth.crud import authenticate
from lexicon.auth.deps import (
    CurrentUser,
    SessionDep,
    TokenDep,
    get_current_user,
)
from lexicon.auth.models import (
    AuthenticatedUser,
    LoginRequest,
    Token,
    TokenPayload,
)
from lexicon.core.db import get_db

__all__ = [
    "AuthenticatedUser",
    "CurrentUser",
    "LoginRequest",
    # Dependencies
    "SessionDep",
    "Token",
    "TokenDep",
    "TokenPayload",
    "authenticate",
    "get_current_user",
    "get_db",
]
