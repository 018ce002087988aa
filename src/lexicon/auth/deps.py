from typing import Annotated

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
import jwt
from pydantic import ValidationError
from sqlmodel import Session

from lexicon.auth.models import AuthenticatedUser, TokenPayload
from lexicon.core.config import settings
from lexicon.core.db import get_db
from lexicon.core.exceptions import AuthenticationError
from lexicon.core.security import decode_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")

SessionDep = Annotated[Session, Depends(get_db)]
TokenDep = Annotated[str, Depends(oauth2_scheme)]


def get_current_user(token: TokenDep) -> AuthenticatedUser:
    """Resolve the caller from the bearer token.

    Args:
        token: JWT token from Authorization header

    Returns:
        The authenticated account

    Raises:
        AuthenticationError: If the token is invalid, expired or not an
            access token
    """
    try:
        payload = decode_token(token)
        token_data = TokenPayload(**payload)
    except (jwt.InvalidTokenError, ValidationError) as e:
        raise AuthenticationError("Could not validate credentials") from e

    if token_data.type != "access":
        raise AuthenticationError(
            "Invalid token type. Use access token for API requests."
        )
    if not token_data.sub or token_data.sub != settings.ADMIN_USERNAME:
        raise AuthenticationError("Unknown token subject")

    return AuthenticatedUser(username=token_data.sub)


CurrentUser = Annotated[AuthenticatedUser, Depends(get_current_user)]
