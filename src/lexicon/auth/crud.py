from functools import lru_cache
import secrets

from lexicon.auth.models import Token
from lexicon.core.config import settings
from lexicon.core.exceptions import AuthenticationError
from lexicon.core.logging import get_logger
from lexicon.core.security import (
    create_access_token,
    get_password_hash,
    verify_password,
)

logger = get_logger(__name__)


@lru_cache
def _admin_password_hash() -> str:
    # Hashed once per process so the plain password is never compared directly
    return get_password_hash(settings.ADMIN_PASSWORD)


def authenticate(*, username: str, password: str) -> Token:
    """Exchange a username/password pair for a bearer token.

    The password hash is always verified, even for an unknown username, so
    response time does not reveal which part of the credentials was wrong.

    Args:
        username: Account name
        password: Plain-text password

    Returns:
        Signed access token

    Raises:
        AuthenticationError: If the credentials don't match
    """
    password_ok = verify_password(password, _admin_password_hash())
    username_ok = secrets.compare_digest(
        username.encode("utf-8"), settings.ADMIN_USERNAME.encode("utf-8")
    )
    if not (password_ok and username_ok):
        logger.warning("authentication_failed", username=username)
        raise AuthenticationError("Invalid credentials")

    access_token = create_access_token(username)
    logger.info("user_authenticated", username=username)
    return Token(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
