"""Login and token authentication routes."""

from typing import Any

from fastapi import APIRouter, Request

from lexicon.auth import CurrentUser, LoginRequest, Token, authenticate
from lexicon.auth.models import AuthenticatedUser
from lexicon.core.rate_limit import AUTH_RATE_LIMIT, limiter

router = APIRouter()


@router.post("/login", response_model=Token)
@limiter.limit(AUTH_RATE_LIMIT)
def login_access_token(
    request: Request,  # Required for rate limiter
    body: LoginRequest,
) -> Token:
    """Exchange username and password for a bearer access token.

    Rate limited to prevent brute force attacks.
    """
    return authenticate(username=body.username, password=body.password)


@router.post("/test-token", response_model=AuthenticatedUser)
def test_token(current_user: CurrentUser) -> Any:
    """Test access token validity."""
    return current_user
