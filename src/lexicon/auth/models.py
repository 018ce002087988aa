from sqlmodel import Field, SQLModel


class LoginRequest(SQLModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1, max_length=128)


class Token(SQLModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # Access token expiry in seconds


class TokenPayload(SQLModel):
    sub: str | None = None
    type: str = "access"
    jti: str | None = None


class AuthenticatedUser(SQLModel):
    username: str
