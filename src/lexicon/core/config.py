from functools import lru_cache
import os
import secrets
from typing import Annotated, Any, Literal
import warnings

from pydantic import (
    AnyUrl,
    BeforeValidator,
    ValidationInfo,
    computed_field,
    field_validator,
)
from pydantic_core import MultiHostUrl
from pydantic_settings import BaseSettings, SettingsConfigDict

# Minimum recommended length for SECRET_KEY in characters
MIN_SECRET_KEY_LENGTH = 32


def parse_cors(v: Any) -> list[str] | str:
    if isinstance(v, str) and not v.startswith("["):
        return [i.strip() for i in v.split(",") if i.strip()]
    if isinstance(v, list | str):
        return v
    raise ValueError(v)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    API_V1_STR: str = "/v1"
    PROJECT_NAME: str = "Lexicon Translation API"
    DEBUG: bool = False
    # Overrides the DEBUG-derived level when set (e.g. "WARNING")
    LOG_LEVEL: str | None = None

    HOST: str = "0.0.0.0"
    PORT: int = 8000

    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    CORS_ORIGINS: Annotated[list[AnyUrl] | str, BeforeValidator(parse_cors)] = []

    @computed_field  # type: ignore[prop-decorator]
    @property
    def all_cors_origins(self) -> list[str]:
        """Return all CORS origins as strings."""
        return [str(origin).rstrip("/") for origin in self.CORS_ORIGINS]

    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "changethis"
    POSTGRES_DB: str = "lexicon"

    # Full SQLAlchemy URL; takes precedence over the POSTGRES_* fields
    DATABASE_URL: str | None = None

    @field_validator("POSTGRES_PASSWORD", mode="after")
    @classmethod
    def validate_postgres_password(cls, v: str, info: ValidationInfo) -> str:
        """Validate that POSTGRES_PASSWORD is changed in production."""
        env = (
            info.data.get("ENVIRONMENT")
            if info.data
            else os.getenv("ENVIRONMENT", "local")
        )
        if v == "changethis" and env == "production":
            raise ValueError(
                "POSTGRES_PASSWORD must be changed from default value in production. "
                "Set a strong, unique password via the POSTGRES_PASSWORD environment variable."
            )
        return v

    @computed_field  # type: ignore[prop-decorator]
    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Build the SQLAlchemy connection URI."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return str(
            MultiHostUrl.build(
                scheme="postgresql+psycopg",
                username=self.POSTGRES_USER,
                password=self.POSTGRES_PASSWORD,
                host=self.POSTGRES_SERVER,
                port=self.POSTGRES_PORT,
                path=self.POSTGRES_DB,
            )
        )

    # JWT Security Settings
    # If SECRET_KEY is not set, a random key is generated (development only)
    SECRET_KEY: str = ""
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    @field_validator("SECRET_KEY", mode="before")
    @classmethod
    def validate_secret_key(cls, v: str, info: ValidationInfo) -> str:
        """Validate and warn about SECRET_KEY configuration."""
        if not v:
            generated_key = secrets.token_urlsafe(MIN_SECRET_KEY_LENGTH)
            warnings.warn(
                "SECRET_KEY not set! Using a randomly generated key. "
                "This is only suitable for development. "
                "Set SECRET_KEY environment variable in production.",
                UserWarning,
                stacklevel=2,
            )
            return generated_key
        if len(v) < MIN_SECRET_KEY_LENGTH:
            warnings.warn(
                f"SECRET_KEY is shorter than {MIN_SECRET_KEY_LENGTH} characters. "
                "Consider using a longer key for better security.",
                UserWarning,
                stacklevel=2,
            )
        return v

    # Single administrative account allowed to obtain tokens
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = "changethis"

    @field_validator("ADMIN_PASSWORD", mode="after")
    @classmethod
    def validate_admin_password(cls, v: str, info: ValidationInfo) -> str:
        """Refuse the default admin password outside local development."""
        env = (
            info.data.get("ENVIRONMENT")
            if info.data
            else os.getenv("ENVIRONMENT", "local")
        )
        if v == "changethis" and env == "production":
            raise ValueError(
                "ADMIN_PASSWORD must be changed from default value in production."
            )
        if v == "changethis" and env != "local":
            warnings.warn(
                "ADMIN_PASSWORD is set to default value 'changethis'. "
                "Consider using a strong, unique password.",
                UserWarning,
                stacklevel=2,
            )
        return v

    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    # Sample data generated by scripts/initial_data.py
    SEED_TRANSLATIONS_PER_LANGUAGE: int = 200


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
