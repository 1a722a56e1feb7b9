"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "sqlite://",
)

SUPPORTED_JWT_ALGORITHMS = ("HS256", "HS384", "HS512")

# Placeholder shipped for local development; refused when APP_ENV=prod.
DEFAULT_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    # Routes are served at the root by default (/token, /objects, ...).
    API_PREFIX: str = ""

    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080

    DATABASE_URL: str = "sqlite:///./data/app.db"
    # Create missing tables at startup; use alembic instead for managed databases.
    DB_AUTO_CREATE: bool = True
    # Demo accounts (admin/password123, user/userpass). Unset means on in dev, off in prod.
    SEED_DEMO_USERS: bool | None = None

    # Token signing
    JWT_SECRET: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_SECONDS: int = 3600
    REFRESH_TOKEN_TTL_SECONDS: int = 7 * 24 * 3600

    # Bcrypt cost (rounds); 12 is a good default for security vs speed.
    BCRYPT_ROUNDS: int = 12

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        v = v.strip()
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a PostgreSQL or SQLite URL "
                "(e.g. postgresql://... or sqlite:///./data/app.db)"
            )
        if v.startswith("postgres://"):
            # SQLAlchemy only understands the postgresql:// spelling.
            v = "postgresql://" + v[len("postgres://"):]
        return v

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must be empty or start with '/'")
        return v

    @field_validator("SERVER_PORT")
    @classmethod
    def validate_server_port(cls, v: int) -> int:
        if v < 1 or v > 65535:
            raise ValueError("SERVER_PORT must be between 1 and 65535")
        return v

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in SUPPORTED_JWT_ALGORITHMS:
            raise ValueError(
                f"JWT_ALGORITHM must be one of {', '.join(SUPPORTED_JWT_ALGORITHMS)}"
            )
        return v

    @field_validator("TOKEN_TTL_SECONDS")
    @classmethod
    def validate_token_ttl(cls, v: int) -> int:
        if v < 1 or v > 7 * 24 * 3600:
            raise ValueError(
                "TOKEN_TTL_SECONDS must be between 1 and 604800 (1 second to 7 days)"
            )
        return v

    @field_validator("REFRESH_TOKEN_TTL_SECONDS")
    @classmethod
    def validate_refresh_token_ttl(cls, v: int) -> int:
        if v < 60 or v > 90 * 24 * 3600:
            raise ValueError(
                "REFRESH_TOKEN_TTL_SECONDS must be between 60 and 7776000 (1 minute to 90 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @model_validator(mode="after")
    def refuse_placeholder_secret_in_prod(self) -> "Settings":
        if (
            self.APP_ENV == "prod"
            and self.JWT_SECRET.get_secret_value() == DEFAULT_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET must be changed from the default when APP_ENV=prod")
        return self

    @model_validator(mode="after")
    def resolve_demo_seeding(self) -> "Settings":
        if self.SEED_DEMO_USERS is None:
            self.SEED_DEMO_USERS = self.APP_ENV == "dev"
        elif self.SEED_DEMO_USERS and self.APP_ENV == "prod":
            raise ValueError("SEED_DEMO_USERS must be false when APP_ENV=prod (demo passwords are public)")
        return self

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()
