"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Table names end up as file names under DATA_DIR.
TABLE_NAME_ALLOWED_CHARS = frozenset(
    "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_-"
)


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
    API_V1_PREFIX: str = "/api/v1"

    # Flat JSON tables: one <table>.json file per table inside DATA_DIR
    DATA_DIR: str = "data"
    USERS_TABLE: str = "users"
    REVIEWS_TABLE: str = "reviews"

    # Bearer tokens
    TOKEN_SECRET: SecretStr = SecretStr("your-secret-key-for-jwt-signing")
    TOKEN_EXPIRE_SECONDS: int = 3600
    # When False, verification only parses the token (no signature or exp check).
    TOKEN_VERIFY_SIGNATURE: bool = False

    # Open Library catalog passthrough
    CATALOG_BASE_URL: str = "https://openlibrary.org"
    CATALOG_REQUEST_TIMEOUT_SEC: float = 15.0
    CATALOG_SEARCH_LIMIT: int = 10
    CATALOG_DEFAULT_QUERY: str = "javascript"

    @field_validator("DATA_DIR")
    @classmethod
    def validate_data_dir(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATA_DIR must be set and non-empty")
        return v.strip()

    @field_validator("USERS_TABLE", "REVIEWS_TABLE")
    @classmethod
    def validate_table_name(cls, v: str) -> str:
        v = v.strip()
        if not v or any(ch not in TABLE_NAME_ALLOWED_CHARS for ch in v):
            raise ValueError(
                "Table names must be non-empty and use only letters, digits, '_' or '-'"
            )
        return v

    @field_validator("TOKEN_SECRET")
    @classmethod
    def validate_token_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("TOKEN_SECRET must be set and non-empty")
        return v

    @field_validator("TOKEN_EXPIRE_SECONDS")
    @classmethod
    def validate_token_expire_seconds(cls, v: int) -> int:
        if v < 60 or v > 604800:
            raise ValueError(
                "TOKEN_EXPIRE_SECONDS must be between 60 and 604800 (1 min to 7 days)"
            )
        return v

    @field_validator("CATALOG_BASE_URL")
    @classmethod
    def validate_catalog_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("CATALOG_BASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "CATALOG_BASE_URL must use http or https (e.g. https://openlibrary.org)"
            )
        return v.strip().rstrip("/")

    @field_validator("CATALOG_REQUEST_TIMEOUT_SEC")
    @classmethod
    def validate_catalog_timeout(cls, v: float) -> float:
        if v <= 0 or v > 120:
            raise ValueError(
                "CATALOG_REQUEST_TIMEOUT_SEC must be greater than 0 and at most 120"
            )
        return v

    @field_validator("CATALOG_SEARCH_LIMIT")
    @classmethod
    def validate_catalog_search_limit(cls, v: int) -> int:
        if v < 1 or v > 100:
            raise ValueError("CATALOG_SEARCH_LIMIT must be between 1 and 100")
        return v

    @field_validator("CATALOG_DEFAULT_QUERY")
    @classmethod
    def validate_catalog_default_query(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("CATALOG_DEFAULT_QUERY must be set and non-empty")
        return v.strip()


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
