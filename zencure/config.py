"""
Application configuration using Pydantic settings.

Every field can be set from the environment (case-insensitive field name,
e.g. ``DATABASE_URL``) or a ``.env`` file.

Usage:
    from zencure.config import get_settings
    settings = get_settings()

For scoring weights and moderation values, import from zencure.constants.
"""

from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PRODUCTION_ENVIRONMENTS = ("production", "prod")
WEAK_JWT_SECRETS = ("change_me", "changeme", "secret", "development", "test")
MIN_JWT_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """
    Unified application settings.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars, not a placeholder)
        - DATABASE_URL
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "ZenCure"
    api_prefix: str = "/api"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///zencure.db"
    db_pool_size: int = 10
    db_max_overflow: int = 20
    db_pool_pre_ping: bool = True

    # JWT / Authentication (tokens live for 30 days)
    jwt_secret_key: str = "CHANGE_ME"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 30

    # CORS (Expo dev servers by default)
    cors_allowed_origins: str = "http://localhost:8081,http://localhost:19006"

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    @property
    def is_production(self) -> bool:
        return self.environment.lower() in PRODUCTION_ENVIRONMENTS

    @property
    def is_development(self) -> bool:
        return self.debug or self.environment.lower() == "development"

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @model_validator(mode="after")
    def reject_weak_secret_in_production(self) -> "Settings":
        """Weak JWT secrets are tolerated everywhere except production."""
        if not self.is_production:
            return self
        if self.jwt_secret_key.lower() in WEAK_JWT_SECRETS:
            raise ValueError("JWT_SECRET_KEY cannot be a default value in production")
        if len(self.jwt_secret_key) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"JWT_SECRET_KEY must be at least {MIN_JWT_SECRET_LENGTH} characters "
                f"in production (got {len(self.jwt_secret_key)})"
            )
        return self

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Check the configuration for deployment problems.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.jwt_secret_key.lower() in WEAK_JWT_SECRETS:
            errors.append("JWT_SECRET_KEY must be set for production")
        elif len(self.jwt_secret_key) < MIN_JWT_SECRET_LENGTH:
            errors.append(f"JWT_SECRET_KEY must be at least {MIN_JWT_SECRET_LENGTH} characters")

        if self.database_url.startswith("sqlite"):
            warnings.append("DATABASE_URL points at SQLite; use PostgreSQL in production")
        if self.max_page_size < self.default_page_size:
            warnings.append("MAX_PAGE_SIZE is smaller than DEFAULT_PAGE_SIZE")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
