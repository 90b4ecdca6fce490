import logging
from enum import Enum
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


logger = logging.getLogger(__name__)


class AppMode(str, Enum):
    DEV = "dev"
    PROD = "prod"


class Settings(BaseSettings):
    # Application mode - defaults to DEV
    APP_MODE: AppMode = AppMode.DEV

    # Debug mode - MUST be False in production
    DEBUG: bool = False

    # Database (SQLite default for dev, use PostgreSQL in production)
    DATABASE_URL: str = "sqlite+aiosqlite:///./category_admin.db"

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # Insert Action / SciFi / History when the categories table is empty
    SEED_DEFAULT_CATEGORIES: bool = True

    # Upper bound for category names (matches the column length)
    CATEGORY_NAME_MAX_LENGTH: int = 100

    # Comma-separated list of allowed origins
    CORS_ALLOWED_ORIGINS: str = ""

    @property
    def CORS_ORIGINS(self) -> List[str]:
        """
        Get allowed CORS origins.

        Dev mode always allows the local admin frontends; production only
        allows what CORS_ALLOWED_ORIGINS lists.
        """
        origins = []

        if self.APP_MODE == AppMode.DEV:
            origins = [
                "http://localhost:3000",
                "http://localhost:5173",
                "http://127.0.0.1:3000",
                "http://127.0.0.1:5173",
            ]

        if self.CORS_ALLOWED_ORIGINS:
            origins.extend(
                o.strip() for o in self.CORS_ALLOWED_ORIGINS.split(",") if o.strip()
            )

        if not origins and self.APP_MODE == AppMode.PROD:
            logger.warning(
                "No CORS_ALLOWED_ORIGINS configured in production. "
                "Cross-origin requests will be blocked."
            )

        return origins

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL rewritten for the async driver."""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://", 1)
        return self.DATABASE_URL

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env variables


def _validate_settings(settings: Settings) -> Settings:
    """
    Validate settings and fail fast on unsafe production configuration.
    """
    if settings.APP_MODE == AppMode.PROD and settings.DEBUG:
        error_msg = (
            "DEBUG=True in production! "
            "Debug mode exposes sensitive information in error responses. "
            "Set DEBUG=False or remove the DEBUG environment variable."
        )
        logger.critical(error_msg)
        raise ValueError(error_msg)

    if settings.CATEGORY_NAME_MAX_LENGTH < 1:
        raise ValueError("CATEGORY_NAME_MAX_LENGTH must be positive")

    return settings


@lru_cache()
def get_settings() -> Settings:
    """Get application settings (cached)."""
    settings = Settings()
    return _validate_settings(settings)
