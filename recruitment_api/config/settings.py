"""Application settings loaded from environment variables."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Recruitment API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"  # development, staging, production

    # Database
    DATABASE_URL: str = "sqlite:///./recruitment.db"
    AUTO_CREATE_TABLES: bool = True

    # Inbound authentication (x-api-key header)
    API_KEY: Optional[str] = None

    # Legacy system
    LEGACY_API_KEY: Optional[str] = None  # Falls back to API_KEY
    LEGACY_API_URL: Optional[str] = None  # Falls back to http://localhost:4040
    LEGACY_API_TIMEOUT: float = 10.0  # Seconds

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
