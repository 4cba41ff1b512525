"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        # Allow extra fields from .env that aren't defined here
        extra="ignore",
    )

    # ===== Application =====
    APP_TITLE: str = "City Directory"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "http://localhost:3000,http://127.0.0.1:3000"

    # ===== Document Store =====
    CITY_COLLECTION: str = "cities"
    USE_DB_STORE: bool = False
    STORE_MAX_WRITE_ATTEMPTS: int = 5

    # ===== Database =====
    DATABASE_URL: Optional[str] = None
    DATABASE_USER: str = "root"
    DATABASE_PASSWORD: str = ""
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 3306
    DATABASE_NAME: str = "city_directory"

    def get_database_url(self) -> str:
        """Get the SQLAlchemy URL, built from the individual variables if needed."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    def get_cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()
