"""Application configuration using Pydantic Settings."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    DATABASE_URL: str
    STORE_TIMEOUT_SECONDS: float = 10.0
    DB_CONNECT_MAX_WAIT_SECONDS: int = 30

    # Scoring
    POINTS_CAS_MAX_ATTEMPTS: int = 5

    # File storage
    FILE_STORAGE_DIR: str = "storage"
    FILE_PUBLIC_BASE_URL: str = "http://localhost:10000/files"

    # HTTP
    PORT: int = 10000
    CORS_ORIGINS: List[str] = [
        "https://arc-hives-frontend.vercel.app",
        "http://localhost:3000",  # local frontend
    ]

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


# Global settings instance
settings = Settings()
