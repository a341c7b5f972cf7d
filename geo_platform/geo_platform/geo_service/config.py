"""
Configuration management for the GuessMyGeo service
"""
from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment variables"""

    # Server Configuration
    PORT: int
    STAGE: str = "prod"
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[str] = None

    # Database Configuration
    PG_HOST: str
    PG_PORT: int
    PG_DB: str
    PG_USER: str
    PG_PASS: str
    DATABASE_URL: Optional[str] = None

    # Superuser (password stored as a hash)
    SUPERUSER: str
    SUPERUSER_PASS: str

    # Session tokens
    JWT_SECRET: str
    JWT_EXPIRATION: int

    # Avatar uploads
    UPLOADS_DIR: str = "uploads"

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["*"]

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.PG_USER}:{self.PG_PASS}"
            f"@{self.PG_HOST}:{self.PG_PORT}/{self.PG_DB}"
        )

    @property
    def is_dev(self) -> bool:
        return self.STAGE.lower() == "dev"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, validated on first access."""
    return Settings()
