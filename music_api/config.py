# ============================================================================
# FILE: music_api/config.py
# ============================================================================
from functools import lru_cache
from typing import List

from pydantic import model_validator
from pydantic_settings import BaseSettings

DEFAULT_JWT_SECRET = "your-secret-key"


class Settings(BaseSettings):
    """Application configuration using Pydantic BaseSettings"""

    # App settings
    APP_NAME: str = "Music Catalog API"
    ENVIRONMENT: str = "production"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./music_app.db"  # Change to PostgreSQL in production

    # Redis cache
    REDIS_URL: str = "redis://localhost:6379/0"
    CACHE_ENABLED: bool = True
    POPULAR_CACHE_SECONDS: int = 60

    # Security
    JWT_SECRET: str = DEFAULT_JWT_SECRET
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_DAYS: int = 7
    REQUIRE_JWT_SECRET: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True

    @model_validator(mode="after")
    def check_jwt_secret(self) -> "Settings":
        if self.REQUIRE_JWT_SECRET and self.JWT_SECRET == DEFAULT_JWT_SECRET:
            raise ValueError("JWT_SECRET must be set when REQUIRE_JWT_SECRET is enabled")
        return self

    @property
    def uses_default_secret(self) -> bool:
        return self.JWT_SECRET == DEFAULT_JWT_SECRET

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"


@lru_cache
def get_settings() -> Settings:
    return Settings()
