"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "EventHub API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False
    CORS_ORIGINS: list[str] = ["*"]

    # Database (single-writer embedded store by default)
    DATABASE_URL: str = "sqlite+aiosqlite:///./eventhub.db"
    DATABASE_URL_SYNC: str = "sqlite:///./eventhub.db"
    DB_ECHO: bool = False
    # Pool settings are ignored for SQLite
    DB_POOL_SIZE: int = 20
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800  # 30 minutes

    # Redis (event listing cache, opt-in)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_CACHE_TTL: int = 300
    REDIS_ENABLED: bool = False

    # Registrations: "lock" serializes per event, "none" leaves the check-then-write open
    REGISTRATION_GUARD: str = "lock"

    # Sample data
    SEED_SAMPLE_DATA: bool = True
    DEFAULT_EVENT_IMAGE: str = (
        "https://images.unsplash.com/photo-1542736667-069246bdbc6d"
        "?ixlib=rb-1.2.1&auto=format&fit=crop&w=1350&q=80"
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


@lru_cache()
def get_settings() -> Settings:
    return Settings()
