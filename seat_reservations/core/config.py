"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Seat Reservations"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Admin
    ADMIN_SECRET: str = "admin123"

    # Persistence: memory, file, redis or sql
    STORE_BACKEND: str = "file"
    STORE_DIR: str = "./data"

    # Redis
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = "seat_reservations:"

    # Database
    DATABASE_URL: str = "sqlite:///./seat_reservations.db"

    # Booking policy
    STUDY_HALL_DEFAULT_HOURS: int = 4
    STUDY_HALL_RESIZE_STEP: int = 5

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
