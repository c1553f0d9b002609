"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Booking Ledger API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "auto"  # auto, json, console

    # Storage slot
    STORAGE_BACKEND: str = "file"  # file, redis, memory
    STORAGE_PATH: str = "data/bookings.json"
    STORAGE_KEY: str = "bookings"

    # Redis (only used when STORAGE_BACKEND=redis)
    REDIS_URL: str = "redis://localhost:6379/0"
    # Slot reads/writes are synchronous on the event loop: an unreachable
    # server blocks every request for up to this many seconds.
    REDIS_SOCKET_TIMEOUT: float = 1.0

    # Display
    CURRENCY_SYMBOL: str = "ر.س"

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
