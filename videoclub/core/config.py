"""Configuration settings for the videoclub service."""

import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    PROJECT_NAME: str = os.getenv("VIDEOCLUB_PROJECT_NAME", "Videoclub Service")
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./videoclub.db")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change_me")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")

    RENTAL_WINDOW_HOURS: int = int(os.getenv("RENTAL_WINDOW_HOURS", "48"))
    DEFAULT_RENTAL_PRICE: int = int(os.getenv("DEFAULT_RENTAL_PRICE", "1"))
    # Fraction of the film duration that must be reached before reviewing.
    REVIEW_THRESHOLD_RATIO: float = float(os.getenv("REVIEW_THRESHOLD_RATIO", "0.8"))
    MIN_REVIEW_LENGTH: int = int(os.getenv("MIN_REVIEW_LENGTH", "0"))

    LEDGER_MAX_RETRIES: int = int(os.getenv("LEDGER_MAX_RETRIES", "3"))
    LEDGER_RETRY_BACKOFF_SECONDS: float = float(
        os.getenv("LEDGER_RETRY_BACKOFF_SECONDS", "0.05")
    )
    SQLITE_BUSY_TIMEOUT: float = float(os.getenv("SQLITE_BUSY_TIMEOUT", "30"))


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()

__all__ = ["settings", "get_settings", "Settings"]
