import os
from typing import Tuple
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
import logging

# Load environment variables from the project .env file
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), ".env"))

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./rentals.db"
    SECRET_KEY: str = "dev-secret-key-change-me"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRES_IN: int = 60  # minutes
    ENV: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = "logs/app.log"

    # Notification sweep
    ENABLE_SCHEDULER: bool = True
    SWEEP_HOUR: int = 7
    SWEEP_MINUTE: int = 0
    SWEEP_TIMEZONE: str = "Asia/Manila"
    SWEEP_RETRY_DELAY_MINUTES: int = 15
    SWEEP_MAX_RETRIES: int = 3
    LEASE_EXPIRATION_THRESHOLDS: Tuple[int, ...] = (30, 60, 90)
    CURRENCY_SYMBOL: str = "₱"

    # Seeded admin account
    BOOTSTRAP_ADMIN_EMAIL: str = "admin@example.com"
    BOOTSTRAP_ADMIN_PASSWORD: str = "change-me-now"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        logger.info(f"Settings loaded for ENV={self.ENV}")
        logger.info(
            f"Notification sweep scheduled daily at {self.SWEEP_HOUR:02d}:{self.SWEEP_MINUTE:02d} "
            f"({self.SWEEP_TIMEZONE}), thresholds={list(self.LEASE_EXPIRATION_THRESHOLDS)}"
        )
        logger.info(f"SECRET_KEY: {self.SECRET_KEY[:4]}****")


settings = Settings()
