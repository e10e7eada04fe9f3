"""Application configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Instrument
    symbol: str = "BTCUSDT"
    interval: str = "1h"
    window_length: int = Field(default=100, gt=0, le=1000)

    # Scheduling
    poll_interval_seconds: float = Field(default=3600.0, gt=0)

    # Binance API
    binance_base_url: str = "https://api.binance.com"
    http_timeout: float = 30.0

    # Telegram
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""

    # Logging
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
