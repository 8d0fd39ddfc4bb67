"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings

from rsigrid.core.symbols import DEFAULT_SYMBOLS


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "RSIGrid Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Binance public market data
    binance_base_url: str = "https://api.binance.com"
    request_timeout_seconds: float = 10.0
    max_concurrent_fetches: int = 10

    # Indicator engine defaults
    rsi_period: int = 14
    sma_period: int = 14
    display_limit: int = 80  # Points kept per series after trimming

    # Grid
    default_timeframe: str = "15m"
    symbols: list[str] = DEFAULT_SYMBOLS
    refresh_interval_seconds: float = 60.0
    enable_poller: bool = False

    # Redis
    redis_url: Optional[str] = "redis://localhost:6379"
    cache_ttl_seconds: int = 120  # Two refresh cycles

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
