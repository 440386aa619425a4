"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Application
    app_name: str = "Nifty Confluence Backend"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Yahoo Finance chart API
    yahoo_chart_url: str = "https://query1.finance.yahoo.com/v8/finance/chart"
    yahoo_symbol: str = "^NSEI"
    yahoo_interval: str = "1m"
    yahoo_range: str = "1d"
    yahoo_user_agent: str = "Mozilla/5.0 (compatible; NiftyAI/1.0)"
    upstream_timeout_seconds: float = 10.0

    # Opening range / levels
    opening_window_seconds: int = 300  # First five minutes of the session
    level_fractions: tuple[float, float] = (0.382, 0.618)

    # Confluence
    confluence_tolerance: float = 0.001  # 0.1% of price

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
