"""
Application Configuration
Loads settings from environment variables with sensible defaults.
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = Field(default=3000, validation_alias=AliasChoices("PORT", "API_PORT", "api_port"))

    # Browser Configuration
    browser_headless: bool = True
    navigation_timeout_seconds: float = 60.0
    navigation_retries: int = 0  # Fail fast on bot-detection friction
    max_concurrent_sessions: int = 2

    # Scraper Configuration
    target_site: str = "zillow"
    search_engine: str = "bing"
    max_pages: int = 4
    stop_on_empty_page: bool = True
    scroll_max_ticks: int = 400
    scroll_deadline_seconds: float = 90.0

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Paths
    @property
    def log_dir(self) -> Path:
        """Get the log directory path."""
        return Path(__file__).parent.parent.parent / "logs"

    @property
    def log_file(self) -> Path:
        """Get the log file path."""
        return self.log_dir / "backend.log"

    class Config:
        # Only load .env if it exists to avoid permission errors
        env_file = ".env" if __import__("pathlib").Path(".env").exists() else None
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables
        populate_by_name = True


# Global settings instance
settings = Settings()
