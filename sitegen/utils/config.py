"""
Configuration Management

Uses Pydantic Settings for environment-based configuration.
Loads from .env file automatically.
"""

from typing import Optional
from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Claude API (Required for generation)
    ANTHROPIC_API_KEY: Optional[str] = None
    CLAUDE_MODEL: str = "claude-sonnet-4-5-20250929"

    # Application Settings
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Gateway retry policy (seconds)
    GATEWAY_MAX_RETRIES: int = 2
    GATEWAY_RETRY_BASE_DELAY: float = 10.0
    GATEWAY_RETRY_MAX_DELAY: float = 60.0
    GATEWAY_RETRY_JITTER: float = 0.0

    # Timeouts (seconds)
    BUFFERED_TIMEOUT: float = 180.0
    STREAMING_TIMEOUT: float = 300.0

    # Pipeline
    DEFAULT_TIER: str = "balanced"
    REVIEW_SCORE_THRESHOLD: int = 75
    CHUNK_FLUSH_INTERVAL: float = 0.3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra fields in .env file
        case_sensitive = False  # Allow both UPPERCASE and lowercase


@lru_cache
def get_settings() -> Settings:
    """Get or create cached settings instance."""
    return Settings()
