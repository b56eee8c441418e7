"""Environment configuration using pydantic-settings."""

import re
from functools import lru_cache
from typing import Literal

import structlog
from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from devfolio_api.roadmap_types import MAX_ROADMAP_ITEMS, MIN_EXTRACTED_ITEMS, RoadmapConfig


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Mock control (opt-in feature gate for testing)
    mock_gemini: bool = False  # Serve canned answers instead of calling Gemini

    # Gemini configuration
    gemini_api_key: str = ""
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-1.5-flash"
    llm_max_tokens: int = 2048
    llm_temperature: float = 0.7
    gemini_timeout_seconds: float = 60.0

    # Roadmap parsing policy
    default_timeframe: str = "3 months"
    roadmap_max_items: int = Field(default=MAX_ROADMAP_ITEMS, ge=1)
    roadmap_min_items: int = Field(default=MIN_EXTRACTED_ITEMS, ge=1)

    # Rate limiting
    rate_limit_per_minute: int = 10

    # Server configuration
    port: int = 5000
    host: str = "0.0.0.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    environment: Literal["development", "production"] = "development"

    @model_validator(mode="after")
    def check_roadmap_limits(self) -> "Settings":
        """Reject a threshold that no extraction could ever reach."""
        if self.roadmap_min_items > self.roadmap_max_items:
            raise ValueError(
                f"ROADMAP_MIN_ITEMS ({self.roadmap_min_items}) must not exceed "
                f"ROADMAP_MAX_ITEMS ({self.roadmap_max_items})"
            )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @property
    def has_gemini_key(self) -> bool:
        """Check if a Gemini API key is configured."""
        return bool(self.gemini_api_key and self.gemini_api_key.startswith("AIza"))

    def validate_gemini_api_key(self) -> int:
        """Validate Gemini API key format.

        Returns:
            Integer status code (not derived from key content):
            - 0: not set
            - 1: valid format
            - 2: incorrect prefix
            - 3: incorrect length
            - 4: invalid characters
        """
        if not self.gemini_api_key:
            return 0

        key = self.gemini_api_key

        if not key.startswith("AIza"):
            return 2

        # Google API keys are 39 characters
        if len(key) != 39:
            return 3

        if not re.match(r"^[A-Za-z0-9_-]+$", key[4:]):
            return 4

        return 1

    def roadmap_config(self) -> RoadmapConfig:
        """Parser configuration derived from these settings."""
        return RoadmapConfig(
            logger=structlog.get_logger("devfolio_api.roadmap"),
            max_items=self.roadmap_max_items,
            min_items=self.roadmap_min_items,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
