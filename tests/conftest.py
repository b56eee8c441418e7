"""Pytest configuration and fixtures."""

import os
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from devfolio_api.config import Settings
from devfolio_api.roadmap_types import RoadmapConfig

# Set test environment variables before importing app modules
os.environ.setdefault("GEMINI_API_KEY", "")
os.environ.setdefault("ENVIRONMENT", "development")
# Increase rate limit for testing
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "1000")
# Serve canned Gemini answers in tests
os.environ.setdefault("MOCK_GEMINI", "true")

FIXED_NOW = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_caches() -> Iterator[None]:
    """Reset cached settings and the global client before each test."""
    from devfolio_api.config import get_settings
    from devfolio_api.gemini_client import reset_gemini_client

    get_settings.cache_clear()
    reset_gemini_client()

    # Reset rate limiter storage
    try:
        from devfolio_api.main import limiter

        if hasattr(limiter, "_storage") and limiter._storage:
            limiter._storage.reset()
    except (ImportError, AttributeError):
        pass

    yield
    get_settings.cache_clear()
    reset_gemini_client()


@pytest.fixture
def mock_settings(monkeypatch: pytest.MonkeyPatch) -> Callable[..., Settings]:
    """Fixture to set test settings."""

    def _mock_settings(**kwargs: str) -> Settings:
        for key, value in kwargs.items():
            monkeypatch.setenv(key.upper(), str(value))
        from devfolio_api.config import get_settings

        get_settings.cache_clear()
        return get_settings()

    return _mock_settings


@pytest.fixture
def now() -> datetime:
    """The frozen 'current time' used by roadmap tests."""
    return FIXED_NOW


@pytest.fixture
def roadmap_config() -> RoadmapConfig:
    """Parser config with a frozen clock and a recording logger."""
    return RoadmapConfig(logger=MagicMock(), clock=lambda: FIXED_NOW)
