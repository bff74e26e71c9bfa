"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Upstream
    LOTTO_API_BASE: str = os.getenv(
        "LOTTO_API_BASE",
        "https://www.dhlottery.co.kr/common.do?method=getLottoNumber&drwNo=",
    )
    REQUEST_TIMEOUT_SECONDS: float = _env_float("REQUEST_TIMEOUT_SECONDS", 8.0)
    USER_AGENT: str = os.getenv(
        "USER_AGENT",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    )

    # Sync engine
    CACHE_TTL_SECONDS: float = _env_float("CACHE_TTL_SECONDS", 12 * 60 * 60)
    BLOCK_TTL_SECONDS: float = _env_float("BLOCK_TTL_SECONDS", 15 * 60)
    MAX_DRAW_GUESS: int = _env_int("MAX_DRAW_GUESS", 10_000)
    DEFAULT_LATEST_GUESS: int = _env_int("DEFAULT_LATEST_GUESS", 1100)
    FETCH_CONCURRENCY: int = _env_int("FETCH_CONCURRENCY", 6)
    FETCH_RETRIES: int = _env_int("FETCH_RETRIES", 2)
    RETRY_BACKOFF_SECONDS: float = _env_float("RETRY_BACKOFF_SECONDS", 0.25)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test configuration: no real backoff sleeps."""

    DEBUG: bool = False
    TESTING: bool = True
    RETRY_BACKOFF_SECONDS: float = 0.0


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
