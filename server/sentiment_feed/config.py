"""
Sentiment Feed Configuration

Centralized configuration. All environment variables are read here;
no os.getenv() calls elsewhere.
"""
from __future__ import annotations

import os
from dataclasses import dataclass


class ConfigurationError(Exception):
    """Raised when configuration is invalid."""
    pass


def _optional_env(name: str, default: str = "") -> str:
    """Get an optional environment variable with a default."""
    return os.environ.get(name, default)


def _optional_env_int(name: str, default: int) -> int:
    """Get an optional positive integer environment variable with a default."""
    value = os.environ.get(name)
    if not value:
        return default
    try:
        parsed = int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid integer value for {name}: {value}")
    if parsed <= 0:
        raise ConfigurationError(f"{name} must be positive, got {parsed}")
    return parsed


@dataclass(frozen=True)
class StoreConfig:
    """Redis document store configuration."""
    redis_url: str
    collection: str = "news"
    page_size: int = 10


@dataclass(frozen=True)
class NewsSourceConfig:
    """External news feed configuration."""
    url: str = "https://min-api.cryptocompare.com/data/v2/news/?lang=EN"
    batch_size: int = 5


@dataclass(frozen=True)
class GroqConfig:
    """Groq chat-completion configuration."""
    api_key: str
    model: str = "llama-3.1-8b-instant"

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class Settings:
    """Root configuration container."""
    store: StoreConfig
    news_source: NewsSourceConfig
    groq: GroqConfig
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Load all settings from environment variables.

    Every value has a default. A missing GROQ_API_KEY becomes an empty
    string: the service rejects it at request time and each item fails
    individually, so startup never fails for lack of a key.
    """
    store = StoreConfig(
        redis_url=_optional_env("REDIS_URL", "redis://localhost:6379/0"),
        collection=_optional_env("NEWS_COLLECTION", "news"),
        page_size=_optional_env_int("PAGE_SIZE", 10),
    )

    news_source = NewsSourceConfig(
        url=_optional_env(
            "NEWS_API_URL", "https://min-api.cryptocompare.com/data/v2/news/?lang=EN"
        ),
        batch_size=_optional_env_int("NEWS_BATCH_SIZE", 5),
    )

    groq = GroqConfig(
        api_key=_optional_env("GROQ_API_KEY", ""),
        model=_optional_env("GROQ_MODEL", "llama-3.1-8b-instant"),
    )

    return Settings(
        store=store,
        news_source=news_source,
        groq=groq,
        log_level=_optional_env("LOG_LEVEL", "INFO").upper(),
    )


settings = load_settings()
