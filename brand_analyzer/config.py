"""Application configuration using Pydantic BaseSettings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from brand_analyzer.constants import (
    BOT_USER_AGENT,
    MAX_EXTERNAL_STYLESHEETS,
    MAX_REDIRECTS,
    PAGE_FETCH_TIMEOUT_SECONDS,
    RESULT_CACHE_MAX_ENTRIES,
    RESULT_CACHE_TTL_SECONDS,
    STYLESHEET_FETCH_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        # Load .env first, then .env.local (for local/test overrides)
        # Later files override earlier ones, so .env.local takes precedence
        env_file=[".env", ".env.local"],
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    env: Literal["local", "prod"] = Field(
        default="local", description="Current environment"
    )
    log_level: str = Field(default="INFO", description="Python logging level")

    # Sentry Configuration
    sentry_dsn: str | None = Field(
        default=None, description="Sentry DSN for error tracking (optional)"
    )
    sentry_traces_sample_rate: float = Field(
        default=1.0, description="Sentry traces sample rate (0.0 to 1.0)"
    )

    # Logfire Configuration
    logfire_token: str | None = Field(
        default=None, description="Pydantic Logfire token for observability"
    )

    # ==========================================================================
    # Fetch Configuration
    # ==========================================================================
    # All values can be overridden via environment variables.
    # Defaults are sourced from brand_analyzer/constants.py.

    page_fetch_timeout_seconds: float = Field(
        default=PAGE_FETCH_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for the analyzed page fetch (seconds)",
    )
    stylesheet_fetch_timeout_seconds: float = Field(
        default=STYLESHEET_FETCH_TIMEOUT_SECONDS,
        gt=0,
        description="Timeout for each linked stylesheet fetch (seconds)",
    )
    max_redirects: int = Field(
        default=MAX_REDIRECTS,
        ge=0,
        description="Maximum redirect hops followed for the analyzed page",
    )
    max_stylesheets: int = Field(
        default=MAX_EXTERNAL_STYLESHEETS,
        ge=0,
        description="Maximum number of linked stylesheets scanned per analysis",
    )
    user_agent: str = Field(
        default=BOT_USER_AGENT,
        description="User-Agent disclosed to analyzed sites",
    )

    # ==========================================================================
    # Result Cache Configuration
    # ==========================================================================

    result_cache_ttl_seconds: int = Field(
        default=RESULT_CACHE_TTL_SECONDS,
        ge=0,
        description="Lifetime of cached analysis results (seconds)",
    )
    result_cache_max_entries: int = Field(
        default=RESULT_CACHE_MAX_ENTRIES,
        ge=1,
        description="Maximum number of cached analysis results",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
