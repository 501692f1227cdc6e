"""Environment-based configuration using pydantic-settings.

Example:
    >>> from handlerchain.config import get_settings
    >>> settings = get_settings()
    >>> settings.default.status
    404
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # HANDLERCHAIN_DEFAULT_STATUS=410
    # HANDLERCHAIN_LOG_LEVEL=DEBUG

Every group also reads a `.env` file in the working directory; variables set
in the real environment take precedence.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, PositiveFloat, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="HANDLERCHAIN_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["json", "text"] = "text"

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class DefaultHandlerSettings(BaseSettings):
    """Response written by the fallback handler when no terminal is given."""

    model_config = SettingsConfigDict(
        env_prefix="HANDLERCHAIN_DEFAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    status: Annotated[int, Field(ge=100, le=599)] = 404
    body: str = "404 page not found\n"
    content_type: str = "text/plain; charset=utf-8"


class TransportSettings(BaseSettings):
    """Options for the default httpx-backed transport."""

    model_config = SettingsConfigDict(
        env_prefix="HANDLERCHAIN_TRANSPORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    timeout: PositiveFloat = Field(default=30.0, description="Request timeout in seconds")
    follow_redirects: bool = True
    verify_ssl: bool = True


class HandlerChainSettings(BaseSettings):
    """Root settings for handlerchain.

    Example environment variables:
        HANDLERCHAIN_DEBUG=true
        HANDLERCHAIN_LOG_LEVEL=DEBUG
        HANDLERCHAIN_DEFAULT_STATUS=404
        HANDLERCHAIN_TRANSPORT_TIMEOUT=10
    """

    model_config = SettingsConfigDict(
        env_prefix="HANDLERCHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log chain resolution at DEBUG level")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    default: DefaultHandlerSettings = Field(default_factory=DefaultHandlerSettings)
    transport: TransportSettings = Field(default_factory=TransportSettings)


@lru_cache(maxsize=1)
def get_settings() -> HandlerChainSettings:
    """Get the global settings instance (cached)."""
    return HandlerChainSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    The next get_settings() call reloads configuration from the environment.
    """
    get_settings.cache_clear()
