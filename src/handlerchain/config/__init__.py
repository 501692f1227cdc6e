"""Configuration management using pydantic-settings."""

from .settings import (
    DefaultHandlerSettings,
    HandlerChainSettings,
    LoggingSettings,
    TransportSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "DefaultHandlerSettings",
    "HandlerChainSettings",
    "LoggingSettings",
    "TransportSettings",
    "clear_settings_cache",
    "get_settings",
]
