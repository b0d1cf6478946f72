"""Environment-based service configuration."""

from lyrics_library.config.settings import (
    AuthSettings,
    CacheWarmerSettings,
    DatabaseSettings,
    LyricsApiSettings,
    RedisSettings,
    Settings,
    TranslatorSettings,
    get_settings,
)

__all__ = [
    "AuthSettings",
    "CacheWarmerSettings",
    "DatabaseSettings",
    "LyricsApiSettings",
    "RedisSettings",
    "Settings",
    "TranslatorSettings",
    "get_settings",
]
