"""Clients for the external lyrics and translation providers."""

from lyrics_library.clients.errors import (
    LyricsNotFoundError,
    LyricsProviderError,
    TranslationFailedError,
    TranslatorError,
)
from lyrics_library.clients.formatting import format_lyrics
from lyrics_library.clients.lyrics_ovh import LyricsOvhClient
from lyrics_library.clients.yandex_translator import YandexTranslator

__all__ = [
    "LyricsNotFoundError",
    "LyricsOvhClient",
    "LyricsProviderError",
    "TranslationFailedError",
    "TranslatorError",
    "YandexTranslator",
    "format_lyrics",
]
