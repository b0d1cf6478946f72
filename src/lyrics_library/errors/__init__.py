"""Structured error hierarchy for the lyrics library service."""

from lyrics_library.errors.exceptions import (
    AuthenticationError,
    ErrorKind,
    LyricsLibraryError,
    TrackServiceError,
)

__all__ = [
    "AuthenticationError",
    "ErrorKind",
    "LyricsLibraryError",
    "TrackServiceError",
]
