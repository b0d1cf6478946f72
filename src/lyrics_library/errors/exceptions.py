"""Structured exception hierarchy for the lyrics library service."""

from enum import Enum
from typing import Any


class LyricsLibraryError(Exception):
    """Base exception for all application errors that reach the transport layer.

    Attributes:
        status_code: HTTP status code to return when this error is raised in a handler.
        error_code: Machine-readable error identifier for clients.
        context: Arbitrary key-value pairs providing additional error context.
    """

    status_code: int = 500

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR", **context: Any) -> None:
        super().__init__(message)
        self.error_code = error_code
        self.context = context


class AuthenticationError(LyricsLibraryError):
    """The caller presented a token that could not be verified."""

    status_code: int = 401

    def __init__(self, message: str = "invalid token", **context: Any) -> None:
        super().__init__(message, error_code="INVALID_TOKEN", **context)


class ErrorKind(str, Enum):
    """Closed vocabulary of track operation failures."""

    LYRICS_NOT_FOUND = "LYRICS_NOT_FOUND"
    TRANSLATION_FAILED = "TRANSLATION_FAILED"
    TRACK_NOT_FOUND = "TRACK_NOT_FOUND"
    ARTIST_TRACKS_NOT_FOUND = "ARTIST_TRACKS_NOT_FOUND"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    UPSTREAM = "UPSTREAM_ERROR"


_KIND_STATUS: dict[ErrorKind, int] = {
    ErrorKind.LYRICS_NOT_FOUND: 404,
    ErrorKind.TRANSLATION_FAILED: 502,
    ErrorKind.TRACK_NOT_FOUND: 404,
    ErrorKind.ARTIST_TRACKS_NOT_FOUND: 404,
    ErrorKind.INVALID_IDENTIFIER: 400,
    ErrorKind.UPSTREAM: 502,
}

_KIND_MESSAGE: dict[ErrorKind, str] = {
    ErrorKind.LYRICS_NOT_FOUND: "lyrics not found",
    ErrorKind.TRANSLATION_FAILED: "failed to translate lyrics",
    ErrorKind.TRACK_NOT_FOUND: "track not found",
    ErrorKind.ARTIST_TRACKS_NOT_FOUND: "artist's tracks not found",
    ErrorKind.INVALID_IDENTIFIER: "invalid track identifier",
    ErrorKind.UPSTREAM: "upstream service failure",
}


class TrackServiceError(LyricsLibraryError):
    """Failure of a track operation, tagged with its :class:`ErrorKind`.

    The collaborator exception that caused it is kept on ``cause`` (and chained
    through ``raise ... from``) but never rendered to clients; only the
    operation name travels in the response context.
    """

    def __init__(self, kind: ErrorKind, op: str, cause: BaseException | None = None) -> None:
        super().__init__(f"{op}: {_KIND_MESSAGE[kind]}", error_code=kind.value, op=op)
        self.kind = kind
        self.op = op
        self.cause = cause
        self.status_code = _KIND_STATUS[kind]

    def __repr__(self) -> str:
        return f"TrackServiceError(kind={self.kind.name}, op={self.op!r}, cause={self.cause!r})"
