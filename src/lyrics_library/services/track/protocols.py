"""
Track Collaborator Protocols -- the contracts the track service depends on.

Each protocol covers one responsibility. Consumers should type-hint against
these rather than the concrete clients, store or cache.
"""

from typing import Protocol, runtime_checkable

from lyrics_library.models import Track


@runtime_checkable
class LyricsProvider(Protocol):
    """Fetches lyric lines for a track.

    Raises ``LyricsNotFoundError`` when the provider has no lyrics.
    """

    async def lyrics(self, artist: str, title: str) -> list[str]: ...


@runtime_checkable
class LyricsTranslator(Protocol):
    """Translates lyric lines.

    Raises ``TranslationFailedError`` when the text cannot be translated.
    """

    async def translate_lyrics(self, lyrics: list[str]) -> list[str]: ...


@runtime_checkable
class TrackStorage(Protocol):
    """Durable track store keyed by (artist, title)."""

    async def save_track(self, track: Track) -> Track: ...

    async def track(self, artist: str, title: str) -> Track: ...

    async def tracks_by_artist(self, artist: str) -> list[Track]: ...

    async def delete_track(self, identifier: str) -> None: ...


@runtime_checkable
class TrackCache(Protocol):
    """Fast track cache. ``None`` from a lookup is a miss."""

    async def save_track(self, track: Track) -> None: ...

    async def save_artist_tracks(self, artist: str, tracks: list[Track]) -> None: ...

    async def track(self, artist: str, title: str) -> Track | None: ...

    async def artist_tracks(self, artist: str) -> list[Track] | None: ...
