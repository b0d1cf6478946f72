"""
Track Orchestration Service

Coordinates the cache, the durable store, the lyrics provider and the
translator into one read/write workflow:

    save:           cache -> lyrics provider -> translator -> store -> warm cache
    get:            cache -> store -> warm cache
    get_by_artist:  cache -> store -> warm cache
    delete:         store

Collaborator failures are classified once, where the call is made, into the
closed ``ErrorKind`` vocabulary and raised as ``TrackServiceError``. Cache
failures never reach the caller: a lookup that raises is a miss, and cache
writes go through the ``CacheWarmer`` off the request path.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from functools import partial
from typing import Any

from lyrics_library.clients.errors import LyricsNotFoundError, TranslationFailedError
from lyrics_library.database.errors import (
    ArtistTracksNotFoundError,
    InvalidIdentifierError,
    TrackNotFoundError,
)
from lyrics_library.errors import ErrorKind, TrackServiceError
from lyrics_library.logging import get_logger
from lyrics_library.models import Track
from lyrics_library.services.track.protocols import (
    LyricsProvider,
    LyricsTranslator,
    TrackCache,
    TrackStorage,
)
from lyrics_library.services.track.warmup import CacheWarmer

logger = get_logger(__name__)

OP_SAVE = "service.track.save"
OP_GET = "service.track.get"
OP_GET_BY_ARTIST = "service.track.get_by_artist"
OP_DELETE = "service.track.delete"


def _sort_tracks(tracks: list[Track]) -> list[Track]:
    return sorted(tracks, key=lambda track: (track.title, track.id or ""))


class TrackService:
    """
    Track orchestration service.

    Usage:
        service = TrackService(
            lyrics_provider=LyricsOvhClient(),
            translator=YandexTranslator(api_key),
            storage=TrackRepository(db),
            cache=RedisTrackCache(redis_url),
            warmer=CacheWarmer(),
            request_timeout=15.0,
        )

        track = await service.save("Juice WRLD", "Lucid Dreams")
    """

    def __init__(
        self,
        lyrics_provider: LyricsProvider,
        translator: LyricsTranslator,
        storage: TrackStorage,
        cache: TrackCache,
        warmer: CacheWarmer,
        *,
        request_timeout: float | None = None,
    ):
        """
        Initialize the service.

        Args:
            lyrics_provider: Source of lyric lines
            translator: Translator for lyric lines
            storage: Durable track store
            cache: Fast track cache
            warmer: Pool that runs cache writes in the background
            request_timeout: Deadline in seconds for each operation, None for no deadline

        Raises:
            ValueError: A collaborator is missing
        """
        collaborators: dict[str, Any] = {
            "lyrics_provider": lyrics_provider,
            "translator": translator,
            "storage": storage,
            "cache": cache,
            "warmer": warmer,
        }
        missing = [name for name, value in collaborators.items() if value is None]
        if missing:
            raise ValueError(f"TrackService requires {', '.join(missing)}")
        if request_timeout is not None and request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        self.lyrics_provider = lyrics_provider
        self.translator = translator
        self.storage = storage
        self.cache = cache
        self.warmer = warmer
        self.request_timeout = request_timeout

    @asynccontextmanager
    async def _deadline(self, op: str) -> AsyncIterator[None]:
        try:
            async with asyncio.timeout(self.request_timeout):
                yield
        except TimeoutError as exc:
            logger.warning("track_operation_deadline_exceeded", op=op, timeout=self.request_timeout)
            raise TrackServiceError(ErrorKind.UPSTREAM, op, exc) from exc

    # =========================================================================
    # CACHE HELPERS
    # =========================================================================

    async def _cached_track(self, log: Any, artist: str, title: str) -> Track | None:
        try:
            return await self.cache.track(artist, title)
        except Exception as exc:
            log.warning("cache_lookup_failed", error=str(exc))
            return None

    async def _cached_artist_tracks(self, log: Any, artist: str) -> list[Track] | None:
        try:
            return await self.cache.artist_tracks(artist)
        except Exception as exc:
            log.warning("cache_lookup_failed", error=str(exc))
            return None

    def _warm_track(self, track: Track) -> None:
        self.warmer.submit("cache.save_track", partial(self.cache.save_track, track))

    def _warm_artist_tracks(self, artist: str, tracks: list[Track]) -> None:
        self.warmer.submit(
            "cache.save_artist_tracks", partial(self.cache.save_artist_tracks, artist, tracks)
        )

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    async def save(self, artist: str, title: str) -> Track:
        """
        Create a track: fetch lyrics, translate them and persist the result.

        A cached track for the same (artist, title) is returned as is, so
        repeated saves are idempotent.

        Raises:
            TrackServiceError: LYRICS_NOT_FOUND, TRANSLATION_FAILED or UPSTREAM
        """
        log = logger.bind(op=OP_SAVE, artist=artist, title=title)

        async with self._deadline(OP_SAVE):
            cached = await self._cached_track(log, artist, title)
            if cached is not None:
                log.debug("track_cache_hit")
                return cached

            try:
                lyrics = await self.lyrics_provider.lyrics(artist, title)
            except LyricsNotFoundError as exc:
                raise TrackServiceError(ErrorKind.LYRICS_NOT_FOUND, OP_SAVE, exc) from exc
            except Exception as exc:
                log.error("lyrics_provider_failed", error=str(exc))
                raise TrackServiceError(ErrorKind.UPSTREAM, OP_SAVE, exc) from exc

            try:
                translation = await self.translator.translate_lyrics(lyrics)
            except TranslationFailedError as exc:
                raise TrackServiceError(ErrorKind.TRANSLATION_FAILED, OP_SAVE, exc) from exc
            except Exception as exc:
                log.error("translator_failed", error=str(exc))
                raise TrackServiceError(ErrorKind.UPSTREAM, OP_SAVE, exc) from exc

            track = Track(artist=artist, title=title, lyrics=lyrics, translation=translation)
            log.debug("track_assembled", lyrics=lyrics, translation=translation)
            try:
                stored = await self.storage.save_track(track)
            except Exception as exc:
                log.error("track_store_failed", error=str(exc))
                raise TrackServiceError(ErrorKind.UPSTREAM, OP_SAVE, exc) from exc

        self._warm_track(stored)
        log.info("track_saved", track_id=stored.id, line_count=len(stored.lyrics))
        return stored

    async def get(self, artist: str, title: str) -> Track:
        """
        Read one track, from the cache when possible.

        Raises:
            TrackServiceError: TRACK_NOT_FOUND or UPSTREAM
        """
        log = logger.bind(op=OP_GET, artist=artist, title=title)

        async with self._deadline(OP_GET):
            cached = await self._cached_track(log, artist, title)
            if cached is not None:
                log.debug("track_cache_hit")
                return cached

            try:
                track = await self.storage.track(artist, title)
            except TrackNotFoundError as exc:
                raise TrackServiceError(ErrorKind.TRACK_NOT_FOUND, OP_GET, exc) from exc
            except Exception as exc:
                log.error("track_store_failed", error=str(exc))
                raise TrackServiceError(ErrorKind.UPSTREAM, OP_GET, exc) from exc

        self._warm_track(track)
        return track

    async def get_by_artist(self, artist: str) -> list[Track]:
        """
        Read every track of an artist, ordered by title and then id.

        Raises:
            TrackServiceError: ARTIST_TRACKS_NOT_FOUND or UPSTREAM
        """
        log = logger.bind(op=OP_GET_BY_ARTIST, artist=artist)

        async with self._deadline(OP_GET_BY_ARTIST):
            cached = await self._cached_artist_tracks(log, artist)
            if cached:
                log.debug("artist_tracks_cache_hit", count=len(cached))
                return _sort_tracks(cached)

            try:
                tracks = await self.storage.tracks_by_artist(artist)
            except ArtistTracksNotFoundError as exc:
                raise TrackServiceError(
                    ErrorKind.ARTIST_TRACKS_NOT_FOUND, OP_GET_BY_ARTIST, exc
                ) from exc
            except Exception as exc:
                log.error("track_store_failed", error=str(exc))
                raise TrackServiceError(ErrorKind.UPSTREAM, OP_GET_BY_ARTIST, exc) from exc

        tracks = _sort_tracks(tracks)
        self._warm_artist_tracks(artist, tracks)
        return tracks

    async def delete(self, identifier: str) -> None:
        """
        Delete a stored track by identifier. Cached copies expire on their own.

        Raises:
            TrackServiceError: INVALID_IDENTIFIER or UPSTREAM
        """
        log = logger.bind(op=OP_DELETE, track_id=identifier)

        async with self._deadline(OP_DELETE):
            try:
                await self.storage.delete_track(identifier)
            except InvalidIdentifierError as exc:
                raise TrackServiceError(ErrorKind.INVALID_IDENTIFIER, OP_DELETE, exc) from exc
            except Exception as exc:
                log.error("track_store_failed", error=str(exc))
                raise TrackServiceError(ErrorKind.UPSTREAM, OP_DELETE, exc) from exc

        log.info("track_deleted")
