"""Shared fixtures: in-memory collaborators for the track service and a local HTTP server."""

import asyncio
import uuid

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from lyrics_library.database import (
    ArtistTracksNotFoundError,
    InvalidIdentifierError,
    TrackNotFoundError,
)
from lyrics_library.models import Track
from lyrics_library.services.track import CacheWarmer, TrackService

# =============================================================================
# Fake collaborators
# =============================================================================


class FakeLyricsProvider:
    def __init__(self, lines=None, error=None, delay=0.0):
        self.lines = lines if lines is not None else ["line one", "line two"]
        self.error = error
        self.delay = delay
        self.calls = []

    async def lyrics(self, artist, title):
        self.calls.append((artist, title))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.lines)


class FakeTranslator:
    def __init__(self, lines=None, error=None):
        self.lines = lines if lines is not None else ["строка один", "строка два"]
        self.error = error
        self.calls = []

    async def translate_lyrics(self, lyrics):
        self.calls.append(list(lyrics))
        if self.error is not None:
            raise self.error
        return list(self.lines)


class FakeStorage:
    """Dict-backed store with the same failure signals as TrackRepository."""

    def __init__(self):
        self.tracks: dict[tuple[str, str], Track] = {}
        self.error: Exception | None = None
        self.calls = []

    def add(self, artist, title, lyrics=("line",), translation=("строка",)):
        track = Track(
            artist=artist,
            title=title,
            lyrics=list(lyrics),
            translation=list(translation),
            id=str(uuid.uuid4()),
        )
        self.tracks[(artist, title)] = track
        return track

    def _check(self, name):
        self.calls.append(name)
        if self.error is not None:
            raise self.error

    async def save_track(self, track):
        self._check("save_track")
        existing = self.tracks.get((track.artist, track.title))
        if existing is not None:
            return existing
        stored = Track(
            artist=track.artist,
            title=track.title,
            lyrics=list(track.lyrics),
            translation=list(track.translation),
            id=str(uuid.uuid4()),
        )
        self.tracks[(track.artist, track.title)] = stored
        return stored

    async def track(self, artist, title):
        self._check("track")
        try:
            return self.tracks[(artist, title)]
        except KeyError:
            raise TrackNotFoundError(f"{artist} - {title}") from None

    async def tracks_by_artist(self, artist):
        self._check("tracks_by_artist")
        found = [track for (a, _), track in self.tracks.items() if a == artist]
        if not found:
            raise ArtistTracksNotFoundError(artist)
        return found

    async def delete_track(self, identifier):
        self._check("delete_track")
        for key, track in self.tracks.items():
            if track.id == identifier:
                del self.tracks[key]
                return
        raise InvalidIdentifierError(identifier)


class FakeCache:
    """Dict-backed cache. Lookups and writes can be made to fail independently."""

    def __init__(self):
        self.tracks: dict[tuple[str, str], Track] = {}
        self.artists: dict[str, list[Track]] = {}
        self.lookup_error: Exception | None = None
        self.save_error: Exception | None = None
        self.saves = []

    async def track(self, artist, title):
        if self.lookup_error is not None:
            raise self.lookup_error
        return self.tracks.get((artist, title))

    async def artist_tracks(self, artist):
        if self.lookup_error is not None:
            raise self.lookup_error
        return self.artists.get(artist)

    async def save_track(self, track):
        self.saves.append(("track", track))
        if self.save_error is not None:
            raise self.save_error
        self.tracks[(track.artist, track.title)] = track

    async def save_artist_tracks(self, artist, tracks):
        self.saves.append(("artist", artist))
        if self.save_error is not None:
            raise self.save_error
        self.artists[artist] = list(tracks)


# =============================================================================
# Service fixtures
# =============================================================================


@pytest.fixture
def lyrics_provider():
    return FakeLyricsProvider()


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def cache():
    return FakeCache()


@pytest.fixture
async def warmer():
    warmer = CacheWarmer(workers=1, max_pending=16, task_timeout=1.0)
    await warmer.start()
    yield warmer
    await warmer.stop(drain_timeout=1.0)


@pytest.fixture
def service(lyrics_provider, translator, storage, cache, warmer):
    return TrackService(
        lyrics_provider=lyrics_provider,
        translator=translator,
        storage=storage,
        cache=cache,
        warmer=warmer,
    )


@pytest.fixture
def sample_track():
    return Track(
        artist="Juice WRLD",
        title="Lucid Dreams",
        lyrics=["line one", "line two"],
        translation=["строка один", "строка два"],
        id=str(uuid.uuid4()),
    )


# =============================================================================
# HTTP server for the provider clients
# =============================================================================


@pytest.fixture
async def http_server():
    """Start a local aiohttp server that answers every path with ``handler``."""
    servers = []

    async def _serve(handler):
        app = web.Application()
        app.router.add_route("*", "/{tail:.*}", handler)
        server = TestServer(app)
        await server.start_server()
        servers.append(server)
        return server

    yield _serve

    for server in servers:
        await server.close()

