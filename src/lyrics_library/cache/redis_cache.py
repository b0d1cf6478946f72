"""
Track Cache with Redis Backend

Keeps recently read or created tracks, and per-artist track lists, in Redis
so repeated reads skip the relational store.

Key format:
    lyrics:v1:track:<sha256 of [artist, title]>
    lyrics:v1:artist:<sha256 of [artist]>

Keys are built from the exact artist/title strings: the store treats them
case-sensitively and the cache must never answer for a different track.
"""

import hashlib
import json
from typing import Any

import redis.asyncio as redis

from lyrics_library.logging import get_logger
from lyrics_library.models import Track

logger = get_logger(__name__)

KEY_PREFIX = "lyrics:v1"


class RedisTrackCache:
    """
    Redis-backed track cache.

    Lookups return ``None`` on a miss. Connection and command errors are
    raised to the caller, which decides whether a failing cache counts as a
    miss.
    """

    def __init__(
        self,
        redis_url: str,
        ttl: int = 3600,
        *,
        socket_timeout: float = 2.0,
        max_connections: int = 20,
        client: redis.Redis | None = None,
    ):
        """
        Initialize track cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl: Time-to-live for cache entries in seconds
            socket_timeout: Per-command socket timeout in seconds
            max_connections: Connection pool size
            client: Pre-built client, mainly for tests
        """
        self.redis_url = redis_url
        self.ttl = ttl
        self.socket_timeout = socket_timeout
        self.max_connections = max_connections

        self.hit_count = 0
        self.miss_count = 0

        self._redis: redis.Redis | None = client

    async def _get_redis(self) -> redis.Redis:
        """Get or create Redis connection."""
        if self._redis is None:
            self._redis = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
                socket_timeout=self.socket_timeout,
                max_connections=self.max_connections,
            )
        return self._redis

    async def close(self) -> None:
        """Close Redis connection."""
        if self._redis is not None:
            await self._redis.aclose()
            self._redis = None
            logger.info("track_cache_closed")

    # =========================================================================
    # CACHE KEY GENERATION
    # =========================================================================

    @staticmethod
    def _digest(*parts: str) -> str:
        content = json.dumps(list(parts), ensure_ascii=False)
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

    @classmethod
    def track_key(cls, artist: str, title: str) -> str:
        return f"{KEY_PREFIX}:track:{cls._digest(artist, title)}"

    @classmethod
    def artist_key(cls, artist: str) -> str:
        return f"{KEY_PREFIX}:artist:{cls._digest(artist)}"

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    async def _load(self, key: str) -> Any | None:
        r = await self._get_redis()
        cached = await r.get(key)
        if cached is None:
            self.miss_count += 1
            return None

        try:
            payload = json.loads(cached)
        except (TypeError, ValueError):
            logger.warning("track_cache_corrupt_entry", key=key)
            await r.delete(key)
            self.miss_count += 1
            return None

        self.hit_count += 1
        return payload

    async def track(self, artist: str, title: str) -> Track | None:
        """Get a cached track, or None on a miss."""
        payload = await self._load(self.track_key(artist, title))
        if payload is None:
            return None
        try:
            return Track.from_dict(payload)
        except (KeyError, TypeError):
            logger.warning("track_cache_unreadable_track", artist=artist, title=title)
            return None

    async def artist_tracks(self, artist: str) -> list[Track] | None:
        """Get the cached track list of an artist, or None on a miss."""
        payload = await self._load(self.artist_key(artist))
        if payload is None:
            return None
        try:
            return [Track.from_dict(item) for item in payload]
        except (KeyError, TypeError):
            logger.warning("track_cache_unreadable_artist_tracks", artist=artist)
            return None

    # =========================================================================
    # WRITES
    # =========================================================================

    async def save_track(self, track: Track) -> None:
        """Store a track under its (artist, title) key."""
        r = await self._get_redis()
        key = self.track_key(track.artist, track.title)
        await r.setex(key, self.ttl, json.dumps(track.to_dict(), ensure_ascii=False))
        logger.debug("track_cached", artist=track.artist, title=track.title, ttl=self.ttl)

    async def save_artist_tracks(self, artist: str, tracks: list[Track]) -> None:
        """Store the full track list of an artist."""
        r = await self._get_redis()
        payload = json.dumps([track.to_dict() for track in tracks], ensure_ascii=False)
        await r.setex(self.artist_key(artist), self.ttl, payload)
        logger.debug("artist_tracks_cached", artist=artist, count=len(tracks), ttl=self.ttl)

    # =========================================================================
    # HEALTH AND STATISTICS
    # =========================================================================

    async def ping(self) -> bool:
        try:
            r = await self._get_redis()
            return bool(await r.ping())
        except Exception as exc:
            logger.warning("track_cache_ping_failed", error=str(exc))
            return False

    def get_stats(self) -> dict[str, Any]:
        total = self.hit_count + self.miss_count
        return {
            "hits": self.hit_count,
            "misses": self.miss_count,
            "hit_rate": round(self.hit_count / total, 3) if total else 0.0,
            "ttl": self.ttl,
        }
