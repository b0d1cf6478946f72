"""Track orchestration: the service, its collaborator protocols and the cache warmer."""

from lyrics_library.services.track.protocols import (
    LyricsProvider,
    LyricsTranslator,
    TrackCache,
    TrackStorage,
)
from lyrics_library.services.track.service import TrackService
from lyrics_library.services.track.warmup import CacheWarmer, WarmerStats

__all__ = [
    "CacheWarmer",
    "LyricsProvider",
    "LyricsTranslator",
    "TrackCache",
    "TrackService",
    "TrackStorage",
    "WarmerStats",
]
