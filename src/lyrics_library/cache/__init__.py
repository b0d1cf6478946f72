"""Fast track cache."""

from lyrics_library.cache.redis_cache import RedisTrackCache

__all__ = ["RedisTrackCache"]
