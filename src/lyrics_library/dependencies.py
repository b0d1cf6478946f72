"""
Dependencies for FastAPI Dependency Injection

Owns the application-wide collaborators (database, cache, provider clients,
cache warmer and track service) and their startup/shutdown order. Routes
reach them through the ``get_*`` functions, which tests replace with
``app.dependency_overrides``.
"""

from lyrics_library.cache import RedisTrackCache
from lyrics_library.clients import LyricsOvhClient, YandexTranslator
from lyrics_library.config import Settings
from lyrics_library.database import DatabaseManager, TrackRepository
from lyrics_library.logging import get_logger
from lyrics_library.services.track import CacheWarmer, TrackService

logger = get_logger(__name__)

# ============================================================================
# Singleton Instances
# ============================================================================

_database_manager: DatabaseManager | None = None
_track_repository: TrackRepository | None = None
_track_cache: RedisTrackCache | None = None
_lyrics_client: LyricsOvhClient | None = None
_translator: YandexTranslator | None = None
_cache_warmer: CacheWarmer | None = None
_track_service: TrackService | None = None


def _require(instance, name: str):
    if instance is None:
        raise RuntimeError(f"{name} is not initialized; call initialize_dependencies() first")
    return instance


def get_track_repository() -> TrackRepository:
    return _require(_track_repository, "TrackRepository")


def get_track_cache() -> RedisTrackCache:
    return _require(_track_cache, "RedisTrackCache")


def get_cache_warmer() -> CacheWarmer:
    return _require(_cache_warmer, "CacheWarmer")


def get_track_service() -> TrackService:
    """Get the TrackService singleton."""
    return _require(_track_service, "TrackService")


# ============================================================================
# Lifecycle
# ============================================================================


async def initialize_dependencies(settings: Settings) -> None:
    """Build and connect every collaborator, then assemble the track service."""
    global _database_manager, _track_repository, _track_cache
    global _lyrics_client, _translator, _cache_warmer, _track_service

    logger.info("dependencies_initializing", environment=settings.environment)

    _database_manager = DatabaseManager(settings.database)
    _database_manager.initialize()
    await _database_manager.create_tables()
    _track_repository = TrackRepository(_database_manager)

    _track_cache = RedisTrackCache(
        settings.redis.url,
        ttl=settings.redis.ttl_seconds,
        socket_timeout=settings.redis.socket_timeout,
        max_connections=settings.redis.max_connections,
    )

    _lyrics_client = LyricsOvhClient(
        base_url=settings.lyrics_api.base_url, timeout=settings.lyrics_api.timeout
    )
    await _lyrics_client.connect()

    _translator = YandexTranslator(
        settings.translator.api_key,
        url=settings.translator.url,
        target_language=settings.translator.target_language,
        folder_id=settings.translator.folder_id,
        timeout=settings.translator.timeout,
    )
    await _translator.connect()

    _cache_warmer = CacheWarmer(
        workers=settings.cache_warmer.workers,
        max_pending=settings.cache_warmer.max_pending,
        task_timeout=settings.cache_warmer.task_timeout,
    )
    await _cache_warmer.start()

    _track_service = TrackService(
        lyrics_provider=_lyrics_client,
        translator=_translator,
        storage=_track_repository,
        cache=_track_cache,
        warmer=_cache_warmer,
        request_timeout=settings.request_timeout,
    )

    logger.info("dependencies_initialized")


async def shutdown_dependencies(settings: Settings) -> None:
    """Drain pending cache writes, then close collaborators in reverse order."""
    global _database_manager, _track_repository, _track_cache
    global _lyrics_client, _translator, _cache_warmer, _track_service

    logger.info("dependencies_shutting_down")
    _track_service = None

    if _cache_warmer is not None:
        await _cache_warmer.stop(drain_timeout=settings.cache_warmer.drain_timeout)
        _cache_warmer = None

    if _translator is not None:
        await _translator.close()
        _translator = None

    if _lyrics_client is not None:
        await _lyrics_client.close()
        _lyrics_client = None

    if _track_cache is not None:
        await _track_cache.close()
        _track_cache = None

    _track_repository = None
    if _database_manager is not None:
        await _database_manager.close()
        _database_manager = None

    logger.info("dependencies_shut_down")
