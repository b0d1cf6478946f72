"""
Lyrics Library API

FastAPI application serving lyrics with their translation. Tracks are read
from a Redis cache when possible, fall back to the relational store, and are
fetched from lyrics.ovh and translated with Yandex Cloud Translate on first
save.
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from lyrics_library import dependencies
from lyrics_library.config import Settings, get_settings
from lyrics_library.errors.handlers import register_error_handlers
from lyrics_library.health import create_health_router
from lyrics_library.logging import get_logger, setup_logging
from lyrics_library.middleware import (
    JWTCookieAuthMiddleware,
    RequestIDMiddleware,
    RequestLoggingMiddleware,
    StorageHealthMiddleware,
)
from lyrics_library.routers import tracks_router

logger = get_logger(__name__)

SERVICE_NAME = "lyrics-library"


async def _storage_ping() -> bool:
    return await dependencies.get_track_repository().ping()


async def _cache_ping() -> bool:
    return await dependencies.get_track_cache().ping()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its middleware, routes and lifecycle."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(SERVICE_NAME, settings.log_level, settings.resolved_log_format)
        logger.info("service_starting", version=settings.version, environment=settings.environment)
        try:
            await dependencies.initialize_dependencies(settings)
        except Exception:
            logger.error("service_startup_failed", exc_info=True)
            await dependencies.shutdown_dependencies(settings)
            raise

        try:
            yield
        finally:
            await dependencies.shutdown_dependencies(settings)
            logger.info("service_stopped")

    app = FastAPI(
        title=settings.app_name,
        description="Lyrics with translation, cached in Redis and stored in SQL",
        version=settings.version,
        docs_url=None if settings.is_production() else "/docs",
        lifespan=lifespan,
    )
    app.state.settings = settings

    register_error_handlers(app)

    # Last added runs first: request id, access log, auth, storage gate.
    if settings.storage_health_gate:
        app.add_middleware(StorageHealthMiddleware, probe=_storage_ping)
    if settings.auth.enabled:
        app.add_middleware(
            JWTCookieAuthMiddleware,
            secret_key=settings.auth.secret_key,
            algorithm=settings.auth.algorithm,
            cookie_name=settings.auth.cookie_name,
        )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    app.include_router(
        create_health_router(
            SERVICE_NAME,
            settings.version,
            checks={"storage": _storage_ping, "cache": _cache_ping},
        )
    )
    app.include_router(tracks_router)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
        access_log=False,
        server_header=False,
    )


if __name__ == "__main__":
    run()
