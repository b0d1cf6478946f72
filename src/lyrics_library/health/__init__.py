"""Health check endpoint."""

from lyrics_library.health.endpoints import create_health_router

__all__ = ["create_health_router"]
