"""API routers."""

from lyrics_library.routers.tracks import router as tracks_router

__all__ = ["tracks_router"]
