"""Relational track store."""

from lyrics_library.database.base import Base
from lyrics_library.database.database import DatabaseManager
from lyrics_library.database.errors import (
    ArtistTracksNotFoundError,
    InvalidIdentifierError,
    StorageError,
    TrackNotFoundError,
)
from lyrics_library.database.models import TrackRecord
from lyrics_library.database.repository import TrackRepository

__all__ = [
    "ArtistTracksNotFoundError",
    "Base",
    "DatabaseManager",
    "InvalidIdentifierError",
    "StorageError",
    "TrackNotFoundError",
    "TrackRecord",
    "TrackRepository",
]
