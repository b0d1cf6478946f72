"""
Track Repository

Durable store for tracks. Rows are keyed by (artist, title) through a unique
constraint and addressed by a UUID for deletion.
"""

import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError

from lyrics_library.database.database import DatabaseManager
from lyrics_library.database.errors import (
    ArtistTracksNotFoundError,
    InvalidIdentifierError,
    TrackNotFoundError,
)
from lyrics_library.database.models import TrackRecord
from lyrics_library.logging import get_logger
from lyrics_library.models import Track

logger = get_logger(__name__)


class TrackRepository:
    """
    SQLAlchemy-backed track store.

    Usage:
        repository = TrackRepository(database_manager)
        stored = await repository.save_track(track)
        await repository.delete_track(stored.id)
    """

    def __init__(self, db: DatabaseManager):
        self.db = db

    async def save_track(self, track: Track) -> Track:
        """
        Persist a new track and return it with its assigned identifier.

        When a concurrent save already stored the same (artist, title), the
        existing row wins and is returned instead.
        """
        record = TrackRecord(
            artist=track.artist,
            title=track.title,
            lyrics=list(track.lyrics),
            translation=list(track.translation),
        )
        try:
            async with self.db.get_session() as session:
                session.add(record)
                await session.commit()
        except IntegrityError:
            existing = await self._find(track.artist, track.title)
            if existing is None:
                raise
            logger.info("track_already_stored", artist=track.artist, title=track.title)
            return existing.to_track()

        logger.debug("track_stored", track_id=str(record.id))
        return record.to_track()

    async def _find(self, artist: str, title: str) -> TrackRecord | None:
        async with self.db.get_session() as session:
            stmt = select(TrackRecord).where(
                TrackRecord.artist == artist, TrackRecord.title == title
            )
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    async def track(self, artist: str, title: str) -> Track:
        """Get a track by artist and title, or raise TrackNotFoundError."""
        record = await self._find(artist, title)
        if record is None:
            raise TrackNotFoundError(f"track {artist} - {title} not found")
        return record.to_track()

    async def tracks_by_artist(self, artist: str) -> list[Track]:
        """Get every track of an artist ordered by title."""
        async with self.db.get_session() as session:
            stmt = (
                select(TrackRecord)
                .where(TrackRecord.artist == artist)
                .order_by(TrackRecord.title, TrackRecord.id)
            )
            result = await session.execute(stmt)
            records = list(result.scalars().all())

        if not records:
            raise ArtistTracksNotFoundError(f"no tracks for artist {artist}")
        return [record.to_track() for record in records]

    async def delete_track(self, identifier: str) -> None:
        """Delete a track by identifier.

        Raises:
            InvalidIdentifierError: The identifier is not a UUID or matches no track
        """
        try:
            track_id = uuid.UUID(identifier)
        except (ValueError, TypeError, AttributeError) as exc:
            raise InvalidIdentifierError(f"malformed identifier {identifier!r}") from exc

        async with self.db.get_session() as session:
            result = await session.execute(delete(TrackRecord).where(TrackRecord.id == track_id))
            await session.commit()

        if result.rowcount == 0:
            raise InvalidIdentifierError(f"no track with identifier {identifier}")
        logger.debug("track_deleted", track_id=identifier)

    async def ping(self) -> bool:
        return await self.db.health_check()
