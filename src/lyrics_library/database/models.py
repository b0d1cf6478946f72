"""
Database Models

SQLAlchemy models for the lyrics library database.
"""

import uuid
from datetime import UTC, datetime

from sqlalchemy import JSON, DateTime, Index, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from lyrics_library.database.base import Base
from lyrics_library.models import Track


def _utcnow() -> datetime:
    return datetime.now(UTC)


class TrackRecord(Base):
    """Persisted lyrics and translation of one song"""

    __tablename__ = "tracks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    artist: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    lyrics: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    translation: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    __table_args__ = (
        UniqueConstraint("artist", "title", name="uq_tracks_artist_title"),
        Index("idx_tracks_artist", "artist"),
    )

    def to_track(self) -> Track:
        return Track(
            artist=self.artist,
            title=self.title,
            lyrics=list(self.lyrics),
            translation=list(self.translation),
            id=str(self.id),
        )

    def __repr__(self) -> str:
        return f"<TrackRecord(id={self.id}, artist={self.artist!r}, title={self.title!r})>"
