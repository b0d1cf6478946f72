"""
Tracks Router

REST endpoints for lyrics with translation:
- POST   /lyrics                    fetch, translate and store a track
- GET    /lyrics?artist=&title=     read one track, or every track of an artist
- DELETE /lyrics/{identifier}       delete a stored track

Failures surface as ``TrackServiceError`` and are rendered by the
application error handlers.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from pydantic import BaseModel, ConfigDict, Field

from lyrics_library.dependencies import get_track_service
from lyrics_library.logging import get_logger
from lyrics_library.models import Track
from lyrics_library.services.track import TrackService

logger = get_logger(__name__)

router = APIRouter(prefix="/lyrics", tags=["lyrics"])


# =============================================================================
# Request/Response Models
# =============================================================================


class SaveTrackRequest(BaseModel):
    """Request to create a track."""

    model_config = ConfigDict(str_strip_whitespace=True)

    artist: str = Field(..., min_length=1, max_length=255, description="Artist name")
    title: str = Field(..., min_length=1, max_length=255, description="Song title")


class TrackResponse(BaseModel):
    """A track with its lyrics and translation."""

    id: str | None = None
    artist: str
    title: str
    lyrics: list[str]
    translation: list[str]

    @classmethod
    def from_track(cls, track: Track) -> "TrackResponse":
        return cls(**track.to_dict())


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=TrackResponse, status_code=status.HTTP_201_CREATED)
async def save_track(
    request: SaveTrackRequest,
    service: TrackService = Depends(get_track_service),
) -> TrackResponse:
    """Fetch lyrics for a song, translate them and store the result."""
    track = await service.save(request.artist, request.title)
    return TrackResponse.from_track(track)


@router.get("", response_model=TrackResponse | list[TrackResponse])
async def get_tracks(
    artist: str = Query(..., min_length=1, description="Artist name"),
    title: str | None = Query(None, description="Song title; omit to list the artist's tracks"),
    service: TrackService = Depends(get_track_service),
) -> TrackResponse | list[TrackResponse]:
    """Get one track, or every stored track of an artist when no title is given."""
    artist = artist.strip()
    title = title.strip() if title else None
    if not artist:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="artist must not be blank"
        )

    if title:
        track = await service.get(artist, title)
        return TrackResponse.from_track(track)

    tracks = await service.get_by_artist(artist)
    return [TrackResponse.from_track(track) for track in tracks]


@router.delete("/{identifier}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_track(
    identifier: str,
    service: TrackService = Depends(get_track_service),
) -> Response:
    """Delete a stored track by its identifier."""
    await service.delete(identifier)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
