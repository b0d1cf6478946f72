"""
Track Domain Model

The canonical record the service produces from provider data, persists in the
store and serializes into the cache.
"""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class Track:
    """A song's lyrics together with their translation.

    Attributes:
        artist: Case-sensitive artist name, first half of the track key.
        title: Case-sensitive song title, second half of the track key.
        lyrics: Normalized lyric lines, never empty once persisted.
        translation: Translated lines derived from ``lyrics``.
        id: Store-assigned identifier, ``None`` until the track is persisted.
    """

    artist: str
    title: str
    lyrics: list[str] = field(default_factory=list)
    translation: list[str] = field(default_factory=list)
    id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Track":
        return cls(
            artist=data["artist"],
            title=data["title"],
            lyrics=list(data.get("lyrics") or []),
            translation=list(data.get("translation") or []),
            id=data.get("id"),
        )
