"""Domain models."""

from lyrics_library.models.track import Track

__all__ = ["Track"]
