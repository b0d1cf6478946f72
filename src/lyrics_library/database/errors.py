"""Failure signals raised by the track store."""


class StorageError(Exception):
    """Base class for store failures."""


class TrackNotFoundError(StorageError):
    """No track is stored for the requested artist and title."""


class ArtistTracksNotFoundError(StorageError):
    """No track is stored for the requested artist."""


class InvalidIdentifierError(StorageError):
    """The identifier is malformed or does not match a stored track."""
