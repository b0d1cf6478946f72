"""HTTP middleware for the lyrics library API."""

from lyrics_library.middleware.auth import JWTCookieAuthMiddleware
from lyrics_library.middleware.logging import RequestLoggingMiddleware
from lyrics_library.middleware.request_id import RequestIDMiddleware
from lyrics_library.middleware.storage_health import StorageHealthMiddleware

__all__ = [
    "JWTCookieAuthMiddleware",
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "StorageHealthMiddleware",
]
