"""FastAPI exception handlers for application errors."""

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from lyrics_library.errors.exceptions import LyricsLibraryError, TrackServiceError

logger = structlog.get_logger(__name__)


def error_body(exc: LyricsLibraryError) -> dict:
    """Client-facing JSON for an application error. Causes are never included."""
    return {"error_code": exc.error_code, "message": str(exc), **exc.context}


def register_error_handlers(app: FastAPI) -> None:
    """Render every ``LyricsLibraryError`` raised by a route as JSON.

    Server-side failures (5xx) are logged at error level with the chained
    cause; client errors are logged as warnings.
    """

    @app.exception_handler(LyricsLibraryError)
    async def handle_application_error(request: Request, exc: LyricsLibraryError) -> JSONResponse:
        log = logger.bind(path=request.url.path, method=request.method, status_code=exc.status_code)
        if isinstance(exc, TrackServiceError) and exc.cause is not None:
            log = log.bind(cause=repr(exc.cause))

        emit = log.error if exc.status_code >= 500 else log.warning
        emit("application_error", **error_body(exc))
        return JSONResponse(status_code=exc.status_code, content=error_body(exc))
