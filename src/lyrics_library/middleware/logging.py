"""Access logging middleware."""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger(__name__)

DEFAULT_SKIP_PATHS = frozenset({"/health", "/docs", "/openapi.json"})


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Emit one structured event per request.

    ``request_completed`` carries the status and duration and is logged at
    info, warning (4xx) or error (5xx). An exception escaping the app is
    logged as ``request_failed`` with its traceback and re-raised.
    """

    def __init__(self, app, skip_paths: frozenset[str] = DEFAULT_SKIP_PATHS):
        super().__init__(app)
        self.skip_paths = skip_paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if path in self.skip_paths:
            return await call_next(request)

        log = logger.bind(
            method=request.method,
            path=path,
            query=str(request.url.query) or None,
            client_ip=request.client.host if request.client else None,
        )
        start = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            log.error("request_failed", duration_ms=_elapsed_ms(start), exc_info=True)
            raise

        status = response.status_code
        if status >= 500:
            emit = log.error
        elif status >= 400:
            emit = log.warning
        else:
            emit = log.info
        emit("request_completed", status_code=status, duration_ms=_elapsed_ms(start))
        return response
