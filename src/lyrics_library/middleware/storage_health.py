"""
Storage Health Middleware

Probes the durable store before each request and answers 503 without
reaching the route when the probe fails.
"""

from collections.abc import Awaitable, Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = structlog.get_logger(__name__)

StorageProbe = Callable[[], Awaitable[bool]]


class StorageHealthMiddleware(BaseHTTPMiddleware):
    """Reject requests with 503 while the store is unreachable.

    Args:
        probe: Zero-argument coroutine function returning ``True`` when the
            store answers. A probe that raises counts as unhealthy.
        exempt_paths: Paths served regardless of store health.
    """

    def __init__(
        self,
        app,
        probe: StorageProbe,
        exempt_paths: frozenset[str] = frozenset({"/health", "/docs", "/openapi.json"}),
    ):
        super().__init__(app)
        self.probe = probe
        self.exempt_paths = exempt_paths

    async def _healthy(self) -> bool:
        try:
            return bool(await self.probe())
        except Exception as exc:
            logger.warning("storage_probe_failed", error=str(exc))
            return False

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exempt_paths:
            return await call_next(request)

        if not await self._healthy():
            logger.error("storage_unavailable", path=request.url.path)
            return JSONResponse(
                status_code=503,
                content={"error_code": "STORAGE_UNAVAILABLE", "message": "storage unavailable"},
            )
        return await call_next(request)
