"""Health check endpoint factory."""

import inspect
from collections.abc import Awaitable, Callable

import structlog
from fastapi import APIRouter
from fastapi.responses import JSONResponse

logger = structlog.get_logger(__name__)

HealthCheck = Callable[[], bool | Awaitable[bool]]


async def _run_check(name: str, check_fn: HealthCheck) -> bool:
    try:
        result = check_fn()
        if inspect.isawaitable(result):
            result = await result
        return bool(result)
    except Exception:
        logger.warning("health_check_failed", check=name, exc_info=True)
        return False


def create_health_router(
    service_name: str,
    version: str,
    checks: dict[str, HealthCheck],
) -> APIRouter:
    """Return a router exposing ``GET /health``.

    Args:
        service_name: Service identifier echoed in the response.
        version: Service version echoed in the response.
        checks: Check name to a callable, plain or async, returning ``True``
            when the dependency is healthy. Any failing or raising check turns
            the response into HTTP 503.
    """
    router = APIRouter(tags=["health"])

    @router.get("/health")
    async def health() -> JSONResponse:
        results = {name: await _run_check(name, check_fn) for name, check_fn in checks.items()}
        healthy = all(results.values())
        return JSONResponse(
            status_code=200 if healthy else 503,
            content={
                "status": "healthy" if healthy else "unhealthy",
                "service": service_name,
                "version": version,
                "checks": {name: "ok" if ok else "failing" for name, ok in results.items()},
            },
        )

    return router
