"""Operation timing helpers."""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import structlog


@asynccontextmanager
async def log_performance(
    logger: structlog.stdlib.BoundLogger, operation: str, **extra: Any
) -> AsyncGenerator[None, None]:
    """Log how long an awaited block took, and whether it raised."""
    start = time.perf_counter()
    try:
        yield
    except Exception:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.warning("operation_failed", operation=operation, duration_ms=elapsed_ms, **extra)
        raise
    else:
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        logger.debug("operation_completed", operation=operation, duration_ms=elapsed_ms, **extra)
