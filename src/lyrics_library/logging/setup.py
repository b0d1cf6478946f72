"""Structlog configuration for the lyrics library service.

Every record, whether it comes from structlog or from a third-party stdlib
logger (uvicorn, aiohttp, SQLAlchemy), passes through the same processor
chain and a single stderr handler.
"""

import logging
import sys

import structlog

from lyrics_library.logging.processors import (
    add_service_name,
    censor_sensitive_data,
    truncate_lines,
)

_NOISY_LOGGERS = ("aiohttp.access", "sqlalchemy.engine", "uvicorn.access")


def _processor_chain(service_name: str) -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_name(service_name),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        censor_sensitive_data,
        truncate_lines(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.CallsiteParameterAdder(
            {
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            }
        ),
    ]


def _renderer(log_format: str) -> structlog.types.Processor:
    if log_format == "dev":
        return structlog.dev.ConsoleRenderer(colors=True)
    # Lyrics and translations are mostly non-ASCII; keep them readable.
    return structlog.processors.JSONRenderer(ensure_ascii=False)


def _install_root_handler(formatter: logging.Formatter, level: int) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)


def setup_logging(service_name: str, log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structlog and stdlib logging for the entire process.

    Args:
        service_name: Value bound to the ``service`` key of every event.
        log_level: Minimum level for the root logger.
        log_format: ``json`` for machine-readable output, ``dev`` for a colored console.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    chain = _processor_chain(service_name)

    structlog.configure(
        processors=[*chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _install_root_handler(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_format),
            ],
        ),
        level,
    )

    library_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


def get_logger(name: str | None = None, **initial_bindings: object) -> structlog.stdlib.BoundLogger:
    """Return a structlog bound logger, optionally named after its module."""
    return structlog.get_logger(name, **initial_bindings)
