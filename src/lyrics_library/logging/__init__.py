"""Structured logging for the lyrics library service."""

from lyrics_library.logging.performance import log_performance
from lyrics_library.logging.setup import get_logger, setup_logging

__all__ = ["get_logger", "log_performance", "setup_logging"]
