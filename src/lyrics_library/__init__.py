"""Lyrics Library: lyrics with translation behind a cache-aside track service."""

__version__ = "1.0.0"
