"""Structlog processors shared by every logger in the service."""

from typing import Any

_SENSITIVE_KEYS = frozenset(
    {
        "password",
        "token",
        "jwt",
        "api_key",
        "apikey",
        "secret",
        "secret_key",
        "authorization",
        "cookie",
    }
)

_REDACTED = "***REDACTED***"


def _redact(mapping: dict[str, Any]) -> dict[str, Any]:
    return {
        key: _REDACTED
        if str(key).lower() in _SENSITIVE_KEYS
        else _redact(value)
        if isinstance(value, dict)
        else value
        for key, value in mapping.items()
    }


def censor_sensitive_data(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Redact credential-like keys, including inside nested mappings such as headers."""
    return _redact(event_dict)


def add_service_name(service_name: str) -> Any:
    """Return a processor that binds service=<name> to every event."""

    def processor(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return processor


def truncate_lines(max_lines: int = 5) -> Any:
    """Return a processor that shortens long lyric/translation payloads.

    Lyrics are logged at debug level while a track is assembled; a whole song
    per event makes the JSON stream unreadable, so list values under the
    ``lyrics`` and ``translation`` keys keep only their first lines.
    """

    def processor(logger: Any, method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        for key in ("lyrics", "translation"):
            value = event_dict.get(key)
            if isinstance(value, list) and len(value) > max_lines:
                event_dict[key] = [*value[:max_lines], f"... ({len(value) - max_lines} more)"]
        return event_dict

    return processor
