"""
Logging for the Holodex client.

Modules log through ``get_logger(__name__)``, so every record lands under the
``holodex`` logger. The library attaches no handlers on import; applications
that want console output call ``setup_logging``, which only touches the
``holodex`` logger and leaves the root logger to the host application.

API keys never reach the output: ``RedactingFormatter`` scrubs the message and
the structured extras attached by ``holodex.utils.error_logger``.
"""

import json
import logging
import re
from typing import Any

from holodex.core.settings import get_settings

LIBRARY_LOGGER_NAME = "holodex"

# Extras attached by holodex.utils.error_logger; appended to the formatted line.
STRUCTURED_LOG_KEYS = ("operation", "url", "error_type", "http_details")

# Substrings of mapping keys whose values never reach a log sink.
_SENSITIVE_KEYS = ("apikey", "api_key", "api-key", "authorization", "cookie", "token", "secret")

_API_KEY_IN_TEXT = re.compile(r"(?i)(x-apikey['\"]?\s*[:=]\s*['\"]?)([^'\"\s,}]+)")
_BEARER_IN_TEXT = re.compile(r"(?i)\bbearer\s+[a-z0-9\-._~+/]+=*")


def _redact_value(value: Any) -> Any:
    """Return ``value`` with secrets replaced by ``<redacted>``.

    Mapping entries are dropped by key name; strings are scanned for
    ``X-APIKEY: ...`` pairs and bearer tokens. Containers are walked
    recursively and keep their type.
    """
    if isinstance(value, dict):
        return {
            str(k): "<redacted>"
            if any(part in str(k).lower() for part in _SENSITIVE_KEYS)
            else _redact_value(v)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return type(value)(_redact_value(v) for v in value)
    if isinstance(value, str):
        value = _BEARER_IN_TEXT.sub("Bearer <redacted>", value)
        return _API_KEY_IN_TEXT.sub(r"\1<redacted>", value)
    return value


class RedactingFormatter(logging.Formatter):
    """Formats a record, appends its structured extras as JSON and redacts secrets."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        extras = {
            key: getattr(record, key)
            for key in STRUCTURED_LOG_KEYS
            if getattr(record, key, None) is not None
        }
        if extras:
            text = f"{text} {json.dumps(_redact_value(extras), ensure_ascii=False, default=str)}"
        return _redact_value(text)


def setup_logging(
    level: str | None = None, handler: logging.Handler | None = None
) -> logging.Logger:
    """
    Send the client's log records to ``handler`` (stderr by default).

    Only the ``holodex`` logger is configured: its level is set and the handler
    installed by a previous call is replaced. Records still propagate to the
    root logger, whose handlers are left untouched.

    Args:
        level: Log level name (defaults to settings.log_level)
        handler: Handler to install; gets a ``RedactingFormatter`` if it has none.

    Returns:
        The ``holodex`` logger
    """
    log_level = (level or get_settings().log_level).upper()
    library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
    library_logger.setLevel(getattr(logging, log_level))

    for existing in list(library_logger.handlers):
        if getattr(existing, "_holodex_handler", False):
            library_logger.removeHandler(existing)
            existing.close()

    handler = handler or logging.StreamHandler()
    if handler.formatter is None:
        handler.setFormatter(
            RedactingFormatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    handler._holodex_handler = True  # type: ignore[attr-defined]
    library_logger.addHandler(handler)
    return library_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
