"""
Structured logging of failed Holodex requests.

Usage:
    from holodex.utils.error_logger import log_http_error

    log_http_error(logger, url, error=e, response=response)

The record carries ``operation``, ``url``, ``error_type`` and ``http_details``
extras, which ``holodex.core.logging.RedactingFormatter`` renders.
"""

import logging
from typing import Any

import httpx

_MAX_HEADER_LENGTH = 200
_MAX_BODY_LENGTH = 1000


def describe_response(response: httpx.Response) -> dict[str, Any]:
    """Summarise a response for a log record: status, headers, request and body excerpt."""
    details: dict[str, Any] = {
        "status_code": response.status_code,
        "headers": {k: v[:_MAX_HEADER_LENGTH] for k, v in response.headers.items()},
    }
    try:
        details["url"] = str(response.url)
        details["method"] = response.request.method
    except RuntimeError:
        # httpx raises RuntimeError for responses built without a request
        pass
    try:
        details["response_body"] = response.text[:_MAX_BODY_LENGTH]
    except (httpx.ResponseNotRead, UnicodeDecodeError, LookupError):
        pass
    return details


def log_http_error(
    logger: logging.Logger,
    url: str,
    *,
    error: Exception,
    response: httpx.Response | None = None,
    operation: str = "fetch",
    level: int = logging.WARNING,
) -> None:
    """Log a failed request before its error is raised to the caller.

    Args:
        logger: Logger of the module that sent the request.
        url: The URL that was requested.
        error: The exception about to be raised.
        response: The response, if one arrived.
        operation: Name of the step that failed.
        level: Record level; the traceback is attached from ERROR upwards.
    """
    logger.log(
        level,
        f"{operation} failed for {url}: {error}",
        exc_info=error if level >= logging.ERROR else None,
        extra={
            "operation": operation,
            "url": url,
            "error_type": type(error).__name__,
            "http_details": describe_response(response) if response is not None else None,
        },
    )
