"""Exception hierarchy for the Holodex client.

Every failure raised by this package derives from ``HolodexError``. The
subclasses are grouped by the stage that produced them so callers can decide
whether to retry (transport failures, ``RateLimitedError``), abort
(configuration and validation errors) or treat the problem as an API/library
version mismatch (parse and conversion errors, ``UnexpectedStatusError``).
"""

from __future__ import annotations


class HolodexError(Exception):
    """Base class for all errors raised by the Holodex client."""


# Configuration errors are raised while constructing a client, never per call.


class ConfigurationError(HolodexError, ValueError):
    """The client was configured with invalid values."""


class InvalidUriError(ConfigurationError):
    """The base URL could not be parsed."""


class UnsupportedUriSchemeError(ConfigurationError):
    """The base URL uses a scheme other than ``http`` or ``https``."""


class UriMissingHostError(ConfigurationError):
    """The base URL has no host."""


class MissingApiKeyError(ConfigurationError):
    """No API key was given and none is configured in the environment."""


# Validation errors are raised before any request is sent.


class InvalidOptionsError(HolodexError, ValueError):
    """Caller supplied query options are out of bounds."""


class InvalidLimitError(InvalidOptionsError):
    """``limit`` is not within ``1..max_limit`` for the endpoint."""

    def __init__(self, limit: int, max_limit: int):
        self.limit = limit
        self.max_limit = max_limit
        super().__init__(f"limit must be between 1 and {max_limit}, got {limit}")


class InvalidOffsetError(InvalidOptionsError):
    """``offset`` is negative."""

    def __init__(self, offset: int):
        self.offset = offset
        super().__init__(f"offset must not be negative, got {offset}")


class TransportError(HolodexError):
    """The request never produced a response.

    Connection refused or reset, DNS failures, TLS failures and timeouts end up
    here. The underlying ``httpx`` exception is available as ``__cause__``.
    """


class UnexpectedFetchError(HolodexError):
    """A response was received but could not be processed by the HTTP layer.

    Raised for redirect loops and undecodable content encodings.
    """


class ApiStatusError(HolodexError):
    """The API answered with a non-200 status code."""

    def __init__(self, status_code: int, url: str, message: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message or f"Holodex API returned HTTP {status_code} for {url}")


class BadApiKeyError(ApiStatusError):
    """HTTP 403: the API key is invalid or expired."""


class NotFoundError(ApiStatusError):
    """HTTP 404: the requested resource does not exist."""


class RateLimitedError(ApiStatusError):
    """HTTP 429: the rate limit was exceeded; wait before the next request."""


class UnexpectedStatusError(ApiStatusError):
    """Any other status code."""


class InvalidResponseError(HolodexError):
    """The response body or headers could not be understood.

    This usually means the API has changed and a newer version of this
    library should be used.
    """


class DuplicateFieldError(InvalidResponseError):
    """A JSON object in the response repeated one of its keys."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"duplicate field {key!r} in JSON response")


class ResponseHeadersError(InvalidResponseError):
    """The rate limit headers of a response are malformed."""


class MissingHeaderError(ResponseHeadersError):
    """One of the rate limit headers is absent."""


class DuplicateHeaderError(ResponseHeadersError):
    """One of the rate limit headers occurs more than once."""


class InvalidHeaderError(ResponseHeadersError):
    """A rate limit header is not a decimal integer in range."""


class ConversionError(HolodexError):
    """A parsed JSON record could not be mapped onto a domain record."""


class InvalidTimestampError(ConversionError, ValueError):
    """A timestamp string is not valid ISO 8601."""


class InvalidUuidError(ConversionError, ValueError):
    """An identifier is not in the ``8-4-4-4-12`` hex format."""


class MissingFieldError(ConversionError):
    """A field that becomes required by the presence of another is absent."""

    def __init__(self, field: str, required_by: str | None = None):
        self.field = field
        self.required_by = required_by
        suffix = f" (required because {required_by!r} is present)" if required_by else ""
        super().__init__(f"missing field {field!r}{suffix}")
