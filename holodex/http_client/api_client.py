"""
Synchronous HTTP transport for the Holodex API.

One ``HolodexHttpClient`` wraps one lazily created ``httpx.Client`` and turns
each call into exactly one logical request: status codes become typed errors,
the body is parsed into a wire model and the rate limit headers are read.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Generic, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from holodex.constants import API_KEY_HEADER, SUPPORTED_URL_SCHEMES, USER_AGENT
from holodex.core.errors import (
    ApiStatusError,
    BadApiKeyError,
    DuplicateFieldError,
    InvalidResponseError,
    InvalidUriError,
    MissingApiKeyError,
    NotFoundError,
    RateLimitedError,
    TransportError,
    UnexpectedFetchError,
    UnexpectedStatusError,
    UnsupportedUriSchemeError,
    UriMissingHostError,
)
from holodex.core.logging import get_logger
from holodex.core.settings import get_settings
from holodex.models.options import DuplicateFieldBehavior, FetchOptions
from holodex.models.response_headers import ResponseHeaders
from holodex.models.wire import IGNORE_UNKNOWN_FIELDS
from holodex.utils.error_logger import log_http_error
from holodex.utils.query import format_query

logger = get_logger(__name__)

T = TypeVar("T")

_STATUS_ERRORS: dict[int, type[ApiStatusError]] = {
    403: BadApiKeyError,
    404: NotFoundError,
    429: RateLimitedError,
}


@dataclass(frozen=True)
class Response(Generic[T]):
    """A parsed value together with the rate limit headers it came with."""

    headers: ResponseHeaders
    value: T


def normalize_base_url(base_url: str) -> str:
    """Validate the API base URL and drop a trailing slash from its path.

    Raises:
        InvalidUriError: The URL cannot be parsed, or carries a query or
            fragment that endpoint paths cannot be appended to.
        UnsupportedUriSchemeError: The scheme is not ``http`` or ``https``.
        UriMissingHostError: The URL has no host.
    """
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as e:
        raise InvalidUriError(f"Invalid base URL {base_url!r}: {e}") from e

    if url.scheme not in SUPPORTED_URL_SCHEMES:
        raise UnsupportedUriSchemeError(
            f"Unsupported URL scheme {url.scheme!r} in {base_url!r}; use http or https"
        )
    if not url.host:
        raise UriMissingHostError(f"Base URL {base_url!r} has no host")
    if url.query or url.fragment:
        raise InvalidUriError(f"Base URL {base_url!r} must not have a query or fragment")

    return str(url).rstrip("/")


def _duplicate_key_hook(behavior: DuplicateFieldBehavior):
    def build_object(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
        obj: dict[str, Any] = {}
        for key, value in pairs:
            if key in obj:
                if behavior == "error":
                    raise DuplicateFieldError(key)
                if behavior == "use_first":
                    continue
            obj[key] = value
        return obj

    return build_object


def load_json(content: bytes | str, behavior: DuplicateFieldBehavior = "error") -> Any:
    """Decode a JSON body, applying ``behavior`` to repeated object keys.

    Raises:
        DuplicateFieldError: A key repeats and ``behavior`` is ``"error"``.
        InvalidResponseError: The body is not valid JSON.
    """
    try:
        return json.loads(content, object_pairs_hook=_duplicate_key_hook(behavior))
    except ValueError as e:
        raise InvalidResponseError(f"Response body is not valid JSON: {e}") from e


@lru_cache(maxsize=None)
def _type_adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def dump_payload(payload: Any) -> bytes:
    """Serialise a request body as minified JSON, leaving out ``None`` fields."""
    if isinstance(payload, dict):
        payload = {key: value for key, value in payload.items() if value is not None}
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


class HolodexHttpClient:
    """
    Sends authenticated requests to the Holodex API and parses the replies.

    Not safe for concurrent use from several threads; one instance can be
    reused sequentially for any number of calls.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        """
        Args:
            api_key: Holodex API key, sent as the ``X-APIKEY`` header.
            base_url: API root, e.g. ``https://holodex.net/api/v2``.
                Falls back to settings.base_url.
            timeout: Request timeout in seconds.
                Falls back to settings.http_timeout_seconds.
            client: An ``httpx.Client`` to send requests with. The caller
                keeps ownership of it; ``close`` leaves it open.
        """
        settings = get_settings()
        if not api_key:
            raise MissingApiKeyError("A Holodex API key is required")

        self.api_key = api_key
        self.base_url = normalize_base_url(base_url or settings.base_url)
        self.timeout = timeout if timeout is not None else settings.http_timeout_seconds
        self.default_headers = {
            API_KEY_HEADER: api_key,
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.Client:
        """Initializes and returns the httpx.Client instance."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
            )
            self._owns_client = True
        return self._client

    def build_url(self, path: str, query: Any = None) -> str:
        url = f"{self.base_url}{path}"
        query_string = format_query(query)
        if query_string:
            url = f"{url}?{query_string}"
        return url

    def fetch(
        self,
        method: str,
        path: str,
        target: Any,
        *,
        query: Any = None,
        payload: Any = None,
        options: FetchOptions | None = None,
    ) -> Response[Any]:
        """
        Perform one request and parse its body as ``target``.

        Args:
            method: HTTP method, e.g. ``"GET"``.
            path: Path below the base URL, starting with ``/``.
            target: Type the JSON body is validated against, e.g.
                ``list[ChannelJson]``.
            query: Query record rendered with ``format_query``.
            payload: JSON request body; ``None`` entries of a dict are dropped.
            options: How to parse the body.

        Returns:
            The validated body and the rate limit headers.

        Raises:
            TransportError: The request could not be sent or no response arrived.
            UnexpectedFetchError: The HTTP layer gave up (redirect loop, bad encoding).
            ApiStatusError: A subclass matching the non-200 status code.
            InvalidResponseError: The body or the rate limit headers are malformed.
        """
        options = options or FetchOptions()
        url = self.build_url(path, query)
        content = dump_payload(payload) if payload is not None else None

        client = self._get_client()
        logger.debug(f"{method} {url}")
        try:
            response = client.request(
                method,
                url,
                content=content,
                headers=self.default_headers,
                timeout=self.timeout,
                follow_redirects=True,
            )
        except httpx.TransportError as e:
            log_http_error(logger, url, error=e)
            raise TransportError(f"{method} {url} failed: {e}") from e
        except httpx.RequestError as e:
            log_http_error(logger, url, error=e)
            raise UnexpectedFetchError(f"{method} {url} failed: {e}") from e

        if response.history:
            logger.debug(f"Request to {url} was redirected. Final URL: {response.url}")

        if response.status_code != 200:
            error_type = _STATUS_ERRORS.get(response.status_code, UnexpectedStatusError)
            error = error_type(response.status_code, url)
            log_http_error(logger, url, error=error, response=response)
            raise error

        data = load_json(response.content, options.duplicate_field_behavior)
        try:
            value = _type_adapter(target).validate_python(
                data,
                context={IGNORE_UNKNOWN_FIELDS: options.ignore_unknown_fields},
            )
        except ValidationError as e:
            log_http_error(
                logger,
                url,
                error=e,
                response=response,
                operation="parse_response",
                level=logging.ERROR,
            )
            raise InvalidResponseError(f"Unexpected response shape from {url}: {e}") from e

        headers = ResponseHeaders.parse(response.headers)
        return Response(headers=headers, value=value)

    def close(self) -> None:
        """Close the underlying httpx.Client if this instance created it."""
        if self._client is None or not self._owns_client:
            return
        if not self._client.is_closed:
            logger.debug("Closing HolodexHttpClient")
            self._client.close()
        self._client = None

    def __enter__(self) -> HolodexHttpClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
