"""Tests for HolodexHttpClient and its helpers."""

import json
import logging

import httpx
import pytest

from holodex.core.errors import (
    BadApiKeyError,
    DuplicateFieldError,
    InvalidResponseError,
    InvalidUriError,
    MissingApiKeyError,
    MissingHeaderError,
    NotFoundError,
    RateLimitedError,
    TransportError,
    UnexpectedFetchError,
    UnexpectedStatusError,
    UnsupportedUriSchemeError,
    UriMissingHostError,
)
from holodex.http_client.api_client import (
    HolodexHttpClient,
    dump_payload,
    load_json,
    normalize_base_url,
)
from holodex.models.options import FetchOptions
from holodex.models.response_headers import ResponseHeaders
from holodex.models.wire import ChannelJson, WithTotalJson
from holodex.utils.dates import Timestamp
from tests._holodex_helpers import TEST_API_KEY, TEST_BASE_URL, json_response


@pytest.fixture
def make_client():
    """Factory for a HolodexHttpClient backed by a mock transport."""
    transports: list[httpx.Client] = []

    def _make(handler, **kwargs) -> HolodexHttpClient:
        client = httpx.Client(transport=httpx.MockTransport(handler))
        transports.append(client)
        return HolodexHttpClient(TEST_API_KEY, TEST_BASE_URL, client=client, **kwargs)

    yield _make

    for client in transports:
        client.close()


class TestNormalizeBaseUrl:
    """Tests for base URL validation."""

    def test_trailing_slash_is_dropped(self):
        assert normalize_base_url("https://holodex.net/api/v2/") == "https://holodex.net/api/v2"

    def test_plain_http_is_accepted(self):
        assert normalize_base_url("http://localhost:8080/api") == "http://localhost:8080/api"

    def test_unparseable(self):
        with pytest.raises(InvalidUriError):
            normalize_base_url("https://holodex.net/\x01")

    def test_unsupported_scheme(self):
        with pytest.raises(UnsupportedUriSchemeError):
            normalize_base_url("ftp://holodex.net/api/v2")

    def test_missing_host(self):
        with pytest.raises(UriMissingHostError):
            normalize_base_url("https:///api/v2")

    @pytest.mark.parametrize(
        "base_url",
        ["https://holodex.net/api/v2?lang=en", "https://holodex.net/api/v2#top"],
    )
    def test_query_or_fragment_is_rejected(self, base_url):
        """Endpoint paths are appended to the base path, so nothing may follow it."""
        with pytest.raises(InvalidUriError):
            normalize_base_url(base_url)
        with pytest.raises(InvalidUriError):
            HolodexHttpClient(TEST_API_KEY, base_url)


class TestPayloadAndBody:
    """Tests for request serialisation and response decoding."""

    def test_dump_payload_is_minified_without_none(self):
        payload = {"sort": "newest", "topic": None, "comment": ["こんにちは"], "offset": 0}
        assert dump_payload(payload) == '{"sort":"newest","comment":["こんにちは"],"offset":0}'.encode()

    def test_duplicate_keys_rejected_by_default(self):
        with pytest.raises(DuplicateFieldError) as exc_info:
            load_json('{"a": 1, "a": 2}')
        assert exc_info.value.key == "a"

    @pytest.mark.parametrize(("behavior", "expected"), [("use_first", 1), ("use_last", 2)])
    def test_duplicate_key_behaviors(self, behavior, expected):
        assert load_json('{"a": 1, "b": {"a": 0}, "a": 2}', behavior)["a"] == expected

    def test_duplicates_in_nested_objects(self):
        with pytest.raises(DuplicateFieldError):
            load_json('[{"items": [{"id": "x", "id": "y"}]}]')

    def test_invalid_json(self):
        with pytest.raises(InvalidResponseError):
            load_json(b"<html>Bad gateway</html>")


class TestHolodexHttpClientInit:
    """Tests for client construction."""

    def test_requires_api_key(self):
        with pytest.raises(MissingApiKeyError):
            HolodexHttpClient("")

    def test_defaults_from_settings(self, monkeypatch):
        monkeypatch.setenv("HOLODEX_HTTP_TIMEOUT_SECONDS", "5")
        client = HolodexHttpClient(TEST_API_KEY)

        assert client.base_url == TEST_BASE_URL
        assert client.timeout == 5.0
        assert client.default_headers["X-APIKEY"] == TEST_API_KEY

    def test_rejects_bad_base_url(self):
        with pytest.raises(UnsupportedUriSchemeError):
            HolodexHttpClient(TEST_API_KEY, "file:///etc/passwd")

    def test_build_url(self, make_client):
        client = make_client(lambda request: json_response([]))
        assert client.build_url("/channels") == f"{TEST_BASE_URL}/channels"
        assert (
            client.build_url("/channels", [("org", "Hololive"), ("lang", ["en", "ja"])])
            == f"{TEST_BASE_URL}/channels?org=Hololive&lang=en,ja"
        )

    def test_close_leaves_borrowed_client_open(self):
        borrowed = httpx.Client(transport=httpx.MockTransport(lambda request: json_response([])))
        client = HolodexHttpClient(TEST_API_KEY, client=borrowed)
        client.close()
        assert not borrowed.is_closed
        borrowed.close()

    def test_close_owned_client(self):
        with HolodexHttpClient(TEST_API_KEY) as client:
            owned = client._get_client()
        assert owned.is_closed


class TestFetch:
    """Tests for HolodexHttpClient.fetch."""

    def test_sends_headers_and_parses_body(self, make_client, channel_json):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return json_response([channel_json])

        response = make_client(handler).fetch(
            "GET", "/channels", list[ChannelJson], query=[("limit", 1)]
        )

        request = seen[0]
        assert request.method == "GET"
        assert str(request.url) == f"{TEST_BASE_URL}/channels?limit=1"
        assert request.headers["x-apikey"] == TEST_API_KEY
        assert request.headers["user-agent"].startswith("holodex-python/")
        assert request.headers["accept"] == "application/json"
        assert response.value[0].name == channel_json["name"]
        assert response.headers == ResponseHeaders(
            rate_limit=1000, rate_limit_remaining=999, rate_limit_reset=Timestamp(1700000000)
        )

    def test_post_sends_json_body(self, make_client):
        bodies: list[bytes] = []

        def handler(request: httpx.Request) -> httpx.Response:
            bodies.append(request.content)
            return json_response([])

        make_client(handler).fetch(
            "POST", "/search/commentSearch", list[ChannelJson], payload={"org": None, "limit": 5}
        )

        assert bodies == [b'{"limit":5}']

    @pytest.mark.parametrize(
        ("status_code", "error_type"),
        [
            (403, BadApiKeyError),
            (404, NotFoundError),
            (429, RateLimitedError),
            (500, UnexpectedStatusError),
            (418, UnexpectedStatusError),
            (201, UnexpectedStatusError),
        ],
    )
    def test_status_codes(self, make_client, status_code, error_type):
        client = make_client(lambda request: json_response({"message": "no"}, status_code))

        with pytest.raises(error_type) as exc_info:
            client.fetch("GET", "/channels/UC1", ChannelJson)

        assert exc_info.value.status_code == status_code
        assert exc_info.value.url == f"{TEST_BASE_URL}/channels/UC1"

    def test_status_error_is_logged_as_warning(self, make_client, caplog):
        client = make_client(lambda request: json_response({"message": "no"}, 404))

        with caplog.at_level(logging.DEBUG, logger="holodex"):
            with pytest.raises(NotFoundError):
                client.fetch("GET", "/channels/UC1", ChannelJson)

        failures = [record for record in caplog.records if record.levelno >= logging.WARNING]
        assert [record.levelno for record in failures] == [logging.WARNING]
        assert failures[0].exc_info is None
        assert failures[0].error_type == "NotFoundError"
        assert failures[0].http_details["status_code"] == 404

    def test_transport_failure(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(TransportError) as exc_info:
            make_client(handler).fetch("GET", "/channels", list[ChannelJson])
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_redirect_loop(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(302, headers={"Location": str(request.url)})

        with pytest.raises(UnexpectedFetchError):
            make_client(handler).fetch("GET", "/channels", list[ChannelJson])

    def test_redirect_is_followed(self, make_client):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/old"):
                return httpx.Response(301, headers={"Location": f"{TEST_BASE_URL}/channels"})
            return json_response([])

        assert make_client(handler).fetch("GET", "/old", list[ChannelJson]).value == []

    def test_body_shape_mismatch(self, make_client):
        client = make_client(lambda request: json_response({"not": "a list"}))
        with pytest.raises(InvalidResponseError):
            client.fetch("GET", "/channels", list[ChannelJson])

    def test_unknown_fields_rejected_on_request(self, make_client, channel_json):
        client = make_client(lambda request: json_response([{**channel_json, "new_field": 1}]))

        assert len(client.fetch("GET", "/channels", list[ChannelJson]).value) == 1
        with pytest.raises(InvalidResponseError, match="new_field"):
            client.fetch(
                "GET",
                "/channels",
                list[ChannelJson],
                options=FetchOptions(ignore_unknown_fields=False),
            )

    def test_duplicate_fields_follow_options(self, make_client):
        body = '{"total": 1, "items": [], "total": 2}'
        client = make_client(lambda request: json_response(body))

        with pytest.raises(DuplicateFieldError):
            client.fetch("GET", "/videos", WithTotalJson[ChannelJson])
        value = client.fetch(
            "GET",
            "/videos",
            WithTotalJson[ChannelJson],
            options=FetchOptions(duplicate_field_behavior="use_last"),
        ).value
        assert value.total == 2

    def test_missing_rate_limit_headers(self, make_client):
        client = make_client(lambda request: httpx.Response(200, content=json.dumps([])))
        with pytest.raises(MissingHeaderError):
            client.fetch("GET", "/channels", list[ChannelJson])

    def test_status_checked_before_headers(self, make_client):
        """A 404 without rate limit headers is still reported as not found."""
        client = make_client(lambda request: httpx.Response(404))
        with pytest.raises(NotFoundError):
            client.fetch("GET", "/channels/nope", ChannelJson)
