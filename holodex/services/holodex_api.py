"""Holodex API client: one method per endpoint, returning domain records."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import httpx

from holodex.core.logging import get_logger
from holodex.core.settings import get_settings
from holodex.domain.converters import (
    channel_full_to_domain,
    channel_to_domain,
    searched_comments_to_domain,
    video_full_to_domain,
    video_to_domain,
)
from holodex.domain.records import Channel, ChannelFull, Comment, Video, VideoFull, WithTotal
from holodex.http_client.api_client import HolodexHttpClient, Response
from holodex.models.options import (
    FetchOptions,
    ListChannelsOptions,
    LiveOptions,
    SearchCommentsOptions,
    VideoInfoOptions,
    VideosOptions,
)
from holodex.models.wire import (
    ChannelFullJson,
    ChannelJson,
    SearchedVideoJson,
    VideoFullJson,
    VideoJson,
    WithTotalJson,
)
from holodex.utils.pagination import Pager
from holodex.utils.query import percent_encode, query_items

logger = get_logger(__name__)

_SEARCH_COMMENTS_PATH = "/search/commentSearch"


def _paginated(options: Any) -> list[tuple[str, Any]]:
    # Any value of ``paginated`` makes the API answer with {total, items}.
    return [*query_items(options), ("paginated", True)]


class HolodexApi:
    """
    Typed client for the Holodex v2 API.

    Usage:
        with HolodexApi(api_key="...") as api:
            channel = api.channel_info("UCHsx4Hqa-1ORjQTh9TYDhww").value
            for comment in api.page_search_comments(SearchCommentsOptions(comment="bgm")):
                print(comment.content)

    Every call performs a single request and returns a ``Response`` carrying
    the domain value and the rate limit headers. ``page_*`` methods return a
    ``Pager`` that fetches further pages lazily.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ):
        """
        Args:
            api_key: Holodex API key. Falls back to settings.api_key
                (``HOLODEX_API_KEY``).
            base_url: API root. Falls back to settings.base_url.
            timeout: Request timeout in seconds.
            client: ``httpx.Client`` to send requests with, e.g. one using a
                mock transport.

        Raises:
            MissingApiKeyError: No API key was given or configured.
            ConfigurationError: The base URL is invalid.
        """
        settings = get_settings()
        self.http = HolodexHttpClient(
            api_key or settings.api_key or "",
            base_url or settings.base_url,
            timeout=timeout,
            client=client,
        )
        logger.debug(f"Initialized Holodex client for {self.http.base_url}")

    def close(self) -> None:
        self.http.close()

    def __enter__(self) -> HolodexApi:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Single records

    def channel_info(
        self, channel_id: str, *, fetch_options: FetchOptions | None = None
    ) -> Response[ChannelFull]:
        """Fetch information about a YouTube channel (``GET /channels/{id}``)."""
        response = self.http.fetch(
            "GET",
            f"/channels/{percent_encode(channel_id)}",
            ChannelFullJson,
            options=fetch_options,
        )
        return Response(response.headers, channel_full_to_domain(response.value))

    def channels_live(
        self, channel_ids: Iterable[str], *, fetch_options: FetchOptions | None = None
    ) -> Response[list[Video]]:
        """Fetch live and upcoming streams of a set of channels (``GET /users/live``).

        Faster than ``live`` but not configurable.
        """
        response = self.http.fetch(
            "GET",
            "/users/live",
            list[VideoJson],
            query=[("channels", list(channel_ids))],
            options=fetch_options,
        )
        return Response(response.headers, [video_to_domain(video) for video in response.value])

    def video_info(
        self, options: VideoInfoOptions, *, fetch_options: FetchOptions | None = None
    ) -> Response[VideoFull]:
        """Fetch information about a video (``GET /videos/{id}``)."""
        response = self.http.fetch(
            "GET",
            f"/videos/{percent_encode(options.video_id)}",
            VideoFullJson,
            query=options.query(),
            options=fetch_options,
        )
        return Response(response.headers, video_full_to_domain(response.value))

    # Channels

    def list_channels(
        self,
        options: ListChannelsOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Response[list[Channel]]:
        """List channels (``GET /channels``). ``limit`` must be within 1..100."""
        options = options or ListChannelsOptions()
        options.validate()
        return self._list_channels(options, fetch_options)

    def _list_channels(
        self, options: ListChannelsOptions, fetch_options: FetchOptions | None
    ) -> Response[list[Channel]]:
        response = self.http.fetch(
            "GET", "/channels", list[ChannelJson], query=options, options=fetch_options
        )
        return Response(response.headers, [channel_to_domain(item) for item in response.value])

    def page_channels(
        self,
        options: ListChannelsOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Pager[Channel, ListChannelsOptions]:
        options = options or ListChannelsOptions()
        options.validate()
        return Pager(lambda page: self._list_channels(page, fetch_options), options)

    # Videos

    def videos(
        self,
        options: VideosOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Response[list[VideoFull]]:
        """Fetch videos matching ``options`` (``GET /videos``). ``limit`` must be within 1..50."""
        options = options or VideosOptions()
        options.validate()
        return self._videos(options, fetch_options)

    def _videos(
        self, options: VideosOptions, fetch_options: FetchOptions | None
    ) -> Response[list[VideoFull]]:
        response = self.http.fetch(
            "GET", "/videos", list[VideoFullJson], query=options, options=fetch_options
        )
        return Response(response.headers, [video_full_to_domain(item) for item in response.value])

    def videos_with_total(
        self,
        options: VideosOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Response[WithTotal[VideoFull]]:
        """Same as ``videos``, plus the number of videos matching ``options``."""
        options = options or VideosOptions()
        options.validate()
        response = self.http.fetch(
            "GET",
            "/videos",
            WithTotalJson[VideoFullJson],
            query=_paginated(options),
            options=fetch_options,
        )
        return Response(
            response.headers,
            WithTotal(
                total=response.value.total,
                items=tuple(video_full_to_domain(item) for item in response.value.items),
            ),
        )

    def page_videos(
        self,
        options: VideosOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Pager[VideoFull, VideosOptions]:
        options = options or VideosOptions()
        options.validate()
        return Pager(lambda page: self._videos(page, fetch_options), options)

    # Live

    def live(
        self,
        options: LiveOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Response[list[VideoFull]]:
        """Fetch live and upcoming streams (``GET /live``). ``limit`` must be within 1..50."""
        options = options or LiveOptions()
        options.validate()
        return self._live(options, fetch_options)

    def _live(
        self, options: LiveOptions, fetch_options: FetchOptions | None
    ) -> Response[list[VideoFull]]:
        response = self.http.fetch(
            "GET", "/live", list[VideoFullJson], query=options, options=fetch_options
        )
        return Response(response.headers, [video_full_to_domain(item) for item in response.value])

    def live_with_total(
        self,
        options: LiveOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Response[WithTotal[VideoFull]]:
        options = options or LiveOptions()
        options.validate()
        response = self.http.fetch(
            "GET",
            "/live",
            WithTotalJson[VideoFullJson],
            query=_paginated(options),
            options=fetch_options,
        )
        return Response(
            response.headers,
            WithTotal(
                total=response.value.total,
                items=tuple(video_full_to_domain(item) for item in response.value.items),
            ),
        )

    def page_live(
        self,
        options: LiveOptions | None = None,
        *,
        fetch_options: FetchOptions | None = None,
    ) -> Pager[VideoFull, LiveOptions]:
        options = options or LiveOptions()
        options.validate()
        return Pager(lambda page: self._live(page, fetch_options), options)

    # Comment search

    def search_comments(
        self, options: SearchCommentsOptions, *, fetch_options: FetchOptions | None = None
    ) -> Response[list[Comment]]:
        """
        Search timestamp comments (``POST /search/commentSearch``).

        Comments are returned in the order of the videos they were found on,
        each pointing at its video. ``limit`` must be within 1..100000.
        """
        options.validate()
        return self._search_comments(options, fetch_options)

    def _search_comments(
        self, options: SearchCommentsOptions, fetch_options: FetchOptions | None
    ) -> Response[list[Comment]]:
        response = self.http.fetch(
            "POST",
            _SEARCH_COMMENTS_PATH,
            list[SearchedVideoJson],
            payload=options.to_payload(paginated=False),
            options=fetch_options,
        )
        return Response(response.headers, searched_comments_to_domain(response.value))

    def search_comments_with_total(
        self, options: SearchCommentsOptions, *, fetch_options: FetchOptions | None = None
    ) -> Response[WithTotal[Comment]]:
        """Same as ``search_comments``, plus the number of matching comments."""
        options.validate()
        response = self.http.fetch(
            "POST",
            _SEARCH_COMMENTS_PATH,
            WithTotalJson[SearchedVideoJson],
            payload=options.to_payload(paginated=True),
            options=fetch_options,
        )
        comments: Sequence[Comment] = searched_comments_to_domain(response.value.items)
        return Response(
            response.headers, WithTotal(total=response.value.total, items=tuple(comments))
        )

    def page_search_comments(
        self, options: SearchCommentsOptions, *, fetch_options: FetchOptions | None = None
    ) -> Pager[Comment, SearchCommentsOptions]:
        options.validate()
        return Pager(lambda page: self._search_comments(page, fetch_options), options)
