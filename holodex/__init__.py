"""Typed synchronous client for the Holodex v2 API."""

from holodex.constants import __version__
from holodex.core.errors import (
    ApiStatusError,
    BadApiKeyError,
    ConfigurationError,
    ConversionError,
    HolodexError,
    InvalidOptionsError,
    InvalidResponseError,
    NotFoundError,
    RateLimitedError,
    TransportError,
    UnexpectedFetchError,
    UnexpectedStatusError,
)
from holodex.domain.records import (
    Channel,
    ChannelFull,
    Comment,
    SearchedVideo,
    Song,
    Video,
    VideoFull,
    VideoMin,
    Vtuber,
    WithTotal,
)
from holodex.http_client.api_client import HolodexHttpClient, Response
from holodex.models.enums import (
    ChannelSort,
    ChannelType,
    Languages,
    Organizations,
    SearchOrder,
    SortOrder,
    VideoInclude,
    VideoSort,
    VideoStatus,
    VideoType,
)
from holodex.models.options import (
    FetchOptions,
    ListChannelsOptions,
    LiveOptions,
    SearchCommentsOptions,
    VideoInfoOptions,
    VideosOptions,
)
from holodex.models.response_headers import ResponseHeaders
from holodex.services.holodex_api import HolodexApi
from holodex.utils.dates import Duration, Timestamp, VideoOffset
from holodex.utils.pagination import Pager
from holodex.utils.query import format_query

__all__ = [
    "__version__",
    "ApiStatusError",
    "BadApiKeyError",
    "Channel",
    "ChannelFull",
    "ChannelSort",
    "ChannelType",
    "Comment",
    "ConfigurationError",
    "ConversionError",
    "Duration",
    "FetchOptions",
    "HolodexApi",
    "HolodexError",
    "HolodexHttpClient",
    "InvalidOptionsError",
    "InvalidResponseError",
    "Languages",
    "ListChannelsOptions",
    "LiveOptions",
    "NotFoundError",
    "Organizations",
    "Pager",
    "RateLimitedError",
    "Response",
    "ResponseHeaders",
    "SearchCommentsOptions",
    "SearchOrder",
    "SearchedVideo",
    "Song",
    "SortOrder",
    "Timestamp",
    "TransportError",
    "UnexpectedFetchError",
    "UnexpectedStatusError",
    "Video",
    "VideoFull",
    "VideoInclude",
    "VideoInfoOptions",
    "VideoMin",
    "VideoOffset",
    "VideoSort",
    "VideoStatus",
    "VideoType",
    "Vtuber",
    "VideosOptions",
    "WithTotal",
    "format_query",
]
