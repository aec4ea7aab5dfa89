"""Request options for the Holodex endpoints.

Every option record is a dataclass; ``holodex.utils.query.format_query``
renders its fields in declaration order and skips ``None``. A field whose
metadata maps ``query`` to another name is sent under that name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

from holodex.core.errors import InvalidLimitError, InvalidOffsetError
from holodex.models.enums import (
    ChannelSort,
    ChannelType,
    CommentsFlag,
    SearchOrder,
    SortOrder,
    VideoInclude,
    VideoSort,
    VideoStatus,
    VideoType,
)
from holodex.utils.query import QUERY_NAME

DuplicateFieldBehavior = Literal["error", "use_first", "use_last"]

LIST_CHANNELS_MAX_LIMIT = 100
VIDEOS_MAX_LIMIT = 50
LIVE_MAX_LIMIT = 50
SEARCH_COMMENTS_MAX_LIMIT = 100_000


def validate_limit(limit: int, max_limit: int) -> None:
    """Raise ``InvalidLimitError`` unless ``1 <= limit <= max_limit``."""
    if not 1 <= limit <= max_limit:
        raise InvalidLimitError(limit, max_limit)


def validate_offset(offset: int) -> None:
    if offset < 0:
        raise InvalidOffsetError(offset)


@dataclass(frozen=True)
class FetchOptions:
    """How a response body is parsed."""

    # Fields the wire records do not declare are skipped; False rejects them.
    ignore_unknown_fields: bool = True
    # What to do when a JSON object repeats a key.
    duplicate_field_behavior: DuplicateFieldBehavior = "error"


@dataclass
class ListChannelsOptions:
    """Query of ``GET /channels``."""

    max_limit = LIST_CHANNELS_MAX_LIMIT

    # Filter by type of channel; None queries all.
    type: ChannelType | None = None
    offset: int = 0
    limit: int = 25
    # Only channels belonging to this organization.
    org: str | None = None
    # Only channels using any of these languages.
    lang: list[str] | None = None
    sort: ChannelSort = ChannelSort.org
    order: SortOrder = SortOrder.asc

    def validate(self) -> None:
        validate_limit(self.limit, self.max_limit)
        validate_offset(self.offset)


@dataclass
class VideosOptions:
    """Query of ``GET /videos``."""

    max_limit = VIDEOS_MAX_LIMIT

    channel_id: str | None = None
    id: list[str] | None = None
    include: list[VideoInclude] | None = None
    lang: list[str] | None = None
    limit: int = 25
    max_upcoming_hours: int | None = None
    mentioned_channel_id: str | None = None
    offset: int = 0
    order: SortOrder = SortOrder.desc
    org: str | None = None
    sort: VideoSort = VideoSort.available_at
    status: VideoStatus | None = None
    topic: str | None = None
    type: VideoType | None = None
    # Only videos after this ISO 8601 time. ``from`` is a keyword in Python.
    from_: str | None = field(default=None, metadata={QUERY_NAME: "from"})
    # Only videos before this ISO 8601 time.
    to: str | None = None

    def validate(self) -> None:
        validate_limit(self.limit, self.max_limit)
        validate_offset(self.offset)


@dataclass
class LiveOptions:
    """Query of ``GET /live``: live and upcoming videos."""

    max_limit = LIVE_MAX_LIMIT

    channel_id: str | None = None
    id: list[str] | None = None
    include: list[VideoInclude] | None = None
    lang: list[str] | None = None
    limit: int = 25
    max_upcoming_hours: int | None = None
    mentioned_channel_id: str | None = None
    offset: int = 0
    order: SortOrder = SortOrder.asc
    org: str | None = None
    sort: VideoSort = VideoSort.available_at
    status: VideoStatus | None = None
    topic: str | None = None
    type: VideoType | None = None

    def validate(self) -> None:
        validate_limit(self.limit, self.max_limit)
        validate_offset(self.offset)


@dataclass
class SearchCommentsOptions:
    """Body of ``POST /search/commentSearch``.

    The comment text is required; every filter is optional. Empty filter lists
    are treated as absent.
    """

    max_limit = SEARCH_COMMENTS_MAX_LIMIT

    # Case insensitive text to search for.
    comment: str
    sort: SearchOrder = SearchOrder.newest
    # Only videos of any of these topics.
    topics: list[str] = field(default_factory=list)
    # Only videos involving all of these channels.
    channels: list[str] = field(default_factory=list)
    # Only videos involving VTubers from all of these organizations.
    orgs: list[str] = field(default_factory=list)
    offset: int = 0
    limit: int = 30

    def validate(self) -> None:
        validate_limit(self.limit, self.max_limit)
        validate_offset(self.offset)

    def to_payload(self, *, paginated: bool) -> dict[str, Any]:
        """Build the JSON request body. ``None`` entries are dropped on send."""
        return {
            "sort": self.sort.value,
            # The API expects the search text wrapped in a one element list.
            "comment": [self.comment],
            "topic": list(self.topics) or None,
            "vch": list(self.channels) or None,
            "org": list(self.orgs) or None,
            "offset": self.offset,
            "limit": self.limit,
            "paginated": paginated,
        }


@dataclass
class VideoInfoOptions:
    """Options of ``GET /videos/{id}``."""

    # The YouTube video ID, sent in the path.
    video_id: str = field(metadata={QUERY_NAME: None})
    # Whether to include timestamp comments, sent as ``c=0|1``.
    comments: bool = field(default=False, metadata={QUERY_NAME: None})

    def query(self) -> list[tuple[str, CommentsFlag]]:
        return [("c", CommentsFlag.from_bool(self.comments))]
