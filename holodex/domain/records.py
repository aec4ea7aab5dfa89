"""Normalized records returned to callers.

Records are frozen dataclasses that own all of their data: sequences are
tuples and mappings are fresh dicts, so nothing refers back to the parsed
response.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar
from uuid import UUID

from holodex.models.enums import ChannelType, VideoStatus, VideoType
from holodex.utils.dates import Duration, Timestamp, VideoOffset

T = TypeVar("T")


@dataclass(frozen=True)
class ChannelStats:
    video_count: int
    subscriber_count: int
    # 0 if the channel is a subber.
    clip_count: int = 0


@dataclass(frozen=True)
class Channel:
    """Basic information about a channel, as listed by ``/channels``."""

    id: str
    name: str
    type: ChannelType
    stats: ChannelStats
    inactive: bool
    english_name: str | None = None
    org: str | None = None
    group: str | None = None
    photo: str | None = None
    # Handles without the leading ``@``.
    twitter: str | None = None
    twitch: str | None = None
    # None if the channel is a subber.
    top_topics: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ChannelFull:
    """Everything Holodex knows about a single channel."""

    id: str
    name: str
    type: ChannelType
    inactive: bool
    english_name: str | None = None
    org: str | None = None
    group: str | None = None
    photo: str | None = None
    banner: str | None = None
    twitter: str | None = None
    twitch: str | None = None
    video_count: int | None = None
    subscriber_count: int | None = None
    view_count: int | None = None
    clip_count: int | None = None
    lang: str | None = None
    # When the channel was created on YouTube.
    published_at: Timestamp | None = None
    # When the channel was added to Holodex.
    created_at: Timestamp | None = None
    updated_at: Timestamp | None = None
    description: str | None = None
    top_topics: tuple[str, ...] | None = None
    # YouTube handles, including the leading ``@``.
    yt_handle: tuple[str, ...] | None = None
    # Previous channel names, oldest first.
    yt_name_history: tuple[str, ...] | None = None
    crawled_at: Timestamp | None = None
    comments_crawled_at: Timestamp | None = None


@dataclass(frozen=True)
class LiveInfo:
    """Livestream timing. ``live_viewers`` is 0 unless the stream is live."""

    live_viewers: int
    start_scheduled: Timestamp | None = None
    start_actual: Timestamp | None = None
    end_actual: Timestamp | None = None


@dataclass(frozen=True)
class VideoChannel:
    id: str
    name: str
    type: ChannelType
    photo: str
    english_name: str | None = None
    org: str | None = None
    group: str | None = None


@dataclass(frozen=True)
class Video:
    """A live or upcoming stream, as returned by ``/users/live``."""

    id: str
    title: str
    type: VideoType
    available_at: Timestamp
    duration: Duration
    status: VideoStatus
    live_info: LiveInfo
    channel: VideoChannel
    topic: str | None = None
    published_at: Timestamp | None = None


@dataclass(frozen=True)
class VideoFullChannelStats:
    video_count: int
    subscriber_count: int
    view_count: int
    clip_count: int = 0


@dataclass(frozen=True)
class VideoFullChannel:
    id: str
    name: str
    type: ChannelType
    photo: str
    english_name: str | None = None
    org: str | None = None
    group: str | None = None
    # Only sent when ``channel_stats`` is included.
    stats: VideoFullChannelStats | None = None


@dataclass(frozen=True)
class VideoMinChannel:
    id: str
    name: str
    photo: str
    english_name: str | None = None
    org: str | None = None


@dataclass(frozen=True)
class VideoMin:
    """Short reference to a related video."""

    id: str
    type: VideoType
    title: str
    status: VideoStatus
    channel: VideoMinChannel
    duration: Duration
    lang: str | None = None
    available_at: Timestamp | None = None


@dataclass(frozen=True)
class Vtuber:
    id: str
    name: str
    photo: str
    english_name: str | None = None
    org: str | None = None
    group: str | None = None
    lang: str | None = None


@dataclass(frozen=True)
class Song:
    """A song performed in a video."""

    # Holodex id of the performance, not of the song itself.
    holodex_id: UUID
    name: str
    original_artist: str
    start: VideoOffset
    end: VideoOffset
    art: str | None = None
    itunes_id: int | None = None


@dataclass(frozen=True)
class SearchedVideoChannel:
    id: str
    name: str
    type: ChannelType
    photo: str
    english_name: str | None = None


@dataclass(frozen=True)
class SearchedVideo:
    """The video a searched comment was posted on."""

    id: str
    title: str
    type: VideoType
    available_at: Timestamp
    duration: Duration
    status: VideoStatus
    channel: SearchedVideoChannel
    topic: str | None = None
    published_at: Timestamp | None = None
    songcount: int = 0


@dataclass(frozen=True)
class Comment:
    """A YouTube comment containing at least one timestamp."""

    id: str
    content: str
    # Set for comment search results.
    video: SearchedVideo | None = None


@dataclass(frozen=True)
class VideoFull:
    """Full information about a video.

    Optional groups are only sent when requested through ``include``:
    ``live_info`` is present iff the response had ``live_viewers``, and the
    channel's ``stats`` iff it had ``video_count``.
    """

    id: str
    title: str
    type: VideoType
    available_at: Timestamp
    duration: Duration
    status: VideoStatus
    channel: VideoFullChannel
    topic: str | None = None
    published_at: Timestamp | None = None
    # The translated language if the video is a subbed clip.
    lang: str | None = None
    # Language code -> number of live translations.
    live_tl_count: dict[str, int] | None = None
    description: str | None = None
    songs: tuple[Song, ...] | None = None
    live_info: LiveInfo | None = None
    clips: tuple[VideoMin, ...] | None = None
    # None if the video is not a clip.
    sources: tuple[VideoMin, ...] | None = None
    # Videos linked in the description.
    refers: tuple[VideoMin, ...] | None = None
    simulcasts: tuple[VideoMin, ...] | None = None
    mentions: tuple[Vtuber, ...] | None = None
    timestamp_comments: tuple[Comment, ...] | None = None


@dataclass(frozen=True)
class WithTotal(Generic[T]):
    """A page of results plus the number of results matching the query."""

    total: int
    items: tuple[T, ...]
