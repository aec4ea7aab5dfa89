"""
Raw JSON shapes returned by the Holodex API.

These models only validate the structure of a response. Timestamps, UUIDs and
derived fields (groups, stats, live info) are left as sent and converted by
``holodex.domain.converters``.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationInfo, model_validator

from holodex.models.enums import ChannelType, VideoStatus, VideoType

T = TypeVar("T")

# Validation context key. When False, fields the model does not declare are rejected.
IGNORE_UNKNOWN_FIELDS = "ignore_unknown_fields"


class WireModel(BaseModel):
    """Base for all wire records: unknown fields are ignored unless the
    validation context asks for them to be rejected."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _reject_unknown_fields(cls, data: Any, info: ValidationInfo) -> Any:
        context = info.context or {}
        if context.get(IGNORE_UNKNOWN_FIELDS, True) or not isinstance(data, dict):
            return data
        unknown = sorted(key for key in data if key not in cls.model_fields)
        if unknown:
            raise ValueError(f"unknown field(s): {', '.join(unknown)}")
        return data


class ChannelJson(WireModel):
    """Item of ``GET /channels``."""

    id: str
    name: str
    english_name: str | None = None
    type: ChannelType
    org: str | None = None
    group: str | None = None
    photo: str | None = None
    twitter: str | None = None
    twitch: str | None = None
    video_count: int
    subscriber_count: int
    clip_count: int | None = None
    inactive: bool
    top_topics: list[str] | None = None


class ChannelFullJson(WireModel):
    """Response of ``GET /channels/{id}``."""

    id: str
    name: str
    english_name: str | None = None
    description: str | None = None
    type: ChannelType
    org: str | None = None
    group: str | None = None
    photo: str | None = None
    banner: str | None = None
    twitter: str | None = None
    twitch: str | None = None
    yt_handle: list[str] | None = None
    yt_name_history: list[str] | None = None
    lang: str | None = None
    video_count: int | None = None
    subscriber_count: int | None = None
    view_count: int | None = None
    clip_count: int | None = None
    top_topics: list[str] | None = None
    inactive: bool
    published_at: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    crawled_at: str | None = None
    comments_crawled_at: str | None = None


class VideoChannelJson(WireModel):
    id: str
    name: str
    english_name: str | None = None
    type: ChannelType
    org: str | None = None
    suborg: str | None = None
    photo: str


class VideoJson(WireModel):
    """Item of ``GET /users/live``."""

    id: str
    title: str
    type: VideoType
    topic_id: str | None = None
    published_at: str | None = None
    available_at: str
    duration: int = 0
    status: VideoStatus
    start_scheduled: str | None = None
    start_actual: str | None = None
    end_actual: str | None = None
    live_viewers: int
    channel: VideoChannelJson


class VideoMinChannelJson(WireModel):
    id: str
    name: str
    english_name: str | None = None
    org: str | None = None
    photo: str


class VideoMinJson(WireModel):
    """Short video reference embedded in clips, sources, refers and simulcasts."""

    id: str
    lang: str | None = None
    type: VideoType
    title: str
    status: VideoStatus
    channel: VideoMinChannelJson
    duration: int = 0
    available_at: str | None = None


class VtuberJson(WireModel):
    id: str
    name: str
    english_name: str | None = None
    org: str | None = None
    suborg: str | None = None
    photo: str
    lang: str | None = None


class SongJson(WireModel):
    id: str
    name: str
    original_artist: str
    start: int
    end: int
    art: str | None = None
    itunesid: int | None = None


class CommentJson(WireModel):
    comment_key: str
    message: str


class VideoFullChannelJson(WireModel):
    id: str
    name: str
    english_name: str | None = None
    type: ChannelType
    org: str | None = None
    suborg: str | None = None
    photo: str
    video_count: int | None = None
    subscriber_count: int | None = None
    view_count: int | None = None
    clip_count: int | None = None


class VideoFullJson(WireModel):
    """Item of ``GET /videos``, ``GET /live`` and ``GET /videos/{id}``."""

    id: str
    title: str
    type: VideoType
    topic_id: str | None = None
    published_at: str | None = None
    available_at: str
    duration: int = 0
    status: VideoStatus
    lang: str | None = None
    live_tl_count: dict[str, int] | None = None
    description: str | None = None
    songs: list[SongJson] | None = None
    channel: VideoFullChannelJson
    start_scheduled: str | None = None
    start_actual: str | None = None
    end_actual: str | None = None
    live_viewers: int | None = None
    clips: list[VideoMinJson] | None = None
    sources: list[VideoMinJson] | None = None
    refers: list[VideoMinJson] | None = None
    simulcasts: list[VideoMinJson] | None = None
    mentions: list[VtuberJson] | None = None
    comments: list[CommentJson] | None = None


class SearchedVideoChannelJson(WireModel):
    id: str
    name: str
    type: ChannelType
    photo: str
    english_name: str | None = None


class SearchedVideoJson(WireModel):
    """Item of ``POST /search/commentSearch``."""

    id: str
    title: str
    type: VideoType
    topic_id: str | None = None
    published_at: str | None = None
    available_at: str
    duration: int = 0
    status: VideoStatus
    songcount: int = 0
    channel: SearchedVideoChannelJson
    comments: list[CommentJson] | None = None


class WithTotalJson(WireModel, Generic[T]):
    """Paginated response: ``{"total": ..., "items": [...]}``."""

    total: int
    items: list[T]
