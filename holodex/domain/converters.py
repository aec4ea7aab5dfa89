"""Map wire records onto domain records.

Each ``*_to_domain`` function takes a validated ``*Json`` model and returns a
freshly built record. Failures raise ``ConversionError`` subclasses:
``InvalidTimestampError``, ``InvalidUuidError`` or ``MissingFieldError``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from holodex.core.errors import InvalidResponseError, MissingFieldError
from holodex.domain.records import (
    Channel,
    ChannelFull,
    ChannelStats,
    Comment,
    LiveInfo,
    SearchedVideo,
    SearchedVideoChannel,
    Song,
    Video,
    VideoChannel,
    VideoFull,
    VideoFullChannel,
    VideoFullChannelStats,
    VideoMin,
    VideoMinChannel,
    Vtuber,
)
from holodex.models.wire import (
    ChannelFullJson,
    ChannelJson,
    CommentJson,
    SearchedVideoChannelJson,
    SearchedVideoJson,
    SongJson,
    VideoChannelJson,
    VideoFullChannelJson,
    VideoFullJson,
    VideoJson,
    VideoMinChannelJson,
    VideoMinJson,
    VtuberJson,
)
from holodex.utils.dates import Duration, Timestamp, VideoOffset, parse_optional_timestamp
from holodex.utils.identifiers import parse_uuid

J = TypeVar("J")
R = TypeVar("R")


def derive_group(suborg: str | None) -> str | None:
    """Strip the two character sort prefix Holodex puts in front of a group name.

    >>> derive_group("ABExample Group")
    'Example Group'
    >>> derive_group("AB") is None
    True
    """
    if suborg is None or len(suborg) <= 2:
        return None
    return suborg[2:]


def _optional_tuple(values: Iterable[str] | None) -> tuple[str, ...] | None:
    return None if values is None else tuple(values)


def _convert_optional(
    convert: Callable[[J], R], values: Sequence[J] | None
) -> tuple[R, ...] | None:
    if values is None:
        return None
    return tuple(convert(value) for value in values)


def channel_to_domain(data: ChannelJson) -> Channel:
    return Channel(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        type=data.type,
        org=data.org,
        group=data.group,
        photo=data.photo,
        twitter=data.twitter,
        twitch=data.twitch,
        stats=ChannelStats(
            video_count=data.video_count,
            subscriber_count=data.subscriber_count,
            clip_count=data.clip_count if data.clip_count is not None else 0,
        ),
        inactive=data.inactive,
        top_topics=_optional_tuple(data.top_topics),
    )


def channel_full_to_domain(data: ChannelFullJson) -> ChannelFull:
    return ChannelFull(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        type=data.type,
        org=data.org,
        group=data.group,
        photo=data.photo,
        banner=data.banner,
        twitter=data.twitter,
        twitch=data.twitch,
        video_count=data.video_count,
        subscriber_count=data.subscriber_count,
        view_count=data.view_count,
        clip_count=data.clip_count,
        lang=data.lang,
        published_at=parse_optional_timestamp(data.published_at),
        created_at=parse_optional_timestamp(data.created_at),
        updated_at=parse_optional_timestamp(data.updated_at),
        inactive=data.inactive,
        description=data.description,
        top_topics=_optional_tuple(data.top_topics),
        yt_handle=_optional_tuple(data.yt_handle),
        yt_name_history=_optional_tuple(data.yt_name_history),
        crawled_at=parse_optional_timestamp(data.crawled_at),
        comments_crawled_at=parse_optional_timestamp(data.comments_crawled_at),
    )


def video_channel_to_domain(data: VideoChannelJson) -> VideoChannel:
    return VideoChannel(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        type=data.type,
        org=data.org,
        group=derive_group(data.suborg),
        photo=data.photo,
    )


def video_to_domain(data: VideoJson) -> Video:
    return Video(
        id=data.id,
        title=data.title,
        type=data.type,
        topic=data.topic_id,
        published_at=parse_optional_timestamp(data.published_at),
        available_at=Timestamp.parse_iso(data.available_at),
        duration=Duration.from_seconds(data.duration),
        status=data.status,
        live_info=LiveInfo(
            start_scheduled=parse_optional_timestamp(data.start_scheduled),
            start_actual=parse_optional_timestamp(data.start_actual),
            end_actual=parse_optional_timestamp(data.end_actual),
            live_viewers=data.live_viewers,
        ),
        channel=video_channel_to_domain(data.channel),
    )


def video_full_channel_to_domain(data: VideoFullChannelJson) -> VideoFullChannel:
    # video_count is always sent with channel_stats; its presence decides whether
    # the remaining counters are required.
    stats = None
    if data.video_count is not None:
        if data.subscriber_count is None:
            raise MissingFieldError("subscriber_count", required_by="video_count")
        if data.view_count is None:
            raise MissingFieldError("view_count", required_by="video_count")
        stats = VideoFullChannelStats(
            video_count=data.video_count,
            subscriber_count=data.subscriber_count,
            view_count=data.view_count,
            clip_count=data.clip_count if data.clip_count is not None else 0,
        )

    return VideoFullChannel(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        type=data.type,
        org=data.org,
        group=derive_group(data.suborg),
        photo=data.photo,
        stats=stats,
    )


def video_min_to_domain(data: VideoMinJson) -> VideoMin:
    return VideoMin(
        id=data.id,
        lang=data.lang,
        type=data.type,
        title=data.title,
        status=data.status,
        channel=video_min_channel_to_domain(data.channel),
        duration=Duration.from_seconds(data.duration),
        available_at=parse_optional_timestamp(data.available_at),
    )


def video_min_channel_to_domain(data: VideoMinChannelJson) -> VideoMinChannel:
    return VideoMinChannel(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        org=data.org,
        photo=data.photo,
    )


def vtuber_to_domain(data: VtuberJson) -> Vtuber:
    return Vtuber(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        org=data.org,
        group=derive_group(data.suborg),
        photo=data.photo,
        lang=data.lang,
    )


def song_to_domain(data: SongJson) -> Song:
    return Song(
        holodex_id=parse_uuid(data.id),
        name=data.name,
        original_artist=data.original_artist,
        start=VideoOffset.from_seconds(data.start),
        end=VideoOffset.from_seconds(data.end),
        art=data.art,
        itunes_id=data.itunesid,
    )


def comment_to_domain(data: CommentJson, video: SearchedVideo | None = None) -> Comment:
    return Comment(id=data.comment_key, content=data.message, video=video)


def video_full_to_domain(data: VideoFullJson) -> VideoFull:
    # live_viewers is the one field always sent with live_info.
    live_info = None
    if data.live_viewers is not None:
        live_info = LiveInfo(
            start_scheduled=parse_optional_timestamp(data.start_scheduled),
            start_actual=parse_optional_timestamp(data.start_actual),
            end_actual=parse_optional_timestamp(data.end_actual),
            live_viewers=data.live_viewers,
        )

    return VideoFull(
        id=data.id,
        title=data.title,
        type=data.type,
        topic=data.topic_id,
        published_at=parse_optional_timestamp(data.published_at),
        available_at=Timestamp.parse_iso(data.available_at),
        duration=Duration.from_seconds(data.duration),
        status=data.status,
        lang=data.lang,
        live_tl_count=dict(data.live_tl_count) if data.live_tl_count is not None else None,
        description=data.description,
        songs=_convert_optional(song_to_domain, data.songs),
        channel=video_full_channel_to_domain(data.channel),
        live_info=live_info,
        clips=_convert_optional(video_min_to_domain, data.clips),
        sources=_convert_optional(video_min_to_domain, data.sources),
        refers=_convert_optional(video_min_to_domain, data.refers),
        simulcasts=_convert_optional(video_min_to_domain, data.simulcasts),
        mentions=_convert_optional(vtuber_to_domain, data.mentions),
        timestamp_comments=_convert_optional(comment_to_domain, data.comments),
    )


def searched_video_channel_to_domain(data: SearchedVideoChannelJson) -> SearchedVideoChannel:
    return SearchedVideoChannel(
        id=data.id,
        name=data.name,
        english_name=data.english_name,
        type=data.type,
        photo=data.photo,
    )


def searched_video_to_domain(data: SearchedVideoJson) -> SearchedVideo:
    return SearchedVideo(
        id=data.id,
        title=data.title,
        type=data.type,
        topic=data.topic_id,
        published_at=parse_optional_timestamp(data.published_at),
        available_at=Timestamp.parse_iso(data.available_at),
        duration=Duration.from_seconds(data.duration),
        status=data.status,
        songcount=data.songcount,
        channel=searched_video_channel_to_domain(data.channel),
    )


def searched_comments_to_domain(videos: Sequence[SearchedVideoJson]) -> list[Comment]:
    """Flatten comment search results into comments, in response order.

    Every comment points at the video it was found on.

    Raises:
        InvalidResponseError: A searched video has no ``comments`` array.
    """
    for video in videos:
        if video.comments is None:
            raise InvalidResponseError(f"Searched video {video.id} has no comments array")

    comments: list[Comment] = []
    for video in videos:
        searched_video = searched_video_to_domain(video)
        comments.extend(comment_to_domain(comment, searched_video) for comment in video.comments)
    return comments
