"""Enumerations shared by wire models, domain records and query options.

Member names equal their wire values: the query serializer renders an enum by
its member name unless the enum defines ``to_query``.
"""

from enum import Enum


class ChannelType(str, Enum):
    """Type of a channel. Either a VTuber or a subber."""

    subber = "subber"
    vtuber = "vtuber"


class VideoType(str, Enum):
    # Stream or video uploaded by a VTuber.
    stream = "stream"
    # Clip made by a clipper.
    clip = "clip"
    # Placeholder with no corresponding video on YouTube.
    placeholder = "placeholder"


class VideoStatus(str, Enum):
    live = "live"
    missing = "missing"
    new = "new"
    past = "past"
    upcoming = "upcoming"


class SortOrder(str, Enum):
    """The order to sort results in."""

    asc = "asc"
    desc = "desc"


class SearchOrder(str, Enum):
    """How to sort comment search results (by the video they belong to)."""

    oldest = "oldest"
    newest = "newest"
    longest = "longest"


class ChannelSort(str, Enum):
    """Columns ``/channels`` can be sorted on."""

    id = "id"
    name = "name"
    english_name = "english_name"
    type = "type"
    org = "org"
    group = "group"
    photo = "photo"
    twitter = "twitter"
    twitch = "twitch"
    video_count = "video_count"
    subscriber_count = "subscriber_count"
    clip_count = "clip_count"
    inactive = "inactive"
    top_topics = "top_topics"


class VideoSort(str, Enum):
    """Columns ``/videos`` and ``/live`` can be sorted on."""

    id = "id"
    title = "title"
    type = "type"
    topic_id = "topic_id"
    published_at = "published_at"
    available_at = "available_at"
    duration = "duration"
    status = "status"
    start_scheduled = "start_scheduled"
    start_actual = "start_actual"
    end_actual = "end_actual"
    live_viewers = "live_viewers"


class VideoInclude(str, Enum):
    """Extra data that can be requested with each video."""

    clips = "clips"
    refers = "refers"
    sources = "sources"
    simulcasts = "simulcasts"
    mentions = "mentions"
    description = "description"
    live_info = "live_info"
    channel_stats = "channel_stats"
    songs = "songs"


class CommentsFlag(Enum):
    """The ``c`` parameter of ``/videos/{id}``: whether to include comments."""

    exclude = "0"
    include = "1"

    def to_query(self) -> str:
        return self.value

    @classmethod
    def from_bool(cls, include: bool) -> "CommentsFlag":
        return cls.include if include else cls.exclude


class Languages:
    """Common language codes. Any code accepted by Holodex may be used."""

    all = "all"
    chinese = "zh"
    english = "en"
    indonesian = "id"
    japanese = "ja"
    korean = "ko"
    russian = "ru"
    spanish = "es"


class Organizations:
    """Common organizations. Any organization known to Holodex may be used."""

    hololive = "Hololive"
    indies = "Independents"
    nijisanji = "Nijisanji"
