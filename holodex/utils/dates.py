"""Time values used by Holodex records: timestamps, durations and video offsets."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from dateutil import parser as date_parser

from holodex.core.errors import InvalidTimestampError

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)
_ONE_SECOND = timedelta(seconds=1)


@dataclass(frozen=True, order=True)
class Duration:
    """A length of time in whole seconds."""

    seconds: int

    @classmethod
    def from_seconds(cls, seconds: int) -> Duration:
        return cls(int(seconds))

    def __add__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds + other.seconds)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.seconds - other.seconds)

    def __str__(self) -> str:
        if self.seconds == 0:
            return "0s"
        remaining = abs(self.seconds)
        parts: list[str] = []
        for unit, size in (("d", 86400), ("h", 3600), ("m", 60), ("s", 1)):
            amount, remaining = divmod(remaining, size)
            if amount:
                parts.append(f"{amount}{unit}")
        sign = "-" if self.seconds < 0 else ""
        return sign + "".join(parts)


@dataclass(frozen=True, order=True)
class VideoOffset:
    """An offset from the start of a video, in seconds."""

    seconds: int

    @classmethod
    def from_seconds(cls, seconds: int) -> VideoOffset:
        return cls(int(seconds))

    def __str__(self) -> str:
        # YouTube style: D:HH:MM:SS, H:MM:SS or M:SS
        days, rest = divmod(self.seconds, 86400)
        hours, rest = divmod(rest, 3600)
        minutes, seconds = divmod(rest, 60)
        if days > 0:
            return f"{days}:{hours:02d}:{minutes:02d}:{seconds:02d}"
        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"


@dataclass(frozen=True, order=True)
class Timestamp:
    """A UNIX timestamp: seconds since 1970-01-01T00:00:00Z."""

    seconds: int

    @classmethod
    def from_seconds(cls, seconds: int) -> Timestamp:
        return cls(int(seconds))

    @classmethod
    def from_datetime(cls, value: datetime) -> Timestamp:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return cls((value - _EPOCH) // _ONE_SECOND)

    @classmethod
    def parse_iso(cls, value: str) -> Timestamp:
        """Parse an ISO 8601 timestamp. Naive values are taken as UTC.

        Raises:
            InvalidTimestampError: If ``value`` is not a valid ISO 8601 string.
        """
        if not isinstance(value, str):
            raise InvalidTimestampError(f"Expected an ISO 8601 string, got {type(value).__name__}")
        try:
            parsed = date_parser.isoparse(value)
        except (ValueError, OverflowError) as e:
            raise InvalidTimestampError(f"Invalid ISO 8601 timestamp {value!r}: {e}") from e
        return cls.from_datetime(parsed)

    def to_datetime(self) -> datetime:
        return _EPOCH + timedelta(seconds=self.seconds)

    def __add__(self, other: Duration) -> Timestamp:
        if not isinstance(other, Duration):
            return NotImplemented
        return Timestamp(self.seconds + other.seconds)

    def __sub__(self, other: Duration) -> Timestamp:
        if not isinstance(other, Duration):
            return NotImplemented
        return Timestamp(self.seconds - other.seconds)

    def __str__(self) -> str:
        return self.to_datetime().strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_optional_timestamp(value: str | None) -> Timestamp | None:
    """Parse an optional ISO 8601 timestamp; ``None`` passes through."""
    if value is None:
        return None
    return Timestamp.parse_iso(value)
