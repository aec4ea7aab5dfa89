"""Rate limit headers returned with every Holodex response."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import httpx

from holodex.constants import (
    RATE_LIMIT_HEADER,
    RATE_LIMIT_REMAINING_HEADER,
    RATE_LIMIT_RESET_HEADER,
)
from holodex.core.errors import DuplicateHeaderError, InvalidHeaderError, MissingHeaderError
from holodex.utils.dates import Timestamp

_U32_MAX = 2**32 - 1
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1

# Lower-cased header name -> (field name, min, max)
_HEADER_FIELDS: dict[str, tuple[str, int, int]] = {
    RATE_LIMIT_HEADER.lower(): ("rate_limit", 0, _U32_MAX),
    RATE_LIMIT_REMAINING_HEADER.lower(): ("rate_limit_remaining", 0, _U32_MAX),
    RATE_LIMIT_RESET_HEADER.lower(): ("rate_limit_reset", _I64_MIN, _I64_MAX),
}


def _parse_header_int(name: str, value: str, minimum: int, maximum: int) -> int:
    text = value.strip()
    digits = text[1:] if text[:1] in ("+", "-") else text
    if not digits or not (digits.isascii() and digits.isdigit()):
        raise InvalidHeaderError(f"Header {name} is not an integer: {value!r}")
    number = int(text)
    if not minimum <= number <= maximum:
        raise InvalidHeaderError(f"Header {name} is out of range: {value!r}")
    return number


@dataclass(frozen=True)
class ResponseHeaders:
    """Rate limit state reported by the server for the last request."""

    # Max number of requests that can be made in a period of time.
    rate_limit: int
    # Number of remaining requests before the rate limit is reached.
    rate_limit_remaining: int
    # When `rate_limit_remaining` will reset to `rate_limit`.
    rate_limit_reset: Timestamp

    @classmethod
    def parse(cls, headers: httpx.Headers | Iterable[tuple[str, str]]) -> ResponseHeaders:
        """Extract the rate limit headers from a response header block.

        Header names are matched case-insensitively and unrelated headers are
        ignored.

        Raises:
            DuplicateHeaderError: A rate limit header occurs twice.
            MissingHeaderError: A rate limit header is absent.
            InvalidHeaderError: A value is not an integer in range.
        """
        items = headers.multi_items() if isinstance(headers, httpx.Headers) else headers

        values: dict[str, int] = {}
        for raw_name, raw_value in items:
            name = raw_name.decode("latin-1") if isinstance(raw_name, bytes) else raw_name
            value = raw_value.decode("latin-1") if isinstance(raw_value, bytes) else raw_value
            entry = _HEADER_FIELDS.get(name.lower())
            if entry is None:
                continue
            field_name, minimum, maximum = entry
            if field_name in values:
                raise DuplicateHeaderError(f"Header {name} occurs more than once")
            values[field_name] = _parse_header_int(name, value, minimum, maximum)

        missing = [
            header for header, (field_name, _, _) in _HEADER_FIELDS.items() if field_name not in values
        ]
        if missing:
            raise MissingHeaderError(f"Missing rate limit header(s): {', '.join(missing)}")

        return cls(
            rate_limit=values["rate_limit"],
            rate_limit_remaining=values["rate_limit_remaining"],
            rate_limit_reset=Timestamp.from_seconds(values["rate_limit_reset"]),
        )
