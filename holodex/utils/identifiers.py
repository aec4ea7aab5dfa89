"""Strict parsing of Holodex identifiers in the canonical dashed UUID form."""

from __future__ import annotations

import string
import uuid

from holodex.core.errors import InvalidUuidError

_DASH_POSITIONS = (8, 13, 18, 23)
_HEX_DIGITS = frozenset(string.hexdigits)
_UUID_LENGTH = 36

# RFC 9562 special values
NIL = uuid.UUID(bytes=b"\x00" * 16)
MAX = uuid.UUID(bytes=b"\xff" * 16)


def parse_uuid(text: str) -> uuid.UUID:
    """Parse ``xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx`` into a ``uuid.UUID``.

    Unlike ``uuid.UUID(text)`` this accepts nothing but the 36 character
    dashed form: no braces, no ``urn:uuid:`` prefix, no missing dashes.
    Hex digits may be upper or lower case.

    Raises:
        InvalidUuidError: If ``text`` deviates from the format.
    """
    if not isinstance(text, str) or len(text) != _UUID_LENGTH:
        raise InvalidUuidError(f"Invalid UUID {text!r}: expected {_UUID_LENGTH} characters")

    for position, char in enumerate(text):
        if position in _DASH_POSITIONS:
            if char != "-":
                raise InvalidUuidError(f"Invalid UUID {text!r}: expected '-' at {position}")
        elif char not in _HEX_DIGITS:
            raise InvalidUuidError(f"Invalid UUID {text!r}: {char!r} is not a hex digit")

    return uuid.UUID(bytes=bytes.fromhex(text.replace("-", "")))
