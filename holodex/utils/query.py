"""Render query options as a percent-encoded URL query string."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from enum import Enum
from functools import lru_cache
from typing import Any
from urllib.parse import quote

from holodex.core.errors import InvalidOptionsError

# Dataclass field metadata key used to rename (or, with None, hide) a query key.
QUERY_NAME = "query"


def percent_encode(text: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters.

    ``A-Z a-z 0-9 - . _ ~`` are kept; every other byte of the UTF-8 encoding
    becomes ``%XX``.

    Raises:
        InvalidOptionsError: ``text`` is not encodable as UTF-8 (lone surrogates).
    """
    try:
        return quote(text, safe="", encoding="utf-8", errors="strict")
    except UnicodeEncodeError as e:
        raise InvalidOptionsError(f"Query value {text!r} is not valid UTF-8 text: {e}") from e


def _render_scalar(value: Any) -> str:
    if isinstance(value, Enum):
        to_query = getattr(value, "to_query", None)
        text = to_query() if callable(to_query) else value.name
    elif isinstance(value, bool):
        text = "true" if value else "false"
    else:
        text = str(value)
    return percent_encode(text)


def _render_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ",".join(_render_scalar(item) for item in value)
    return _render_scalar(value)


@lru_cache(maxsize=None)
def query_descriptors(options_type: type) -> tuple[tuple[str, str], ...]:
    """Return ``(query_name, attribute_name)`` pairs for a dataclass type.

    Built once per type, in field declaration order. Fields whose metadata
    maps ``query`` to ``None`` are left out.
    """
    if not dataclasses.is_dataclass(options_type):
        raise TypeError(f"Expected a dataclass type, got {options_type!r}")

    descriptors: list[tuple[str, str]] = []
    for field in dataclasses.fields(options_type):
        query_name = field.metadata.get(QUERY_NAME, field.name)
        if query_name is None:
            continue
        descriptors.append((query_name, field.name))
    return tuple(descriptors)


def query_items(query: Any) -> list[tuple[str, Any]]:
    """Return the ordered ``(name, value)`` pairs of a query record."""
    if query is None:
        return []
    if dataclasses.is_dataclass(query) and not isinstance(query, type):
        return [(name, getattr(query, attr)) for name, attr in query_descriptors(type(query))]
    if isinstance(query, dict):
        return list(query.items())
    if isinstance(query, Iterable):
        return list(query)
    raise TypeError(f"Cannot build a query from {type(query).__name__}")


def format_query(query: Any) -> str:
    """Format a query record as ``key=value&key=value``.

    ``query`` may be a dataclass instance, a mapping or an iterable of
    ``(name, value)`` pairs; order is preserved, never sorted.

    * ``None`` values are skipped entirely.
    * Strings are percent-encoded; ``""`` still renders as ``key=``.
    * Enums render as their member name, or as ``member.to_query()`` when
      the enum defines it.
    * Lists and tuples render comma-joined; an empty sequence renders as
      ``key=``.

    >>> format_query([("foo", "hello world"), ("bar", None)])
    'foo=hello%20world'
    """
    parts: list[str] = []
    for name, value in query_items(query):
        if value is None:
            continue
        parts.append(f"{percent_encode(name)}={_render_value(value)}")
    return "&".join(parts)
