"""Offset based paging over list endpoints."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Iterator, Sequence
from typing import Generic, Protocol, TypeVar

from holodex.core.logging import get_logger
from holodex.http_client.api_client import Response
from holodex.models.response_headers import ResponseHeaders

logger = get_logger(__name__)


class PageOptions(Protocol):
    """Dataclass options with an integer ``offset`` and a positive ``limit``."""

    offset: int
    limit: int


T = TypeVar("T")
O = TypeVar("O", bound=PageOptions)  # noqa: E741

FetchPage = Callable[[O], Response[Sequence[T]]]


class Pager(Generic[T, O]):
    """
    Yields the results of a list endpoint one item at a time, fetching pages on demand.

    The options are copied at construction. After every successful fetch their
    ``offset`` advances by the number of items received, not by ``limit``. A page
    shorter than ``limit`` (or an empty one) ends the sequence without another
    fetch; a final page of exactly ``limit`` items costs one extra fetch that
    comes back empty.

    ``next`` returns ``None`` once the results are exhausted, and keeps doing so.
    The pager is also an iterator. If a fetch raises, the pager is left as it was
    and the same fetch is attempted again on the next call.

    ``limit`` must not be changed while paging.
    """

    def __init__(self, fetch_page: FetchPage, options: O):
        self._fetch_page = fetch_page
        self._options: O = dataclasses.replace(options)
        self._page: tuple[T, ...] | None = None
        self._cursor = 0
        self._done = False
        self._last_response_headers: ResponseHeaders | None = None

    @property
    def options(self) -> O:
        """A copy of the options the next page will be fetched with."""
        return dataclasses.replace(self._options)

    @property
    def last_response_headers(self) -> ResponseHeaders | None:
        """Headers of the last fetched page; ``None`` until the first fetch."""
        return self._last_response_headers

    @property
    def current_index(self) -> int:
        """Zero-based position of the item last returned in the full result list."""
        page_len = len(self._page) if self._page is not None else 0
        return max(self._options.offset - page_len + self._cursor - 1, 0)

    @property
    def current_page(self) -> int:
        """Zero-based number of the page last fetched; 0 before the first fetch."""
        if self._page is None:
            return 0
        page_start = self._options.offset - len(self._page)
        return page_start // self._options.limit

    @property
    def done(self) -> bool:
        return self._done

    def next(self) -> T | None:
        """Return the next item, or ``None`` when there are no more results."""
        if self._done:
            return None

        if self._page is None or self._cursor >= len(self._page):
            if self._page is not None and len(self._page) < self._options.limit:
                self._done = True
                return None
            self._fetch_next_page()

        if self._cursor >= len(self._page):
            # Empty page
            self._done = True
            return None

        item = self._page[self._cursor]
        self._cursor += 1
        return item

    def _fetch_next_page(self) -> None:
        logger.debug(
            f"Fetching page at offset {self._options.offset} (limit {self._options.limit})"
        )
        response = self._fetch_page(dataclasses.replace(self._options))

        items = tuple(response.value)
        self._page = items
        self._cursor = 0
        self._last_response_headers = response.headers
        self._options = dataclasses.replace(self._options, offset=self._options.offset + len(items))

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        item = self.next()
        if item is None:
            raise StopIteration
        return item
