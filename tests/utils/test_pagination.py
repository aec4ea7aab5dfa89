"""Tests for the offset based Pager."""

from dataclasses import dataclass

import pytest

from holodex.core.errors import TransportError
from holodex.http_client.api_client import Response
from holodex.models.response_headers import ResponseHeaders
from holodex.utils.dates import Timestamp
from holodex.utils.pagination import Pager

HEADERS = ResponseHeaders(
    rate_limit=100, rate_limit_remaining=99, rate_limit_reset=Timestamp.from_seconds(0)
)


@dataclass
class MultiplesOptions:
    mul: int
    offset: int
    limit: int = 2


class MultiplesEndpoint:
    """Returns multiples of ``mul``, two at a time, up to ``max_value`` inclusive."""

    def __init__(self, max_value: int = 14):
        self.max_value = max_value
        self.calls: list[MultiplesOptions] = []

    def __call__(self, options: MultiplesOptions) -> Response[list[int]]:
        self.calls.append(options)
        values = [(options.offset + i) * options.mul for i in range(2)]
        remaining = max(self.max_value // options.mul + 1 - options.offset, 0)
        return Response(headers=HEADERS, value=values[: min(len(values), remaining)])


class SequenceEndpoint:
    """Serves ``items`` in pages of ``options.limit`` items."""

    def __init__(self, items: list[int]):
        self.items = items
        self.offsets: list[int] = []

    def __call__(self, options: MultiplesOptions) -> Response[list[int]]:
        self.offsets.append(options.offset)
        return Response(
            headers=HEADERS, value=self.items[options.offset : options.offset + options.limit]
        )


class TestPagerSequence:
    """Tests for the items a Pager yields."""

    def test_yields_multiples_until_short_page(self):
        """Starting at offset 3, the pager yields 6..14 then stops for good."""
        endpoint = MultiplesEndpoint()
        pager = Pager(endpoint, MultiplesOptions(mul=2, offset=3))

        results = []
        while (item := pager.next()) is not None:
            results.append(item)

        assert results == [6, 8, 10, 12, 14]
        assert [call.offset for call in endpoint.calls] == [3, 5, 7]
        assert pager.next() is None
        assert pager.next() is None
        assert len(endpoint.calls) == 3

    def test_iterator_protocol(self):
        pager = Pager(MultiplesEndpoint(), MultiplesOptions(mul=2, offset=3))
        assert list(pager) == [6, 8, 10, 12, 14]
        assert list(pager) == []

    def test_short_final_page_needs_no_extra_fetch(self):
        """Seven items with limit 3: fetches at 0, 3 and 6 only."""
        endpoint = SequenceEndpoint(list(range(7)))
        pager = Pager(endpoint, MultiplesOptions(mul=1, offset=0, limit=3))

        assert list(pager) == list(range(7))
        assert endpoint.offsets == [0, 3, 6]

    def test_full_final_page_costs_one_empty_fetch(self):
        """Six items with limit 3: the pager only learns the end from an empty page."""
        endpoint = SequenceEndpoint(list(range(6)))
        pager = Pager(endpoint, MultiplesOptions(mul=1, offset=0, limit=3))

        assert list(pager) == list(range(6))
        assert endpoint.offsets == [0, 3, 6]
        assert pager.done

    def test_empty_first_page(self):
        endpoint = SequenceEndpoint([])
        pager = Pager(endpoint, MultiplesOptions(mul=1, offset=0, limit=3))

        assert pager.next() is None
        assert pager.next() is None
        assert endpoint.offsets == [0]


class TestPagerState:
    """Tests for offsets, counters and error handling."""

    def test_offset_advances_by_items_received(self):
        """A short page advances the offset by its length, not by the limit."""
        endpoint = SequenceEndpoint(list(range(5)))
        pager = Pager(endpoint, MultiplesOptions(mul=1, offset=0, limit=3))

        pager.next()
        assert pager.options.offset == 3
        for _ in range(3):
            pager.next()
        assert pager.options.offset == 5

    def test_options_are_copied(self):
        """The caller's options are never mutated."""
        options = MultiplesOptions(mul=2, offset=3)
        pager = Pager(MultiplesEndpoint(), options)
        list(pager)

        assert options.offset == 3
        assert pager.options is not pager.options

    def test_last_response_headers(self):
        pager = Pager(MultiplesEndpoint(), MultiplesOptions(mul=2, offset=3))
        assert pager.last_response_headers is None

        pager.next()
        assert pager.last_response_headers == HEADERS

    def test_current_index_and_page(self):
        endpoint = SequenceEndpoint(list(range(10)))
        pager = Pager(endpoint, MultiplesOptions(mul=1, offset=0, limit=4))

        seen = []
        for item in pager:
            seen.append((item, pager.current_index, pager.current_page))

        assert seen[0] == (0, 0, 0)
        assert seen[3] == (3, 3, 0)
        assert seen[4] == (4, 4, 1)
        assert seen[9] == (9, 9, 2)

    def test_failed_fetch_leaves_state_untouched(self, mocker):
        """After an error the same page is requested again."""
        first_page = SequenceEndpoint(list(range(5)))(MultiplesOptions(mul=1, offset=0, limit=3))
        fetch = mocker.Mock(side_effect=[TransportError("boom"), first_page])
        pager = Pager(fetch, MultiplesOptions(mul=1, offset=0, limit=3))

        with pytest.raises(TransportError):
            pager.next()
        assert pager.options.offset == 0
        assert pager.last_response_headers is None

        assert pager.next() == 0
        assert fetch.call_args_list[0].args[0].offset == 0
        assert fetch.call_args_list[1].args[0].offset == 0
        assert pager.options.offset == 3

    def test_failed_fetch_mid_sequence_is_retryable(self):
        endpoint = SequenceEndpoint(list(range(4)))
        calls = {"count": 0}

        def flaky(options):
            calls["count"] += 1
            if calls["count"] == 2:
                raise TransportError("connection reset")
            return endpoint(options)

        pager = Pager(flaky, MultiplesOptions(mul=1, offset=0, limit=2))
        assert [pager.next(), pager.next()] == [0, 1]

        with pytest.raises(TransportError):
            pager.next()
        assert pager.options.offset == 2
        assert pager.current_index == 1

        assert list(pager) == [2, 3]
        assert endpoint.offsets == [0, 2, 4]
