# Area: Content Tests
"""Tests for content providers."""

import asyncio
import random

from party_core.providers import ContentProvider, Progress, StaticListProvider, describe_item


class TestStaticListProvider:
    """Tests for StaticListProvider navigation."""

    def test_starts_at_first_item(self):
        provider = StaticListProvider(["a", "b", "c"])
        assert provider.current() == "a"
        assert provider.progress() == Progress(0, 3)

    def test_next_advances_until_end(self):
        provider = StaticListProvider(["a", "b", "c"])
        assert provider.next() == "b"
        assert provider.next() == "c"
        assert provider.next() is None

    def test_index_stays_on_last_item_at_end(self):
        provider = StaticListProvider(["a", "b", "c"])
        provider.next()
        provider.next()
        provider.next()
        provider.next()
        assert provider.progress() == Progress(2, 3)
        assert provider.current() == "c"

    def test_previous_and_has_next(self):
        provider = StaticListProvider(["a", "b"])
        assert provider.previous() is None
        assert provider.has_next() is True
        provider.next()
        assert provider.has_next() is False
        assert provider.previous() == "a"

    def test_reset(self):
        provider = StaticListProvider(["a", "b"])
        provider.next()
        provider.reset()
        assert provider.current() == "a"

    def test_empty_list(self):
        provider = StaticListProvider([])
        assert provider.current() is None
        assert provider.next() is None
        assert provider.progress() == Progress(0, 0)
        assert len(provider) == 0

    def test_shuffle_uses_injected_rng(self):
        items = list(range(20))
        first = StaticListProvider(items, shuffle=True, rng=random.Random(7))
        second = StaticListProvider(items, shuffle=True, rng=random.Random(7))
        assert [first.current()] + [first.next() for _ in range(19)] == \
            [second.current()] + [second.next() for _ in range(19)]
        assert items == list(range(20))

    def test_no_shuffle_keeps_order(self):
        provider = StaticListProvider([3, 1, 2], shuffle=False)
        assert [provider.current(), provider.next(), provider.next()] == [3, 1, 2]

    def test_preload_is_awaitable(self):
        provider = StaticListProvider(["a"])
        assert asyncio.run(provider.preload()) is None

    def test_satisfies_protocol(self):
        assert isinstance(StaticListProvider([]), ContentProvider)


class TestDescribeItem:
    """Tests for describe_item()."""

    def test_dict_text(self):
        assert describe_item({"id": "q1", "text": "Who?"}) == "Who?"

    def test_dict_id_fallback(self):
        assert describe_item({"id": "q1"}) == "q1"

    def test_plain_value(self):
        assert describe_item(42) == "42"
