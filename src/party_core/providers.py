# Area: Content
"""
party_core.providers — Content provider contract
================================================

Controllers read game content (questions, tracks, ...) through three
operations only: ``current()``, ``next()`` and ``progress()``. How the
content is loaded is up to each game.

StaticListProvider wraps an in-memory list with optional shuffling.
"""

from __future__ import annotations
import random
from typing import Any, Generic, List, NamedTuple, Optional, Protocol, Sequence, TypeVar, runtime_checkable

T = TypeVar("T")


class Progress(NamedTuple):
    """Position within the content sequence."""
    index: int
    total: int


@runtime_checkable
class ContentProvider(Protocol[T]):
    """Protocol for iterator-like content sources."""

    def current(self) -> Optional[T]:
        """Current item, or None when there is no content."""
        ...

    def next(self) -> Optional[T]:
        """Advance and return the new item, or None at the end."""
        ...

    def progress(self) -> Progress:
        """(index, total) pair."""
        ...


class StaticListProvider(Generic[T]):
    """
    Content provider over a fixed list.

    ``next()`` at the end returns None and leaves the index on the
    last item, so ``progress()`` keeps reporting ``(total - 1, total)``.
    """

    def __init__(
        self,
        items: Sequence[T],
        shuffle: bool = False,
        rng: Optional[random.Random] = None,
    ):
        self._items: List[T] = list(items)
        if shuffle:
            (rng or random.Random()).shuffle(self._items)
        self._index = 0

    def current(self) -> Optional[T]:
        if self._index < len(self._items):
            return self._items[self._index]
        return None

    def next(self) -> Optional[T]:
        if self._index < len(self._items) - 1:
            self._index += 1
            return self.current()
        return None

    def previous(self) -> Optional[T]:
        if self._index > 0:
            self._index -= 1
            return self.current()
        return None

    def has_next(self) -> bool:
        return self._index < len(self._items) - 1

    def reset(self) -> None:
        self._index = 0

    def progress(self) -> Progress:
        return Progress(self._index, len(self._items))

    async def preload(self) -> None:
        """Static lists are already in memory."""
        return None

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        index, total = self.progress()
        return f"StaticListProvider(index={index}, total={total})"


def describe_item(item: Any) -> str:
    """Short label for logging; prefers a ``text`` key or attribute."""
    if isinstance(item, dict):
        return str(item.get("text", item.get("id", item)))
    return str(getattr(item, "text", item))
