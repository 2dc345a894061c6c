"""In-memory item source.

Serves pages out of a Python sequence. Useful for lists whose data is already
in memory, and for tests: every call is recorded.
"""

import asyncio
from collections.abc import Iterable
from typing import Generic, TypeVar

T = TypeVar("T")


class InMemoryItemSource(Generic[T]):
    """Fetcher that slices a fixed sequence by offset and limit.

    Attributes:
        calls: ``(limit, offset)`` of every fetch, in call order.

    Example:
        source = InMemoryItemSource(range(25))
        controller = PaginationController(source, page_size=10)
    """

    def __init__(self, items: Iterable[T] = (), delay: float = 0.0) -> None:
        """Initialize the source.

        Args:
            items: The full data set, in display order.
            delay: Seconds to sleep before answering, to mimic a network.
        """
        self._items: list[T] = list(items)
        self._delay = delay
        self.calls: list[tuple[int, int]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    @property
    def total(self) -> int:
        return len(self._items)

    def extend(self, items: Iterable[T]) -> None:
        """Append items to the data set, e.g. to simulate new content."""
        self._items.extend(items)

    def replace(self, items: Iterable[T]) -> None:
        """Swap the whole data set, e.g. to simulate content changing before a refresh."""
        self._items = list(items)

    async def __call__(self, *, limit: int, offset: int) -> list[T]:
        self.calls.append((limit, offset))
        if self._delay:
            await asyncio.sleep(self._delay)
        if limit <= 0 or offset < 0:
            return []
        return self._items[offset : offset + limit]
