"""Fetcher protocol: the boundary between a controller and a data source.

Any coroutine function accepting ``limit`` and ``offset`` keyword arguments
satisfies it, so plain ``async def`` functions, bound methods and the item
sources in ``infinite_list.adapters`` are all interchangeable.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar

T_co = TypeVar("T_co", covariant=True)


class ItemFetcher(Protocol[T_co]):
    """Asynchronously fetch one page of items.

    Implementations should return items in a stable order without repeating
    items already returned for lower offsets, and return fewer than ``limit``
    items (or none) only near the end of the data.
    """

    async def __call__(self, *, limit: int, offset: int) -> Sequence[T_co]:
        """Fetch up to ``limit`` items starting at ``offset``.

        Args:
            limit: Maximum number of items to return.
            offset: Number of items already fetched in this session.

        Returns:
            The page of items; empty when there is nothing left.
        """
        ...
