"""Generated demo items for examples and tests.

Ids come from a counter owned by the factory, so two factories (or two test
cases) never share numbering and ``reset()`` starts over at 1.
"""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass

from infinite_list.ports.fetchers import ItemFetcher


@dataclass(frozen=True)
class DemoItem:
    """A list row with an id, a title and a subtitle."""

    id: int
    name: str
    description: str


class DemoItemFactory:
    """Creates DemoItems with sequential ids.

    Example:
        factory = DemoItemFactory()
        controller = PaginationController(factory.fetcher(max_items=50))
    """

    def __init__(self) -> None:
        self._next_id = 1

    @property
    def created(self) -> int:
        """Number of items created since construction or the last reset."""
        return self._next_id - 1

    def reset(self) -> None:
        self._next_id = 1

    def create(self, name: str, description: str = "") -> DemoItem:
        item = DemoItem(id=self._next_id, name=name, description=description)
        self._next_id += 1
        return item

    def page(self, *, limit: int, offset: int, prefix: str = "Item") -> list[DemoItem]:
        """Build ``limit`` items named after their 1-based position."""
        return [
            self.create(
                name=f"{prefix} {offset + index + 1}",
                description=f"Description for item {offset + index + 1}",
            )
            for index in range(limit)
        ]

    def fetcher(
        self,
        max_items: int | None = None,
        delay: float = 0.0,
        prefix: str = "Item",
    ) -> ItemFetcher[DemoItem]:
        """Return a fetch function producing pages of generated items.

        Args:
            max_items: Total items available. The last page is truncated and
                later offsets return nothing. None means endless.
            delay: Seconds to sleep per fetch.
            prefix: Name prefix for generated items.
        """

        async def fetch(*, limit: int, offset: int) -> Sequence[DemoItem]:
            if delay:
                await asyncio.sleep(delay)
            count = limit
            if max_items is not None:
                count = max(0, min(limit, max_items - offset))
            return self.page(limit=count, offset=offset, prefix=prefix)

        return fetch
