"""Console demo of the pagination controller.

Drives a controller the way the two list views do:

- automatic: load the first page, then keep loading more (as infinite scroll
  would on reaching the bottom) until the source is exhausted.
- manual: start from pre-seeded items and "press" Load More until exhausted.

Settings come from the environment: DEMO_MODE (automatic|manual),
DEMO_MAX_ITEMS (default 50), DEMO_DELAY seconds per fetch (default 0.2),
plus the INFINITE_LIST_* settings (INFINITE_LIST_LOG_LEVEL=DEBUG shows
every fetch).
"""

import asyncio
import os

from infinite_list.adapters import DemoItem, DemoItemFactory
from infinite_list.core import (
    PageState,
    PageStatus,
    PaginationController,
    configure_logging,
    get_logger,
)

# Level and format come from INFINITE_LIST_LOG_LEVEL and INFINITE_LIST_LOG_JSON
configure_logging()

logger = get_logger(__name__)


def render(state: PageState[DemoItem]) -> None:
    """Print a one-line summary of each state, standing in for a list view."""
    match state.status:
        case PageStatus.INITIAL:
            print("[initial] nothing loaded yet")
        case PageStatus.LOADING:
            mode = "append" if state.items else "first page"
            print(f"[loading] {mode}, {len(state.items)} items on screen")
        case PageStatus.LOADED:
            last = state.items[-1].name if state.items else "-"
            print(f"[loaded] {len(state.items)} items, last: {last}")
        case PageStatus.EXHAUSTED:
            print(f"[exhausted] no more items ({len(state.items)} total)")
        case PageStatus.FAILED:
            print(f"[failed] {state.error.message}")  # type: ignore[attr-defined]


async def run_automatic(factory: DemoItemFactory, max_items: int, delay: float) -> None:
    controller: PaginationController[DemoItem] = PaginationController(
        factory.fetcher(max_items=max_items, delay=delay)
    )
    async with controller:
        controller.subscribe(render)
        await controller.load()
        while controller.state.status is PageStatus.LOADED:
            await controller.load_more()


async def run_manual(factory: DemoItemFactory, max_items: int, delay: float) -> None:
    seeded = [
        factory.create(f"Preloaded Item {i}", f"Description for preloaded item {i}")
        for i in range(1, 6)
    ]
    controller: PaginationController[DemoItem] = PaginationController(
        factory.fetcher(max_items=max_items, delay=delay),
        initial_items=seeded,
        page_size=5,
    )
    async with controller:
        controller.subscribe(render, immediate=True)
        presses = 0
        while controller.state.status is PageStatus.LOADED:
            presses += 1
            await controller.load_more()
        logger.info("manual_demo_finished", presses=presses)


async def main() -> None:
    """Run the demo selected by DEMO_MODE."""
    mode = os.getenv("DEMO_MODE", "automatic").lower()
    max_items = int(os.getenv("DEMO_MAX_ITEMS", "50"))
    delay = float(os.getenv("DEMO_DELAY", "0.2"))

    factory = DemoItemFactory()
    logger.info("demo_starting", mode=mode, max_items=max_items)

    if mode == "manual":
        await run_manual(factory, max_items, delay)
    else:
        await run_automatic(factory, max_items, delay)

    logger.info("demo_finished", items_created=factory.created)


if __name__ == "__main__":
    asyncio.run(main())
