"""Pagination controller: the state machine behind infinite lists.

A view creates one controller per list, dispatches ``load``/``refresh`` when it
appears (or is pulled to refresh) and ``load_more`` when the user scrolls near
the end or taps a "Load More" control, then redraws from the emitted states.

Example:
    async def fetch_articles(*, limit: int, offset: int) -> list[Article]:
        return await api.list_articles(limit=limit, offset=offset)

    controller = PaginationController(fetch_articles, page_size=20)
    unsubscribe = controller.subscribe(render)
    await controller.load()
    await controller.load_more()
    ...
    await controller.dispose()

Every ``load()`` starts a new session. A fetch that was started in an earlier
session (a superseded ``load()`` or a ``load_more()`` still pending when
``load()`` was called) is dropped when it resolves, so the most recent
``load()`` always owns the list.
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Coroutine, Iterable, Sequence
from types import TracebackType
from typing import Any, Generic, TypeVar

from infinite_list.core.config import get_settings
from infinite_list.core.errors import ControllerDisposedError
from infinite_list.core.events import (
    ListEvent,
    LoadItemsEvent,
    LoadMoreItemsEvent,
    RefreshItemsEvent,
)
from infinite_list.core.logging import get_logger
from infinite_list.core.states import (
    ErrorInfo,
    ExhaustedState,
    FailedState,
    InitialState,
    LoadedState,
    LoadingState,
    PageState,
    PageStatus,
)
from infinite_list.ports.fetchers import ItemFetcher

logger = get_logger(__name__)

T = TypeVar("T")

StateCallback = Callable[[PageState[T]], None]


class PaginationController(Generic[T]):
    """Fetches pages of items and publishes the list's lifecycle as states.

    The fetch function is either passed to the constructor or supplied by a
    subclass overriding ``fetch_items``.

    Attributes:
        state: The most recently emitted state.
        items: Snapshot of the items loaded in the current session.
        offset: Number of items fetched so far in the current session.
        page_size: ``limit`` passed to every fetch.
    """

    def __init__(
        self,
        fetch: ItemFetcher[T] | None = None,
        *,
        initial_items: Iterable[T] = (),
        page_size: int | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            fetch: Coroutine function called as ``fetch(limit=..., offset=...)``.
                May be omitted when a subclass overrides ``fetch_items``.
            initial_items: Items to seed the list with. A seeded controller
                starts in ``LoadedState`` and ``load_more`` continues after
                them.
            page_size: Items requested per fetch. Defaults to the configured
                ``INFINITE_LIST_PAGE_SIZE`` (10).

        Raises:
            ValueError: If page_size is not positive.
            TypeError: If there is no fetch function and ``fetch_items`` is
                not overridden.
        """
        if page_size is None:
            page_size = get_settings().page_size
        if page_size <= 0:
            raise ValueError(f"page_size must be > 0, got {page_size}")
        if fetch is None and type(self).fetch_items is PaginationController.fetch_items:
            raise TypeError(
                "PaginationController needs a fetch function or a subclass "
                "overriding fetch_items()"
            )

        self._fetch = fetch
        self._page_size = page_size
        self._items: list[T] = list(initial_items)
        self._offset = len(self._items)
        self._in_flight = False
        self._session = 0
        self._disposed = False
        self._state: PageState[T] = (
            LoadedState(tuple(self._items)) if self._items else InitialState()
        )
        self._subscribers: list[StateCallback[T]] = []
        self._streams: list[asyncio.Queue[PageState[T] | None]] = []
        self._tasks: set[asyncio.Task[None]] = set()

    # -- observation ---------------------------------------------------------

    @property
    def state(self) -> PageState[T]:
        return self._state

    @property
    def items(self) -> tuple[T, ...]:
        return tuple(self._items)

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def is_fetching(self) -> bool:
        """True while a fetch of the current session is in flight."""
        return self._in_flight

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def subscribe(
        self, callback: StateCallback[T], *, immediate: bool = False
    ) -> Callable[[], None]:
        """Register a callback invoked synchronously with every emitted state.

        Args:
            callback: Receives each new state, in emission order.
            immediate: Also call it right away with the current state.

        Returns:
            A function that removes the callback. Calling it twice is harmless.

        Raises:
            ControllerDisposedError: If the controller has been disposed.
        """
        self._ensure_active()
        self._subscribers.append(callback)
        if immediate:
            self._notify(callback, self._state)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def stream(self) -> AsyncIterator[PageState[T]]:
        """Yield the current state, then every later state until disposal."""
        if self._disposed:
            return
        queue: asyncio.Queue[PageState[T] | None] = asyncio.Queue()
        queue.put_nowait(self._state)
        self._streams.append(queue)
        try:
            while True:
                state = await queue.get()
                if state is None:
                    return
                yield state
        finally:
            if queue in self._streams:
                self._streams.remove(queue)

    # -- commands ------------------------------------------------------------

    async def fetch_items(self, *, limit: int, offset: int) -> Sequence[T]:
        """Fetch one page. Override in a subclass instead of passing ``fetch``."""
        assert self._fetch is not None
        return await self._fetch(limit=limit, offset=offset)

    async def load(self) -> None:
        """Start a new session: fetch the first page, replacing all items.

        Not guarded by the in-flight flag. Any fetch still pending from the
        previous session is dropped when it resolves.

        Raises:
            ControllerDisposedError: If the controller has been disposed.
        """
        self._ensure_active()
        self._session += 1
        session = self._session
        self._items = []
        self._offset = 0
        self._in_flight = True
        self._emit(LoadingState(()))
        await self._fetch_page(session, offset=0)

    async def refresh(self) -> None:
        """Pull-to-refresh. Same as ``load()``."""
        await self.load()

    async def load_more(self) -> None:
        """Fetch the page after the current items and append it.

        Ignored while a fetch is in flight and once the session is exhausted.
        After a failure the same offset is requested again.

        Raises:
            ControllerDisposedError: If the controller has been disposed.
        """
        self._ensure_active()
        if self._in_flight:
            logger.debug("load_more_ignored", reason="in_flight", offset=self._offset)
            return
        if self._state.status is PageStatus.EXHAUSTED:
            logger.debug("load_more_ignored", reason="exhausted", offset=self._offset)
            return

        self._in_flight = True
        self._emit(LoadingState(tuple(self._items)))
        await self._fetch_page(self._session, offset=self._offset)

    def dispatch(self, event: ListEvent) -> "asyncio.Task[None]":
        """Schedule the command for ``event`` on the running event loop.

        For synchronous UI callbacks that cannot await. The task is tracked
        and cancelled by ``dispose()``.

        Args:
            event: A LoadItemsEvent, LoadMoreItemsEvent or RefreshItemsEvent.

        Returns:
            The scheduled task.

        Raises:
            ControllerDisposedError: If the controller has been disposed.
            TypeError: If the event type is not recognised.
            RuntimeError: If no event loop is running.
        """
        self._ensure_active()
        loop = asyncio.get_running_loop()
        command: Coroutine[Any, Any, None]
        if isinstance(event, LoadMoreItemsEvent):
            command = self.load_more()
        elif isinstance(event, RefreshItemsEvent):
            command = self.refresh()
        elif isinstance(event, LoadItemsEvent):
            command = self.load()
        else:
            raise TypeError(f"Unsupported event: {event!r}")

        task = loop.create_task(command)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def dispose(self) -> None:
        """Detach all observers and cancel dispatched commands.

        Nothing is emitted afterwards, including the result of a fetch that is
        still pending. Calling it again does nothing.
        """
        if self._disposed:
            return
        self._disposed = True
        self._subscribers.clear()
        for queue in self._streams:
            queue.put_nowait(None)
        self._streams.clear()

        current = asyncio.current_task()
        pending = [task for task in self._tasks if task is not current and not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

        logger.debug(
            "controller_disposed",
            cancelled_tasks=len(pending),
            items=len(self._items),
        )

    async def __aenter__(self) -> "PaginationController[T]":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.dispose()

    # -- internals -----------------------------------------------------------

    async def _fetch_page(self, session: int, offset: int) -> None:
        limit = self._page_size
        logger.debug("fetch_started", limit=limit, offset=offset, session=session)
        try:
            page = list(await self.fetch_items(limit=limit, offset=offset))
        except Exception as ex:
            if not self._is_current(session):
                logger.debug("stale_fetch_dropped", offset=offset, session=session)
                return
            self._in_flight = False
            logger.warning(
                "fetch_failed",
                offset=offset,
                error=str(ex),
                error_type=type(ex).__name__,
            )
            self._emit(FailedState(tuple(self._items), ErrorInfo.from_exception(ex)))
            return
        except BaseException:
            if self._is_current(session):
                self._in_flight = False
            raise

        if not self._is_current(session):
            logger.debug("stale_fetch_dropped", offset=offset, session=session)
            return

        self._in_flight = False
        if not page:
            logger.info("list_exhausted", offset=offset, items=len(self._items))
            self._emit(ExhaustedState(tuple(self._items)))
            return

        self._items.extend(page)
        self._offset = offset + len(page)
        logger.debug("fetch_succeeded", offset=offset, received=len(page))
        self._emit(LoadedState(tuple(self._items)))

    def _is_current(self, session: int) -> bool:
        return not self._disposed and session == self._session

    def _ensure_active(self) -> None:
        if self._disposed:
            raise ControllerDisposedError("PaginationController has been disposed")

    def _emit(self, state: PageState[T]) -> None:
        if self._disposed:
            return
        self._state = state
        for callback in list(self._subscribers):
            self._notify(callback, state)
        for queue in self._streams:
            queue.put_nowait(state)

    def _notify(self, callback: StateCallback[T], state: PageState[T]) -> None:
        try:
            callback(state)
        except Exception as ex:
            logger.warning(
                "subscriber_failed",
                status=state.status.value,
                error=str(ex),
            )
