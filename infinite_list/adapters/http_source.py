"""HTTP item source backed by aiohttp.

Fetches pages from a JSON endpoint that understands limit/offset query
parameters, e.g. ``GET /articles?limit=20&offset=40``. The response body may
be a JSON array or an object holding the array under a key (``items`` by
default).
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

import aiohttp

from infinite_list.core.config import get_settings
from infinite_list.core.errors import FetchError
from infinite_list.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class HttpItemSource(Generic[T]):
    """Fetcher that GETs one page per call from a JSON endpoint.

    Example:
        async with aiohttp.ClientSession() as session:
            source = HttpItemSource(
                "https://api.example.com/articles",
                session=session,
                item_factory=Article.from_dict,
            )
            controller = PaginationController(source, page_size=20)
            await controller.load()
    """

    def __init__(
        self,
        url: str,
        *,
        session: aiohttp.ClientSession | None = None,
        items_key: str | None = "items",
        item_factory: Callable[[Any], T] | None = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
        limit_param: str = "limit",
        offset_param: str = "offset",
        timeout: float | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            url: Endpoint URL.
            session: Shared client session. When None a short-lived session
                is opened for every request.
            items_key: Key of the item array in an object body. A bare JSON
                array is always accepted.
            item_factory: Converts each raw JSON item; items are returned
                unchanged when None.
            params: Extra query parameters sent with every request.
            headers: Extra request headers.
            limit_param: Query parameter name for the page size.
            offset_param: Query parameter name for the offset.
            timeout: Total request timeout in seconds. Defaults to
                ``INFINITE_LIST_HTTP_TIMEOUT``.
        """
        self._url = url
        self._session = session
        self._items_key = items_key
        self._item_factory = item_factory
        self._params = dict(params or {})
        self._headers = dict(headers or {})
        self._limit_param = limit_param
        self._offset_param = offset_param
        self._timeout = timeout if timeout is not None else get_settings().http_timeout

    async def __call__(self, *, limit: int, offset: int) -> list[T]:
        """Fetch one page.

        Raises:
            FetchError: On network errors, timeouts, non-2xx responses or
                bodies that do not contain an item array.
        """
        params = {
            **self._params,
            self._limit_param: str(limit),
            self._offset_param: str(offset),
        }
        try:
            if self._session is not None:
                data = await self._get_json(self._session, params)
            else:
                async with aiohttp.ClientSession() as session:
                    data = await self._get_json(session, params)
        except TimeoutError as ex:
            logger.warning(
                "http_page_request_timed_out", url=self._url, timeout=self._timeout
            )
            raise FetchError(
                f"Timed out after {self._timeout}s fetching {self._url}",
                original_error=ex,
            ) from ex
        except aiohttp.ClientError as ex:
            logger.warning("http_page_request_failed", url=self._url, error=str(ex))
            raise FetchError(
                f"Network error fetching {self._url}: {ex}", original_error=ex
            ) from ex

        raw_items = self._extract_items(data)
        if self._item_factory is None:
            return list(raw_items)
        try:
            return [self._item_factory(raw) for raw in raw_items]
        except (KeyError, TypeError, ValueError) as ex:
            raise FetchError(
                f"Malformed item in response from {self._url}: {ex}",
                original_error=ex,
            ) from ex

    async def _get_json(
        self, session: aiohttp.ClientSession, params: dict[str, str]
    ) -> Any:
        async with session.get(
            self._url,
            params=params,
            headers=self._headers,
            timeout=aiohttp.ClientTimeout(total=self._timeout),
        ) as response:
            if not 200 <= response.status < 300:
                error_text = await response.text()
                logger.warning(
                    "http_page_bad_status",
                    url=self._url,
                    status=response.status,
                    offset=params[self._offset_param],
                )
                raise FetchError(
                    f"Request to {self._url} failed with status {response.status}: {error_text}",
                    status=response.status,
                )
            try:
                return await response.json()
            except (aiohttp.ContentTypeError, ValueError) as ex:
                raise FetchError(
                    f"Response from {self._url} is not JSON",
                    status=response.status,
                    original_error=ex,
                ) from ex

    def _extract_items(self, data: Any) -> list[Any]:
        if isinstance(data, list):
            return data
        if isinstance(data, dict) and self._items_key is not None:
            items = data.get(self._items_key)
            if isinstance(items, list):
                return items
        raise FetchError(
            f"Response from {self._url} has no item list"
            + (f" under {self._items_key!r}" if self._items_key else "")
        )
