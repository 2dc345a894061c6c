"""State machine for paginated ("infinite") lists."""

from infinite_list.core import (
    ErrorInfo,
    ExhaustedState,
    FailedState,
    InitialState,
    LoadedState,
    LoadingState,
    LoadItemsEvent,
    LoadMoreItemsEvent,
    PageState,
    PageStatus,
    PaginationController,
    RefreshItemsEvent,
)
from infinite_list.ports import ItemFetcher

__version__ = "0.1.0"

__all__ = [
    "ErrorInfo",
    "ExhaustedState",
    "FailedState",
    "InitialState",
    "ItemFetcher",
    "LoadItemsEvent",
    "LoadMoreItemsEvent",
    "LoadedState",
    "LoadingState",
    "PageState",
    "PageStatus",
    "PaginationController",
    "RefreshItemsEvent",
]
