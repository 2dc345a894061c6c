"""Core pagination logic.

Platform-agnostic state machine, states, events, errors, configuration and
logging. Nothing in here knows about any UI toolkit.
"""

from infinite_list.core.config import ListSettings, get_settings
from infinite_list.core.errors import (
    ControllerDisposedError,
    ErrorCategory,
    FetchError,
    InfiniteListError,
    PermanentError,
    TransientError,
    classify_error,
    is_retryable,
    with_retry,
)
from infinite_list.core.events import (
    ListEvent,
    LoadItemsEvent,
    LoadMoreItemsEvent,
    RefreshItemsEvent,
)
from infinite_list.core.logging import configure_logging, get_logger
from infinite_list.core.pagination import PaginationController
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

__all__ = [
    # Controller
    "PaginationController",
    # States
    "ErrorInfo",
    "ExhaustedState",
    "FailedState",
    "InitialState",
    "LoadedState",
    "LoadingState",
    "PageState",
    "PageStatus",
    # Events
    "ListEvent",
    "LoadItemsEvent",
    "LoadMoreItemsEvent",
    "RefreshItemsEvent",
    # Error handling
    "ControllerDisposedError",
    "ErrorCategory",
    "FetchError",
    "InfiniteListError",
    "PermanentError",
    "TransientError",
    "classify_error",
    "is_retryable",
    "with_retry",
    # Configuration
    "ListSettings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
]
