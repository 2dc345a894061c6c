"""Error types and fetch retry helpers.

The pagination controller never interprets errors: whatever the fetch
function raises ends up verbatim in a ``FailedState``. This module holds the
exceptions the package raises itself, plus an opt-in retry wrapper that an
application can put around its fetch function so transient failures are
retried before the controller ever sees them.

Example:
    from infinite_list.core.errors import with_retry

    controller = PaginationController(
        with_retry(fetch_articles, max_retries=2),
        page_size=20,
    )
"""

import asyncio
from collections.abc import Sequence
from enum import Enum, auto
from typing import TYPE_CHECKING, TypeVar

from infinite_list.core.config import get_settings
from infinite_list.core.logging import get_logger

if TYPE_CHECKING:
    from infinite_list.ports.fetchers import ItemFetcher

logger = get_logger(__name__)

T = TypeVar("T")


class InfiniteListError(Exception):
    """Base class for errors raised by this package."""


class ControllerDisposedError(InfiniteListError):
    """A command was sent to a controller that has already been disposed."""


class FetchError(InfiniteListError):
    """A page could not be fetched.

    Raised by the bundled item sources so that the error carried in a failed
    state has a readable message.

    Attributes:
        status: HTTP status code of the failed response, if there was one.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.original_error = original_error


class ErrorCategory(Enum):
    """Classification of fetch failures for retry decisions."""

    # Transient errors - safe to retry
    RATE_LIMIT = auto()
    TIMEOUT = auto()
    NETWORK = auto()
    SERVICE_UNAVAILABLE = auto()

    # Permanent errors - should not retry
    INVALID_INPUT = auto()
    AUTH_FAILURE = auto()
    NOT_FOUND = auto()
    UNKNOWN = auto()


RETRYABLE_CATEGORIES = {
    ErrorCategory.RATE_LIMIT,
    ErrorCategory.TIMEOUT,
    ErrorCategory.NETWORK,
    ErrorCategory.SERVICE_UNAVAILABLE,
}

_STATUS_CATEGORIES = {
    400: ErrorCategory.INVALID_INPUT,
    401: ErrorCategory.AUTH_FAILURE,
    403: ErrorCategory.AUTH_FAILURE,
    404: ErrorCategory.NOT_FOUND,
    408: ErrorCategory.TIMEOUT,
    422: ErrorCategory.INVALID_INPUT,
    429: ErrorCategory.RATE_LIMIT,
    502: ErrorCategory.SERVICE_UNAVAILABLE,
    503: ErrorCategory.SERVICE_UNAVAILABLE,
    504: ErrorCategory.TIMEOUT,
}


class TransientError(FetchError):
    """Fetch failure that was still failing after all retries.

    Attributes:
        category: The specific type of transient error.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        status: int | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message, status=status, original_error=original_error)
        self.category = category

    @classmethod
    def from_exception(
        cls, ex: Exception, category: ErrorCategory | None = None
    ) -> "TransientError":
        """Create a TransientError from an existing exception."""
        if category is None:
            category = classify_error(ex)
        return cls(
            message=str(ex),
            category=category,
            status=getattr(ex, "status", None),
            original_error=ex,
        )


class PermanentError(FetchError):
    """Fetch failure that should not be retried.

    Attributes:
        category: The specific type of permanent error.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        status: int | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message, status=status, original_error=original_error)
        self.category = category

    @classmethod
    def from_exception(
        cls, ex: Exception, category: ErrorCategory | None = None
    ) -> "PermanentError":
        """Create a PermanentError from an existing exception."""
        if category is None:
            category = classify_error(ex)
        return cls(
            message=str(ex),
            category=category,
            status=getattr(ex, "status", None),
            original_error=ex,
        )


def classify_error(error: Exception) -> ErrorCategory:
    """Classify an exception into an error category.

    A ``FetchError`` with an HTTP status is classified by that status, and one
    wrapping a timeout as ``TIMEOUT``. Other exceptions are classified by their
    type and message.

    Args:
        error: The exception to classify.

    Returns:
        The ErrorCategory that best matches the error.
    """
    if isinstance(error, FetchError) and error.status is not None:
        if error.status in _STATUS_CATEGORIES:
            return _STATUS_CATEGORIES[error.status]
        if error.status >= 500:
            return ErrorCategory.SERVICE_UNAVAILABLE
        if error.status >= 400:
            return ErrorCategory.INVALID_INPUT

    cause = error.original_error if isinstance(error, FetchError) else None
    if isinstance(error, TimeoutError) or isinstance(cause, TimeoutError):
        return ErrorCategory.TIMEOUT
    if isinstance(error, ConnectionError):
        return ErrorCategory.NETWORK

    error_str = str(error).lower()

    if "connection" in error_str or "network" in error_str:
        return ErrorCategory.NETWORK
    if "rate" in error_str and "limit" in error_str:
        return ErrorCategory.RATE_LIMIT
    if "too many requests" in error_str:
        return ErrorCategory.RATE_LIMIT
    if "service unavailable" in error_str or "bad gateway" in error_str:
        return ErrorCategory.SERVICE_UNAVAILABLE
    if "unauthorized" in error_str or "forbidden" in error_str:
        return ErrorCategory.AUTH_FAILURE
    if "not found" in error_str:
        return ErrorCategory.NOT_FOUND
    if "invalid" in error_str or "bad request" in error_str:
        return ErrorCategory.INVALID_INPUT

    return ErrorCategory.UNKNOWN


def is_retryable(category: ErrorCategory) -> bool:
    """Check if an error category is safe to retry.

    Args:
        category: The error category to check.

    Returns:
        True if the error is transient and can be retried.
    """
    return category in RETRYABLE_CATEGORIES


def with_retry(
    fetch: "ItemFetcher[T]",
    *,
    max_retries: int | None = None,
    base_delay: float = 0.5,
    max_delay: float = 10.0,
    exponential_base: float = 2.0,
) -> "ItemFetcher[T]":
    """Wrap a fetch function so transient failures are retried with backoff.

    Args:
        fetch: The application's fetch function.
        max_retries: Maximum number of retry attempts per page. Defaults to
            the configured ``INFINITE_LIST_RETRY_ATTEMPTS`` (3).
        base_delay: Initial delay between retries (seconds).
        max_delay: Maximum delay between retries (seconds).
        exponential_base: Base for exponential backoff calculation.

    Returns:
        A fetch function with the same signature.

    Raises:
        ValueError: If max_retries is negative.
    """
    if max_retries is None:
        max_retries = get_settings().retry_attempts
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")

    async def fetch_with_retry(*, limit: int, offset: int) -> Sequence[T]:
        for attempt in range(max_retries + 1):
            try:
                return await fetch(limit=limit, offset=offset)
            except Exception as ex:
                category = classify_error(ex)

                if not is_retryable(category):
                    logger.warning(
                        "permanent_fetch_error",
                        category=category.name,
                        offset=offset,
                        error=str(ex),
                    )
                    raise PermanentError.from_exception(ex, category) from ex

                if attempt >= max_retries:
                    logger.error(
                        "max_retries_exceeded",
                        category=category.name,
                        attempts=attempt + 1,
                        offset=offset,
                        error=str(ex),
                    )
                    raise TransientError.from_exception(ex, category) from ex

                delay = min(base_delay * (exponential_base**attempt), max_delay)
                logger.warning(
                    "retrying_fetch_after_error",
                    category=category.name,
                    attempt=attempt + 1,
                    max_retries=max_retries,
                    delay_seconds=delay,
                    offset=offset,
                    error=str(ex),
                )
                await asyncio.sleep(delay)

        raise RuntimeError("Unexpected state in fetch_with_retry")

    return fetch_with_retry
