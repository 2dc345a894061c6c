"""Tests for error types, classification and the retry wrapper."""

import asyncio

import pytest

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
from infinite_list.core.pagination import PaginationController
from infinite_list.core.states import FailedState
from tests.mocks.fetchers import MockFetcher


class TestHierarchy:
    """Tests for the exception hierarchy."""

    def test_package_errors_share_base(self) -> None:
        assert issubclass(ControllerDisposedError, InfiniteListError)
        assert issubclass(FetchError, InfiniteListError)
        assert issubclass(TransientError, FetchError)
        assert issubclass(PermanentError, FetchError)

    def test_fetch_error_attributes(self) -> None:
        original = OSError("socket closed")
        error = FetchError("could not fetch", status=502, original_error=original)
        assert str(error) == "could not fetch"
        assert error.status == 502
        assert error.original_error is original


class TestClassifyError:
    """Tests for classify_error function."""

    @pytest.mark.parametrize(
        ("status", "category"),
        [
            (400, ErrorCategory.INVALID_INPUT),
            (401, ErrorCategory.AUTH_FAILURE),
            (403, ErrorCategory.AUTH_FAILURE),
            (404, ErrorCategory.NOT_FOUND),
            (418, ErrorCategory.INVALID_INPUT),
            (429, ErrorCategory.RATE_LIMIT),
            (500, ErrorCategory.SERVICE_UNAVAILABLE),
            (503, ErrorCategory.SERVICE_UNAVAILABLE),
            (504, ErrorCategory.TIMEOUT),
        ],
    )
    def test_classifies_fetch_error_by_status(
        self, status: int, category: ErrorCategory
    ) -> None:
        assert classify_error(FetchError("failed", status=status)) == category

    def test_classifies_timeout_error(self) -> None:
        assert classify_error(TimeoutError("timed out")) == ErrorCategory.TIMEOUT

    def test_classifies_asyncio_timeout(self) -> None:
        assert classify_error(asyncio.TimeoutError()) == ErrorCategory.TIMEOUT

    def test_classifies_wrapped_timeout(self) -> None:
        error = FetchError("Timed out fetching feed", original_error=TimeoutError())
        assert classify_error(error) == ErrorCategory.TIMEOUT

    def test_classifies_connection_error(self) -> None:
        assert classify_error(ConnectionResetError()) == ErrorCategory.NETWORK

    def test_classifies_rate_limit_from_message(self) -> None:
        error = Exception("Rate limit exceeded, please retry")
        assert classify_error(error) == ErrorCategory.RATE_LIMIT

    def test_classifies_network_from_message(self) -> None:
        assert classify_error(Exception("Network error")) == ErrorCategory.NETWORK

    def test_classifies_not_found_from_message(self) -> None:
        assert classify_error(Exception("Feed not found")) == ErrorCategory.NOT_FOUND

    def test_unknown_error(self) -> None:
        assert classify_error(ValueError("something odd")) == ErrorCategory.UNKNOWN


class TestIsRetryable:
    """Tests for is_retryable function."""

    @pytest.mark.parametrize(
        "category",
        [
            ErrorCategory.RATE_LIMIT,
            ErrorCategory.TIMEOUT,
            ErrorCategory.NETWORK,
            ErrorCategory.SERVICE_UNAVAILABLE,
        ],
    )
    def test_transient_categories(self, category: ErrorCategory) -> None:
        assert is_retryable(category) is True

    @pytest.mark.parametrize(
        "category",
        [
            ErrorCategory.INVALID_INPUT,
            ErrorCategory.AUTH_FAILURE,
            ErrorCategory.NOT_FOUND,
            ErrorCategory.UNKNOWN,
        ],
    )
    def test_permanent_categories(self, category: ErrorCategory) -> None:
        assert is_retryable(category) is False


class TestTransientAndPermanentErrors:
    """Tests for TransientError and PermanentError."""

    def test_transient_from_exception_classifies(self) -> None:
        original = TimeoutError("timed out")
        error = TransientError.from_exception(original)
        assert error.category == ErrorCategory.TIMEOUT
        assert error.original_error is original

    def test_transient_keeps_status(self) -> None:
        original = FetchError("busy", status=503)
        error = TransientError.from_exception(original)
        assert error.status == 503

    def test_permanent_from_exception_uses_provided_category(self) -> None:
        error = PermanentError.from_exception(
            Exception("odd"), category=ErrorCategory.INVALID_INPUT
        )
        assert error.category == ErrorCategory.INVALID_INPUT
        assert str(error) == "odd"


class TestWithRetry:
    """Tests for the with_retry fetch wrapper."""

    @pytest.mark.asyncio
    async def test_returns_page_on_success(self) -> None:
        fetcher = MockFetcher([["a", "b"]])
        fetch = with_retry(fetcher, base_delay=0)

        assert await fetch(limit=2, offset=0) == ["a", "b"]
        assert fetcher.call_count == 1

    @pytest.mark.asyncio
    async def test_retries_transient_errors_at_same_offset(self) -> None:
        fetcher = MockFetcher([ConnectionError("reset"), TimeoutError(), ["a"]])
        fetch = with_retry(fetcher, max_retries=3, base_delay=0.001)

        assert await fetch(limit=5, offset=15) == ["a"]
        assert fetcher.calls == [(5, 15), (5, 15), (5, 15)]

    @pytest.mark.asyncio
    async def test_raises_transient_after_max_retries(self) -> None:
        fetcher = MockFetcher([ConnectionError("reset")] * 3)
        fetch = with_retry(fetcher, max_retries=2, base_delay=0.001)

        with pytest.raises(TransientError) as exc_info:
            await fetch(limit=5, offset=0)

        assert exc_info.value.category == ErrorCategory.NETWORK
        assert fetcher.call_count == 3

    @pytest.mark.asyncio
    async def test_permanent_error_is_not_retried(self) -> None:
        fetcher = MockFetcher([FetchError("denied", status=401), ["never"]])
        fetch = with_retry(fetcher, max_retries=3, base_delay=0.001)

        with pytest.raises(PermanentError) as exc_info:
            await fetch(limit=5, offset=0)

        assert exc_info.value.category == ErrorCategory.AUTH_FAILURE
        assert fetcher.call_count == 1

    def test_rejects_negative_retries(self) -> None:
        with pytest.raises(ValueError):
            with_retry(MockFetcher(), max_retries=-1)

    @pytest.mark.asyncio
    async def test_default_retries_from_environment(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("INFINITE_LIST_RETRY_ATTEMPTS", "1")
        fetcher = MockFetcher([ConnectionError("reset")] * 3)
        fetch = with_retry(fetcher, base_delay=0.001)

        with pytest.raises(TransientError):
            await fetch(limit=5, offset=0)

        assert fetcher.call_count == 2

    @pytest.mark.asyncio
    async def test_controller_sees_only_final_failure(self) -> None:
        fetcher = MockFetcher([ConnectionError("reset")] * 2)
        controller = PaginationController(
            with_retry(fetcher, max_retries=1, base_delay=0.001)
        )

        await controller.load()

        state = controller.state
        assert isinstance(state, FailedState)
        assert state.error.type_name == "TransientError"
        assert state.error.message == "reset"
