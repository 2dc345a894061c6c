"""Shared pytest fixtures for infinite-list tests."""

from collections.abc import Iterator

import pytest

from infinite_list.adapters import DemoItemFactory, InMemoryItemSource
from infinite_list.core.config import get_settings
from infinite_list.core.states import PageState
from tests.mocks.fetchers import ControlledFetcher, MockFetcher


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Run every test against default settings.

    Removes INFINITE_LIST_* variables from the environment and clears the
    cached settings before and after the test.
    """
    for name in (
        "INFINITE_LIST_PAGE_SIZE",
        "INFINITE_LIST_HTTP_TIMEOUT",
        "INFINITE_LIST_RETRY_ATTEMPTS",
        "INFINITE_LIST_LOG_LEVEL",
        "INFINITE_LIST_LOG_JSON",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def demo_factory() -> DemoItemFactory:
    """Provide a DemoItemFactory whose ids start at 1."""
    return DemoItemFactory()


@pytest.fixture
def memory_source() -> InMemoryItemSource[int]:
    """Provide an in-memory source holding the integers 1..25."""
    return InMemoryItemSource(range(1, 26))


@pytest.fixture
def mock_fetcher() -> MockFetcher:
    """Provide a MockFetcher with no scripted pages (always empty)."""
    return MockFetcher()


@pytest.fixture
def controlled_fetcher() -> ControlledFetcher:
    """Provide a ControlledFetcher for holding fetches in flight."""
    return ControlledFetcher()


@pytest.fixture
def recorded_states() -> list[PageState]:
    """Provide a list to collect emitted states into via ``subscribe(list.append)``."""
    return []
