"""Mock implementations for testing."""

from tests.mocks.fetchers import ControlledFetcher, MockFetcher, PendingFetch

__all__ = ["ControlledFetcher", "MockFetcher", "PendingFetch"]
