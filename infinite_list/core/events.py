"""Commands a view can dispatch to a pagination controller."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ListEvent:
    """Base class for controller commands."""


@dataclass(frozen=True)
class LoadItemsEvent(ListEvent):
    """Start a new session from offset 0."""


@dataclass(frozen=True)
class LoadMoreItemsEvent(ListEvent):
    """Append the next page to the current session."""


@dataclass(frozen=True)
class RefreshItemsEvent(ListEvent):
    """Pull-to-refresh. Same effect as LoadItemsEvent."""
