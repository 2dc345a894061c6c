"""Item sources that satisfy the ItemFetcher protocol."""

from infinite_list.adapters.demo_items import DemoItem, DemoItemFactory
from infinite_list.adapters.http_source import HttpItemSource
from infinite_list.adapters.memory_source import InMemoryItemSource

__all__ = [
    "DemoItem",
    "DemoItemFactory",
    "HttpItemSource",
    "InMemoryItemSource",
]
