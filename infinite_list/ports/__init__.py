"""Ports (interfaces) for the package.

Protocol definitions for the collaborators an application supplies to a
pagination controller.
"""

from infinite_list.ports.fetchers import ItemFetcher

__all__ = ["ItemFetcher"]
