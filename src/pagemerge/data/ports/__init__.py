"""Data ports."""

from pagemerge.data.ports.source import SortedPageSource

__all__ = ["SortedPageSource"]
