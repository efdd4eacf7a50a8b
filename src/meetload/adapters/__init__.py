"""Adapters - I/O implementations of ports."""

from .ics_file import FeedError, IcsFileAdapter

__all__ = [
    "FeedError",
    "IcsFileAdapter",
]
