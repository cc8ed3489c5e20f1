"""feeddump data models."""

from feeddump.models.base import FeedDumpModel
from feeddump.models.entry import Entry, FeedSummary, FetchedFeed

__all__ = [
    "Entry",
    "FeedDumpModel",
    "FeedSummary",
    "FetchedFeed",
]
