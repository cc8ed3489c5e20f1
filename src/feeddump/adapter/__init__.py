"""Feed adapters: the upstream providers of fetched feeds."""

from feeddump.adapter.base import BaseFeedAdapter, FeedAdapter
from feeddump.adapter.normalize import normalize_entry, normalize_feed, summarize_channel
from feeddump.adapter.rss import RSSFeedAdapter

__all__ = [
    "BaseFeedAdapter",
    "FeedAdapter",
    "RSSFeedAdapter",
    "normalize_entry",
    "normalize_feed",
    "summarize_channel",
]
