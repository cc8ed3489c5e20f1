"""
feeddump - Save RSS and Atom feed entries offline.

feeddump fetches a set of configured feeds, turns every entry it has not
dumped before into a standalone HTML page, and remembers per feed where
it stopped.

Key Features:
- Incremental: a per-feed checkpoint fingerprint marks the newest dumped entry
- Never drops entries: when the checkpoint is lost or unmatched, everything is dumped
- Atomic checkpoint saves, one per run
- Pluggable renderers and feed adapters

Quick Start:
    >>> from pathlib import Path
    >>> from feeddump import FeedConfig, FeedRunner, FileCheckpointStore
    >>> config = FeedConfig(source={"blog": "https://example.com/rss.xml"})
    >>> runner = FeedRunner(
    ...     config,
    ...     FileCheckpointStore(Path("~/.local/share/feeddump/collections.json").expanduser()),
    ...     Path("~/feeddump").expanduser(),
    ... )
    >>> # result = asyncio.run(runner.run())
"""

__version__ = "0.3.0"

# Feed adapters
from feeddump.adapter.base import BaseFeedAdapter, FeedAdapter
from feeddump.adapter.rss import RSSFeedAdapter

# Core
from feeddump.core.checkpoint import (
    CheckpointCollection,
    CheckpointStore,
    FileCheckpointStore,
    MemoryCheckpointStore,
    load_collection,
)
from feeddump.core.config import FeedConfig, Settings, get_settings, load_config
from feeddump.core.exceptions import (
    CheckpointDumpError,
    CheckpointError,
    CheckpointNotFoundError,
    CheckpointParseError,
    ConfigNotFoundError,
    ConfigurationError,
    FeedDumpError,
    FeedError,
    UnsupportedFormatError,
)
from feeddump.core.runner import FeedRunner, FeedRunStats, RunResult
from feeddump.core.sync import SyncResult, find_boundary, sync_feed

# Models
from feeddump.models.entry import Entry, FeedSummary, FetchedFeed

# Rendering
from feeddump.render import HTMLRenderer, get_renderer

# Fingerprints
from feeddump.utils.keys import fingerprint

__all__ = [
    "__version__",
    # Adapters
    "BaseFeedAdapter",
    "FeedAdapter",
    "RSSFeedAdapter",
    # Checkpoints
    "CheckpointCollection",
    "CheckpointStore",
    "FileCheckpointStore",
    "MemoryCheckpointStore",
    "load_collection",
    # Config
    "FeedConfig",
    "Settings",
    "get_settings",
    "load_config",
    # Errors
    "CheckpointDumpError",
    "CheckpointError",
    "CheckpointNotFoundError",
    "CheckpointParseError",
    "ConfigNotFoundError",
    "ConfigurationError",
    "FeedDumpError",
    "FeedError",
    "UnsupportedFormatError",
    # Run
    "FeedRunner",
    "FeedRunStats",
    "RunResult",
    "SyncResult",
    "find_boundary",
    "sync_feed",
    # Models
    "Entry",
    "FeedSummary",
    "FetchedFeed",
    # Rendering
    "HTMLRenderer",
    "get_renderer",
    "fingerprint",
]
